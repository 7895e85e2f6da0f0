from __future__ import annotations
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_TPL_DIR = BASE_DIR / "templates"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    openai_api_key: str
    llm_model: str = "gpt-4o-mini"
    audio_model: str = "gpt-4o-audio-preview"
    llm_temperature: float = 0.2
    prompt_version: str = "v1.0"

    database_url: str = "sqlite:///./projectforge.db"
    database_echo: bool = False

    log_level: str = "INFO"
    token_window_hours: int = 24

    template_path: str = str(DEFAULT_TPL_DIR)

    @property
    def template_dir(self) -> str:
        p = Path(self.template_path)
        if not p.is_absolute():
            p = (BASE_DIR / p).resolve()
        return str(p)


settings = Settings()
