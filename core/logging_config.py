"""
Logging setup shared by the API process and the CLI scripts.
"""
import logging
import re
import sys

from core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class SensitiveDataFilter(logging.Filter):
    """Mask API keys that end up in log messages (e.g. provider error text)."""

    PATTERNS = [
        (re.compile(r"sk-[A-Za-z0-9_\-]{8,}"), "sk-***"),
        (re.compile(r"(api[_-]?key[\"']?\s*[:=]\s*[\"']?)([^\"'\s&]+)", re.IGNORECASE), r"\1***"),
        (re.compile(r"Bearer\s+[^\s\"]+"), "Bearer ***"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        msg = record.getMessage()
        masked = msg
        for pattern, replacement in self.PATTERNS:
            masked = pattern.sub(replacement, masked)
        if masked != msg:
            record.msg = masked
            record.args = None
        return True


def setup_logging(level: str | None = None) -> None:
    root = logging.getLogger()
    root.setLevel((level or settings.log_level).upper())

    for handler in root.handlers:
        if getattr(handler, "_projectforge", False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(SensitiveDataFilter())
    handler._projectforge = True
    root.addHandler(handler)

    # the OpenAI client logs full request bodies at DEBUG
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
