import json

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from core.config import settings


def _tojson(obj) -> str:
    # stable key order keeps rendered prompts identical across runs
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


_env = Environment(
    loader=FileSystemLoader(settings.template_dir),
    autoescape=select_autoescape([]),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
_env.filters["tojson"] = _tojson


def render_template(name: str, **data) -> str:
    tpl = _env.get_template(name)
    return tpl.render(**data)
