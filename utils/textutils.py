import re
import time

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    return _NON_SLUG.sub("-", (text or "").lower()).strip("-")


def now_ms() -> int:
    return int(time.time() * 1000)
