import base64
import binascii
import re
from typing import Tuple

_DATA_URI = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?:;[\w-]+=[\w.-]+)*;base64,(?P<data>.+)$", re.DOTALL)


def parse_data_uri(uri: str) -> Tuple[str, str]:
    """Split a base64 data URI into (mime type, base64 payload).

    Raises ValueError if the URI is not base64-encoded or the payload does not decode.
    """
    m = _DATA_URI.match((uri or "").strip())
    if not m:
        raise ValueError("not a base64 data URI")
    payload = m.group("data").strip()
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"invalid base64 payload: {e}") from e
    return m.group("mime").lower(), payload
