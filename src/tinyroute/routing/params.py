"""Path parameter decoding.

Captured values are percent-decoded before they reach handlers. Empty
captures (an optional greedy or wildcard group that consumed nothing)
decode to ``None`` so handlers can fall back to defaults.
"""

import re
from urllib.parse import unquote

from tinyroute.errors import ParamDecodeError

# "%" not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_param(raw: str | None) -> str | None:
    """Percent-decode a captured parameter value.

    Returns ``None`` for ``None`` or ``""``. ``+`` is left alone.
    Raises ``ParamDecodeError`` for a malformed escape or an escape
    sequence that is not valid UTF-8.
    """
    if not raw:
        return None
    if _MALFORMED_ESCAPE.search(raw):
        raise ParamDecodeError(raw)
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError as exc:
        raise ParamDecodeError(raw) from exc


def decode_params(raw: dict[str, str | None]) -> dict[str, str | None]:
    """Decode every captured value of a match."""
    return {name: decode_param(value) for name, value in raw.items()}
