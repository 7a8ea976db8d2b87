"""Parsing of pt-BR formatted numeric cells ("1.234,56").

Malformed cells never raise: they count as zero so that one bad value does
not abort aggregation of an otherwise valid file.
"""

import math
import re

_PLACEHOLDER = "-"
_NUMERIC_RE = re.compile(r"^[+-]?(\d{1,3}(\.\d{3})+|\d+)(,\d+)?$")


def _clean(raw: object) -> str:
    if raw is None:
        return ""
    return str(raw).strip()


def parse_number(raw: object) -> float:
    """Parse a locale-formatted number, returning 0.0 for anything unusable."""
    text = _clean(raw)
    if not text or text == _PLACEHOLDER:
        return 0.0
    candidate = text.replace(".", "").replace(",", ".", 1)
    if "_" in candidate:
        return 0.0
    try:
        value = float(candidate)
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def is_numeric(raw: object) -> bool:
    """True when the cell holds a well-formed pt-BR number."""
    return bool(_NUMERIC_RE.match(_clean(raw)))
