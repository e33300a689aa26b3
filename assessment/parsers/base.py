import math
import re
from typing import Any, Optional

# Prefijo decimal inicial: "98.6", "98.6F", " 120", ".5"
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_EMPTY_LITERALS = ("", "null", "undefined")


def _is_empty_literal(val: str) -> bool:
    return val.strip() in _EMPTY_LITERALS


def _leading_number(val: str) -> Optional[float]:
    """Return the leading decimal number of ``val`` or None."""
    m = _NUMBER_PREFIX.match(val.strip())
    if not m:
        return None
    num = float(m.group(0))
    return num if math.isfinite(num) else None


def _coerce_number(val: Any) -> Optional[float]:
    """Numero (int/float) o string numerico -> float. Todo lo demas -> None."""
    if val is None or isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        try:
            num = float(val)
        except OverflowError:
            # int de JSON demasiado grande para un float
            return None
        return None if math.isnan(num) else num
    if isinstance(val, str):
        if _is_empty_literal(val):
            return None
        return _leading_number(val)
    return None
