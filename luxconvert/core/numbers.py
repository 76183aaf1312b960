from __future__ import annotations

import math
import re
from typing import Optional

_NUM_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def is_number(tok: str) -> bool:
    return bool(_NUM_RE.match(tok))


def parse_float(tok: str, comma_decimal: bool = False) -> float:
    """Parse a numeric token; raises ValueError for anything that is not a plain finite number."""
    t = tok.strip()
    if comma_decimal:
        t = t.replace(",", ".")
    if not is_number(t):
        raise ValueError(f"not a number: {tok!r}")
    v = float(t)
    if not math.isfinite(v):
        raise ValueError(f"not a finite number: {tok!r}")
    return v


def format_number(value: float, precision: Optional[int] = None, comma_decimal: bool = False) -> str:
    """
    Render a float for a text photometric file.

    precision=None gives the shortest string that parses back to the same float,
    with a trailing ".0" dropped so integral values print as integers.
    """
    v = float(value)
    if v == 0.0:
        v = 0.0  # no "-0"
    if precision is None:
        s = repr(v)
        if s.endswith(".0"):
            s = s[:-2]
    else:
        s = f"{v:.{int(precision)}f}"
        if s.startswith("-") and float(s) == 0.0:
            s = s[1:]
    if comma_decimal:
        s = s.replace(".", ",")
    return s
