"""
Format fingerprinting.

Each detector looks at its own format only and returns (confidence, version).
Confidence is a sum of weighted structural signals clamped to 1.0; a score at
or below the detector's threshold keeps its confidence but reports no version.
"""

from __future__ import annotations

import re
from typing import List, Tuple

from luxconvert.core.numbers import is_number
from luxconvert.parser.text import decode_text, split_lines


IES_THRESHOLD = 0.5
LDT_THRESHOLD = 0.5
CIE_THRESHOLD = 0.3

IES_MAGIC = (
    ("IESNA:LM-63-2002", 0.95, "LM-63-2002"),
    ("IESNA:LM-63-1995", 0.95, "LM-63-1995"),
    ("IESNA91", 0.90, "LM-63-1995"),
)

_DATE_RE = re.compile(r"\d{1,4}[./-]\d{1,2}[./-]\d{1,4}")


def _lines(data: bytes) -> List[str]:
    return split_lines(decode_text(data))


def is_numeric_line(line: str, comma_decimal: bool = False) -> bool:
    toks = line.split()
    if not toks:
        return False
    if comma_decimal:
        toks = [t.replace(",", ".") for t in toks]
    return all(is_number(t) for t in toks)


def _has_comma_decimal(line: str) -> bool:
    s = line.strip()
    return "," in s and is_number(s.replace(",", "."))


def is_date_like(line: str) -> bool:
    s = line.strip()
    if not s:
        return False
    return "/" in s or bool(_DATE_RE.search(s))


def detect_ies(data: bytes) -> Tuple[float, str]:
    if not data.strip():
        return 0.0, ""
    lines = _lines(data)
    first = next((ln.strip() for ln in lines if ln.strip()), "")
    for prefix, confidence, version in IES_MAGIC:
        if first.upper().startswith(prefix):
            return confidence, version

    score = 0.0
    if any(ln.strip().upper().startswith("TILT=") for ln in lines[:20]):
        score += 0.3
    keyword_lines = sum(1 for ln in lines if ln.strip().startswith("[") and "]" in ln)
    score += min(keyword_lines, 3) * 0.1
    numeric_lines = sum(1 for ln in lines[:50] if is_numeric_line(ln))
    if numeric_lines > 5:
        score += 0.2

    score = min(score, 1.0)
    if score > IES_THRESHOLD:
        return score, "LM-63-2002"
    return score, ""


def detect_ldt(data: bytes) -> Tuple[float, str]:
    if not data.strip():
        return 0.0, ""
    lines = _lines(data)
    if len(lines) < 10:
        return 0.0, ""

    score = 0.0
    if ";" in lines[0]:
        score += 0.2
    if sum(1 for ln in lines[1:7] if is_numeric_line(ln, comma_decimal=True)) >= 4:
        score += 0.3
    if lines[7].strip() and lines[8].strip() and not is_numeric_line(lines[8], comma_decimal=True):
        score += 0.1
    if any(is_date_like(lines[i]) for i in (11, 12) if i < len(lines)):
        score += 0.2
    if sum(1 for ln in lines[20:100] if is_numeric_line(ln, comma_decimal=True) and len(ln.split()) == 1) > 20:
        score += 0.2
    if sum(1 for ln in lines if _has_comma_decimal(ln)) > 5:
        score += 0.1

    score = min(score, 1.0)
    if score > LDT_THRESHOLD:
        return score, "1.0"
    return score, ""


def detect_cie(data: bytes) -> Tuple[float, str]:
    if not data.strip():
        return 0.0, ""
    lines = [ln for ln in _lines(data) if ln.strip()]
    if not lines:
        return 0.0, ""

    score = 0.0
    fields = lines[0].split()
    if len(fields) >= 4 and all(is_number(f) and "." not in f for f in fields[:3]):
        score += 0.4
        if fields[0] == "1":
            score += 0.2
        if not is_number(fields[3]):
            score += 0.1

    data_lines = lines[1:21]
    valid = 0
    for ln in data_lines:
        toks = ln.split()
        if 16 <= len(toks) <= 17:
            valid += 1
            score += 0.02
            if all(is_number(t) for t in toks):
                score += 0.02
    if data_lines and valid / len(data_lines) > 0.8:
        score += 0.2

    header = lines[0].lower()
    if "led" in header or "lm" in header or re.search(r"\d\s*w\b", header):
        score += 0.1
    if ".cie" in header:
        score += 0.1

    score = min(score, 1.0)
    if score > CIE_THRESHOLD:
        return score, "CIE i-table"
    return score, ""
