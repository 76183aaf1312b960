from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from luxconvert.core.numbers import is_number
from luxconvert.errors import FormatSyntaxError, syntax_error
from luxconvert.parser.text import decode_text, split_lines
from luxconvert.photometry.interp import standard_c_plane_angles, standard_gamma_angles

log = logging.getLogger(__name__)


NUM_GAMMA = 19
NUM_C_PLANES = 16


@dataclass
class CIEHeader:
    format_type: int
    symmetry_type: int
    reserved: int
    description: str


@dataclass
class CIEFile:
    header: CIEHeader
    gamma_angles: List[float]
    c_angles: List[float]
    # intensities[gamma][c] in cd per 1000 lm, as stored
    intensities: List[List[float]]


def _as_int(tok: str) -> Optional[int]:
    if not is_number(tok):
        return None
    v = float(tok)
    if v != int(v):
        return None
    return int(v)


def parse_header_line(line: str, line_no: int = 1) -> CIEHeader:
    parts = line.strip().split(None, 3)
    ints = [_as_int(p) for p in parts[:3]]
    if len(parts) < 3 or any(v is None for v in ints):
        raise syntax_error(
            "CIE_INVALID_HEADER",
            "header must start with three integers: format type, symmetry type, reserved",
            line_no=line_no,
            snippet=line,
        )
    description = parts[3].strip() if len(parts) > 3 else ""
    return CIEHeader(format_type=ints[0], symmetry_type=ints[1], reserved=ints[2], description=description)  # type: ignore[arg-type]


def _grid_from_rows(rows: List[List[float]], first_line_no: int) -> List[List[float]]:
    if len(rows) == NUM_GAMMA and all(len(r) == NUM_C_PLANES for r in rows):
        return rows
    if len(rows) == NUM_GAMMA and all(len(r) == NUM_C_PLANES + 1 for r in rows):
        log.debug("dropping duplicated C=360 column")
        return [r[:NUM_C_PLANES] for r in rows]

    flat = [v for r in rows for v in r]
    for width in (NUM_C_PLANES, NUM_C_PLANES + 1):
        if len(flat) == NUM_GAMMA * width:
            log.debug("re-wrapping %d values into %d rows of %d", len(flat), NUM_GAMMA, width)
            return [flat[g * width : g * width + NUM_C_PLANES] for g in range(NUM_GAMMA)]

    raise syntax_error(
        "CIE_GRID_SIZE",
        (
            f"expected {NUM_GAMMA} rows of {NUM_C_PLANES} (or {NUM_C_PLANES + 1}) intensities, "
            f"found {len(rows)} rows and {len(flat)} values"
        ),
        line_no=first_line_no,
    )


def parse_cie_text(text: str) -> CIEFile:
    lines = split_lines(text)
    idx0 = 0
    while idx0 < len(lines) and not lines[idx0].strip():
        idx0 += 1
    if idx0 >= len(lines):
        raise FormatSyntaxError("CIE_EMPTY", "CIE file is empty")

    header = parse_header_line(lines[idx0], line_no=idx0 + 1)
    idx0 += 1
    first_data_line = idx0 + 1

    rows: List[List[float]] = []
    for i in range(idx0, len(lines)):
        toks = lines[i].split()
        if not toks:
            continue
        for t in toks:
            if not is_number(t):
                raise syntax_error("CIE_NON_NUMERIC", f"non-numeric intensity '{t}'", line_no=i + 1, snippet=lines[i])
        rows.append([float(t) for t in toks])

    return CIEFile(
        header=header,
        gamma_angles=standard_gamma_angles(),
        c_angles=standard_c_plane_angles(),
        intensities=_grid_from_rows(rows, first_data_line),
    )


def parse_cie_bytes(data: bytes) -> CIEFile:
    return parse_cie_text(decode_text(data))


_FLUX_SUFFIX_RE = re.compile(r"^([0-9]+(?:[.,][0-9]+)?)lms?$", re.IGNORECASE)
_WATT_RE = re.compile(r"^([0-9]+(?:[.,][0-9]+)?)W$", re.IGNORECASE)


def _to_float(s: str) -> Optional[float]:
    s = s.replace(",", ".")
    return float(s) if is_number(s) else None


def extract_manufacturer(description: str) -> str:
    parts = description.split()
    return parts[0] if parts else ""


def extract_catalog_number(description: str) -> str:
    parts = description.split()
    for p in parts:
        if len(p) > 1 and p.upper().endswith("W"):
            return p
    for p in parts:
        if "LED" in p.upper():
            return p
    return parts[1] if len(parts) > 1 else ""


def extract_luminous_flux(description: str) -> float:
    parts = description.split()
    for i, p in enumerate(parts):
        if p.lower() in ("lm", "lms") and i > 0:
            v = _to_float(parts[i - 1])
            if v is not None:
                return v
        m = _FLUX_SUFFIX_RE.match(p)
        if m:
            v = _to_float(m.group(1))
            if v is not None:
                return v
    return 0.0


def extract_wattage(description: str) -> float:
    for p in description.split():
        m = _WATT_RE.match(p)
        if m:
            v = _to_float(m.group(1))
            if v is not None:
                return v
    return 0.0
