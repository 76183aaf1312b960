"""
EULUMDAT (.ldt) reader.

Every value sits on its own line and meaning is purely positional:
- Line 1: Company identification ("manufacturer;extra" is common)
- Line 2: Type indicator (0=point without symmetry, 1=point, 2=linear, 3=point with other symmetry)
- Line 3: Symmetry indicator (0-4)
- Line 4: Number of C-planes (Mc)
- Line 5: Distance between C-planes (Dc)
- Line 6: Number of luminous intensities per C-plane (Ng)
- Line 7: Distance between luminous intensities (Dg)
- Line 8: Measurement report number
- Line 9: Luminaire name
- Line 10: Luminaire number
- Line 11: File name
- Line 12: Date/user
- Lines 13-25: Length, width, height, luminous length, luminous width,
  luminous height at C0/C90/C180/C270 (all mm), DFF %, LORL %,
  conversion factor, tilt of luminaire during measurement
- Line 26: Reserved
- Line 27: DR index
- Line 28: Number of lamp sets (n)
- Next 6n lines: count, type, total flux, colour temperature, CRI group, wattage
- Then Mc C-plane angles, Ng gamma angles, Mc x Ng intensities (C-plane major)

Comma decimals are accepted everywhere.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from luxconvert.core.numbers import parse_float
from luxconvert.errors import FormatSyntaxError, SemanticError, syntax_error
from luxconvert.parser.text import decode_text, split_lines

log = logging.getLogger(__name__)


HEADER_LINES = 12
GEOMETRY_LINES = 13
LAMP_SET_LINES = 6
ELECTRICAL_START = HEADER_LINES + GEOMETRY_LINES + 1  # DR index line, after the reserved line

TYPE_NAMES = {0: "point-asymmetric", 1: "point", 2: "linear", 3: "point-other"}


@dataclass
class LDTLampSet:
    num_lamps: int
    lamp_type: str
    total_flux: float
    color_temperature: str
    color_rendering: str
    wattage: float


@dataclass
class LDTHeader:
    company: str
    type_indicator: int
    symmetry: int
    num_c_planes: int
    c_plane_spacing: float
    num_g_angles: int
    g_angle_spacing: float
    report_number: str
    luminaire_name: str
    luminaire_number: str
    filename: str
    date_user: str


@dataclass
class LDTGeometry:
    """Dimensions in millimetres, as stored."""

    length_mm: float = 0.0
    width_mm: float = 0.0
    height_mm: float = 0.0
    luminous_length_mm: float = 0.0
    luminous_width_mm: float = 0.0
    luminous_height_c0_mm: float = 0.0
    luminous_height_c90_mm: float = 0.0
    luminous_height_c180_mm: float = 0.0
    luminous_height_c270_mm: float = 0.0
    dff_percent: float = 100.0
    lorl_percent: float = 100.0
    conversion_factor: float = 1.0
    tilt_degrees: float = 0.0


@dataclass
class LDTElectrical:
    dr_index: float = 0.0
    lamp_sets: List[LDTLampSet] = field(default_factory=list)


@dataclass
class LDTFile:
    header: LDTHeader
    geometry: LDTGeometry
    electrical: LDTElectrical
    c_angles: List[float]
    g_angles: List[float]
    # intensities[g][c], transposed from the C-plane-major file order
    intensities: List[List[float]]


class _Lines:
    def __init__(self, lines: List[str]) -> None:
        self.lines = lines

    def text(self, idx0: int, what: str) -> str:
        if idx0 >= len(self.lines):
            raise syntax_error("LDT_UNEXPECTED_EOF", f"Unexpected end of file, expected {what}", line_no=idx0 + 1)
        return self.lines[idx0].strip()

    def number(self, idx0: int, what: str) -> float:
        s = self.text(idx0, what)
        if not s:
            raise syntax_error("LDT_EMPTY_VALUE", f"Empty line where {what} was expected", line_no=idx0 + 1)
        try:
            return parse_float(s, comma_decimal=True)
        except ValueError as e:
            raise syntax_error("LDT_NON_NUMERIC", f"Invalid number for {what}: '{s}'", line_no=idx0 + 1, snippet=s) from e

    def integer(self, idx0: int, what: str) -> int:
        v = self.number(idx0, what)
        if abs(v - round(v)) > 1e-9:
            raise syntax_error("LDT_NOT_INTEGER", f"Expected integer for {what}, got {v:g}", line_no=idx0 + 1)
        return int(round(v))


def transpose_c_major(values: List[List[float]], num_c: int, num_g: int) -> List[List[float]]:
    """[c][g] -> [g][c]; the declared counts must match the matrix."""
    if len(values) != num_c or any(len(row) != num_g for row in values):
        raise SemanticError(
            "LDT_TRANSPOSE_SHAPE",
            f"intensity matrix does not match {num_c} C-planes x {num_g} gamma angles",
            context={"rows": len(values)},
        )
    return [[values[c][g] for c in range(num_c)] for g in range(num_g)]


def transpose_g_major(values: List[List[float]], num_c: int, num_g: int) -> List[List[float]]:
    """[g][c] -> [c][g]; inverse of transpose_c_major."""
    if len(values) != num_g or any(len(row) != num_c for row in values):
        raise SemanticError(
            "LDT_TRANSPOSE_SHAPE",
            f"intensity matrix does not match {num_g} gamma angles x {num_c} C-planes",
            context={"rows": len(values)},
        )
    return [[values[g][c] for g in range(num_g)] for c in range(num_c)]


def _parse_header(src: _Lines) -> LDTHeader:
    header = LDTHeader(
        company=src.text(0, "company identification"),
        type_indicator=src.integer(1, "type indicator"),
        symmetry=src.integer(2, "symmetry indicator"),
        num_c_planes=src.integer(3, "number of C-planes"),
        c_plane_spacing=src.number(4, "C-plane spacing"),
        num_g_angles=src.integer(5, "number of gamma angles"),
        g_angle_spacing=src.number(6, "gamma angle spacing"),
        report_number=src.text(7, "measurement report number"),
        luminaire_name=src.text(8, "luminaire name"),
        luminaire_number=src.text(9, "luminaire number"),
        filename=src.text(10, "file name"),
        date_user=src.text(11, "date/user"),
    )
    if header.type_indicator not in TYPE_NAMES:
        raise SemanticError("LDT_INVALID_TYPE", f"type indicator must be 0-3, got {header.type_indicator}")
    if not (0 <= header.symmetry <= 4):
        raise SemanticError("LDT_INVALID_SYMMETRY", f"symmetry indicator must be 0-4, got {header.symmetry}")
    if header.num_c_planes <= 0:
        raise SemanticError("LDT_INVALID_C_PLANES", f"number of C-planes must be positive, got {header.num_c_planes}")
    if header.num_g_angles <= 0:
        raise SemanticError("LDT_INVALID_G_ANGLES", f"number of gamma angles must be positive, got {header.num_g_angles}")
    return header


def _parse_geometry(src: _Lines) -> LDTGeometry:
    base = HEADER_LINES
    names = [
        "length_mm",
        "width_mm",
        "height_mm",
        "luminous_length_mm",
        "luminous_width_mm",
        "luminous_height_c0_mm",
        "luminous_height_c90_mm",
        "luminous_height_c180_mm",
        "luminous_height_c270_mm",
        "dff_percent",
        "lorl_percent",
        "conversion_factor",
        "tilt_degrees",
    ]
    values = {name: src.number(base + i, name.replace("_", " ")) for i, name in enumerate(names)}
    geometry = LDTGeometry(**values)
    if geometry.conversion_factor <= 0:
        log.debug("conversion factor %g is not positive, using 1.0", geometry.conversion_factor)
        geometry.conversion_factor = 1.0
    return geometry


def _parse_electrical(src: _Lines) -> LDTElectrical:
    idx0 = ELECTRICAL_START
    dr_index = src.number(idx0, "DR index")
    n = src.integer(idx0 + 1, "number of lamp sets")
    if n < 0:
        raise SemanticError("LDT_INVALID_LAMP_SETS", f"number of lamp sets must be >= 0, got {n}")
    idx0 += 2
    lamp_sets: List[LDTLampSet] = []
    for _ in range(n):
        lamp_sets.append(
            LDTLampSet(
                num_lamps=src.integer(idx0, "number of lamps"),
                lamp_type=src.text(idx0 + 1, "lamp type"),
                total_flux=src.number(idx0 + 2, "total luminous flux"),
                color_temperature=src.text(idx0 + 3, "colour temperature"),
                color_rendering=src.text(idx0 + 4, "colour rendering group"),
                wattage=src.number(idx0 + 5, "wattage"),
            )
        )
        idx0 += LAMP_SET_LINES
    return LDTElectrical(dr_index=dr_index, lamp_sets=lamp_sets)


def parse_ldt_text(text: str) -> LDTFile:
    lines = split_lines(text)
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise FormatSyntaxError("LDT_EMPTY", "LDT file is empty")

    src = _Lines(lines)
    header = _parse_header(src)
    geometry = _parse_geometry(src)
    electrical = _parse_electrical(src)

    idx0 = ELECTRICAL_START + 2 + LAMP_SET_LINES * len(electrical.lamp_sets)
    mc, ng = header.num_c_planes, header.num_g_angles

    c_angles = [src.number(idx0 + i, f"C-plane angle {i + 1} of {mc}") for i in range(mc)]
    idx0 += mc
    g_angles = [src.number(idx0 + i, f"gamma angle {i + 1} of {ng}") for i in range(ng)]
    idx0 += ng

    by_c: List[List[float]] = []
    for c in range(mc):
        by_c.append([src.number(idx0 + c * ng + g, f"intensity C{c} G{g}") for g in range(ng)])
    idx0 += mc * ng
    if idx0 < len(lines):
        log.debug("ignoring %d trailing line(s) after intensity data", len(lines) - idx0)

    return LDTFile(
        header=header,
        geometry=geometry,
        electrical=electrical,
        c_angles=c_angles,
        g_angles=g_angles,
        intensities=transpose_c_major(by_c, mc, ng),
    )


def parse_ldt_bytes(data: bytes) -> LDTFile:
    return parse_ldt_text(decode_text(data))
