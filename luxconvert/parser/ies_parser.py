from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from luxconvert.core.numbers import is_number
from luxconvert.errors import FormatSyntaxError, SemanticError, syntax_error
from luxconvert.parser.text import decode_text, split_lines

log = logging.getLogger(__name__)


VERSION_LINES = {
    "IESNA:LM-63-2002": "LM-63-2002",
    "IESNA:LM-63-1995": "LM-63-1995",
    "IESNA91": "LM-63-1995",
}
LEGACY_VERSION = "LM-63-1986"

_KEYWORD_RE = re.compile(r"^\[([A-Za-z0-9_]+)\]\s*(.*)$")
_TILT_RE = re.compile(r"^TILT\s*=\s*(.*)$", re.IGNORECASE)


@dataclass
class IESTilt:
    mode: str  # NONE, INCLUDE or FILE
    file_name: Optional[str] = None
    lamp_to_luminaire_geometry: Optional[int] = None
    angles: List[float] = field(default_factory=list)
    factors: List[float] = field(default_factory=list)


@dataclass
class IESPhotometric:
    num_lamps: int
    lumens_per_lamp: float
    candela_multiplier: float
    num_vertical_angles: int
    num_horizontal_angles: int
    photometric_type: int  # 1=C, 2=B, 3=A
    units_type: int  # 1=feet, 2=meters
    width: float
    length: float
    height: float
    ballast_factor: float = 1.0
    ballast_lamp_factor: float = 1.0
    input_watts: float = 0.0


@dataclass
class IESFile:
    version: str
    keywords: List[Tuple[str, str]]
    tilt: IESTilt
    photometric: IESPhotometric
    vertical_angles: List[float]
    horizontal_angles: List[float]
    # candela[v][h]: one row of horizontal values per vertical angle
    candela: List[List[float]]

    def keyword(self, key: str, default: str = "") -> str:
        key = key.upper()
        for k, v in self.keywords:
            if k == key:
                return v
        return default


class KeywordBlock:
    """Ordered keyword pairs; [MORE] lines extend the most recent pair."""

    def __init__(self) -> None:
        self.pairs: List[Tuple[str, str]] = []
        self._last: Optional[int] = None

    def add(self, key: str, value: str) -> None:
        key = key.upper()
        if key == "MORE":
            if self._last is None:
                self.pairs.append(("DESCRIPTION", value))
                self._last = len(self.pairs) - 1
                return
            k, v = self.pairs[self._last]
            self.pairs[self._last] = (k, f"{v} {value}" if v else value)
            return
        self.pairs.append((key, value))
        self._last = len(self.pairs) - 1


class _TokenStream:
    """Whitespace-delimited numeric tokens after the TILT line, with their 1-based line numbers."""

    def __init__(self, lines: List[str], start_idx0: int) -> None:
        self.tokens: List[Tuple[str, int]] = []
        for idx0 in range(start_idx0, len(lines)):
            for t in lines[idx0].split():
                self.tokens.append((t, idx0 + 1))
        self.pos = 0

    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def _next(self, what: str) -> Tuple[str, int]:
        if self.pos >= len(self.tokens):
            last_line = self.tokens[-1][1] if self.tokens else None
            raise syntax_error("IES_UNEXPECTED_EOF", f"Unexpected end of file while reading {what}", line_no=last_line)
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def read_floats(self, count: int, what: str) -> List[float]:
        values: List[float] = []
        for i in range(count):
            t, line_no = self._next(f"{what} (value {i + 1} of {count})")
            if not is_number(t):
                raise syntax_error(
                    "IES_NON_NUMERIC",
                    f"Expected numeric value #{i + 1} of {count} for {what}, got '{t}'",
                    line_no=line_no,
                )
            values.append(float(t))
        return values

    def read_float(self, what: str) -> float:
        return self.read_floats(1, what)[0]

    def read_int(self, what: str) -> int:
        t, line_no = self._next(what)
        if not is_number(t):
            raise syntax_error("IES_NON_NUMERIC", f"Non-numeric value for {what}: {t}", line_no=line_no)
        v = float(t)
        if abs(v - round(v)) > 1e-9:
            raise syntax_error("IES_NOT_INTEGER", f"Expected integer for {what}, got {t}", line_no=line_no)
        return int(round(v))


def _parse_tilt(line: str, stream: _TokenStream) -> IESTilt:
    value = line.split("=", 1)[1].strip()
    mode = value.upper()
    if mode == "NONE":
        return IESTilt(mode="NONE")
    if mode == "INCLUDE":
        geometry = stream.read_int("TILT lamp-to-luminaire geometry")
        n = stream.read_int("TILT angle count")
        if n < 0:
            raise SemanticError("IES_INVALID_TILT", f"TILT angle count must be >= 0, got {n}")
        angles = stream.read_floats(n, "TILT angles")
        factors = stream.read_floats(n, "TILT multiplying factors")
        return IESTilt(mode="INCLUDE", lamp_to_luminaire_geometry=geometry, angles=angles, factors=factors)
    return IESTilt(mode="FILE", file_name=value)


def _read_photometric(stream: _TokenStream) -> IESPhotometric:
    p = IESPhotometric(
        num_lamps=stream.read_int("number of lamps"),
        lumens_per_lamp=stream.read_float("lumens per lamp"),
        candela_multiplier=stream.read_float("candela multiplier"),
        num_vertical_angles=stream.read_int("number of vertical angles"),
        num_horizontal_angles=stream.read_int("number of horizontal angles"),
        photometric_type=stream.read_int("photometric type"),
        units_type=stream.read_int("units type"),
        width=stream.read_float("width"),
        length=stream.read_float("length"),
        height=stream.read_float("height"),
    )
    p.ballast_factor = stream.read_float("ballast factor")
    p.ballast_lamp_factor = stream.read_float("ballast-lamp photometric factor")
    p.input_watts = stream.read_float("input watts")

    if p.photometric_type not in (1, 2, 3):
        raise SemanticError(
            "IES_INVALID_PHOTOMETRIC_TYPE",
            f"Unsupported photometric type {p.photometric_type} (expected 1=C, 2=B, 3=A)",
        )
    if p.units_type not in (1, 2):
        raise SemanticError("IES_INVALID_UNITS", f"Unsupported units type {p.units_type} (expected 1=feet, 2=meters)")
    if p.num_vertical_angles <= 0 or p.num_horizontal_angles <= 0:
        raise SemanticError(
            "IES_INVALID_ANGLE_COUNT",
            "angle counts must be positive",
            context={"vertical": p.num_vertical_angles, "horizontal": p.num_horizontal_angles},
        )
    if p.num_lamps < 0:
        raise SemanticError("IES_INVALID_LAMP_COUNT", f"number of lamps must be >= 0, got {p.num_lamps}")
    return p


def parse_ies_text(text: str) -> IESFile:
    lines = split_lines(text)

    idx0 = 0
    while idx0 < len(lines) and not lines[idx0].strip():
        idx0 += 1
    if idx0 >= len(lines):
        raise FormatSyntaxError("IES_EMPTY", "IES file is empty")

    version = LEGACY_VERSION
    first = lines[idx0].strip()
    if first.upper().startswith("IES"):
        known = VERSION_LINES.get(first.upper())
        if known is None:
            log.debug("unrecognised IES version line %r, assuming LM-63-2002", first)
            known = "LM-63-2002"
        version = known
        idx0 += 1

    block = KeywordBlock()
    tilt_line: Optional[str] = None
    while idx0 < len(lines):
        s = lines[idx0].strip()
        idx0 += 1
        t = _TILT_RE.match(s)
        if t:
            if not t.group(1).strip():
                raise syntax_error("IES_INVALID_TILT", "TILT line must have the form TILT=<value>", line_no=idx0, snippet=s)
            tilt_line = s
            break
        if not s:
            continue
        m = _KEYWORD_RE.match(s)
        if m:
            block.add(m.group(1), m.group(2).strip())
        else:
            log.debug("ignoring non-keyword header line %d: %r", idx0, s)

    if tilt_line is None:
        raise FormatSyntaxError("IES_MISSING_TILT", "TILT= line not found")

    stream = _TokenStream(lines, idx0)
    tilt = _parse_tilt(tilt_line, stream)
    photometric = _read_photometric(stream)

    nv = photometric.num_vertical_angles
    nh = photometric.num_horizontal_angles
    vertical = stream.read_floats(nv, "vertical angles")
    horizontal = stream.read_floats(nh, "horizontal angles")
    candela = [stream.read_floats(nh, f"candela values for vertical angle {vertical[v]:g}") for v in range(nv)]
    if stream.remaining():
        log.debug("ignoring %d trailing token(s) after candela data", stream.remaining())

    return IESFile(
        version=version,
        keywords=block.pairs,
        tilt=tilt,
        photometric=photometric,
        vertical_angles=vertical,
        horizontal_angles=horizontal,
        candela=candela,
    )


def parse_ies_bytes(data: bytes) -> IESFile:
    return parse_ies_text(decode_text(data))
