from __future__ import annotations

from typing import List, Optional, Sequence

from luxconvert.config import WriterOptions
from luxconvert.core.numbers import format_number
from luxconvert.parser.ies_parser import IESFile


VERSION_HEADERS = {
    "LM-63-2002": "IESNA:LM-63-2002",
    "LM-63-1995": "IESNA:LM-63-1995",
}

ANGLES_PER_LINE = 10


def _fmt(v: float, options: WriterOptions) -> str:
    return format_number(v, options.precision)


def _wrap(values: Sequence[float], options: WriterOptions, per_line: int = ANGLES_PER_LINE) -> List[str]:
    out: List[str] = []
    for i in range(0, len(values), per_line):
        out.append(" ".join(_fmt(v, options) for v in values[i : i + per_line]))
    return out


def keyword_lines(key: str, value: str) -> List[str]:
    """`[KEY] value`, with extra lines of a multi-line value continued on [MORE] lines."""
    parts = [p.strip() for p in value.splitlines()] or [""]
    lines = [f"[{key}] {parts[0]}".rstrip()]
    lines.extend(f"[MORE] {p}".rstrip() for p in parts[1:])
    return lines


def _tilt_lines(ies: IESFile, options: WriterOptions) -> List[str]:
    tilt = ies.tilt
    if tilt.mode == "INCLUDE":
        lines = ["TILT=INCLUDE", str(tilt.lamp_to_luminaire_geometry or 1), str(len(tilt.angles))]
        lines.extend(_wrap(tilt.angles, options))
        lines.extend(_wrap(tilt.factors, options))
        return lines
    if tilt.mode == "FILE" and tilt.file_name:
        return [f"TILT={tilt.file_name}"]
    return ["TILT=NONE"]


def write_ies_text(ies: IESFile, options: Optional[WriterOptions] = None) -> str:
    options = options or WriterOptions()
    version = options.format_version or ies.version
    lines: List[str] = [VERSION_HEADERS.get(version, VERSION_HEADERS["LM-63-2002"])]

    for key, value in ies.keywords:
        lines.extend(keyword_lines(key, value))
    for key, value in options.custom_headers:
        lines.extend(keyword_lines(key.upper(), value))

    lines.extend(_tilt_lines(ies, options))

    p = ies.photometric
    lines.append(
        " ".join(
            [
                str(p.num_lamps),
                _fmt(p.lumens_per_lamp, options),
                _fmt(p.candela_multiplier, options),
                str(len(ies.vertical_angles)),
                str(len(ies.horizontal_angles)),
                str(p.photometric_type),
                str(p.units_type),
                _fmt(p.width, options),
                _fmt(p.length, options),
                _fmt(p.height, options),
            ]
        )
    )
    lines.append(" ".join(_fmt(v, options) for v in (p.ballast_factor, p.ballast_lamp_factor, p.input_watts)))
    lines.extend(_wrap(ies.vertical_angles, options))
    lines.extend(_wrap(ies.horizontal_angles, options))
    for row in ies.candela:
        lines.append(" ".join(_fmt(v, options) for v in row))
    return "\n".join(lines) + "\n"


def write_ies_bytes(ies: IESFile, options: Optional[WriterOptions] = None) -> bytes:
    return write_ies_text(ies, options).encode("latin-1", errors="replace")
