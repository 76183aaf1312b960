from __future__ import annotations

from typing import List, Optional

from luxconvert.config import WriterOptions
from luxconvert.core.numbers import format_number
from luxconvert.parser.ldt_parser import LDTFile, transpose_g_major


def write_ldt_text(ldt: LDTFile, options: Optional[WriterOptions] = None) -> str:
    options = options or WriterOptions(use_comma_decimal=True)

    def num(v: float) -> str:
        return format_number(v, options.precision, comma_decimal=options.use_comma_decimal)

    h = ldt.header
    g = ldt.geometry
    mc, ng = len(ldt.c_angles), len(ldt.g_angles)

    lines: List[str] = [
        h.company,
        str(h.type_indicator),
        str(h.symmetry),
        str(mc),
        num(h.c_plane_spacing),
        str(ng),
        num(h.g_angle_spacing),
        h.report_number,
        h.luminaire_name,
        h.luminaire_number,
        h.filename,
        h.date_user,
    ]
    lines.extend(
        num(v)
        for v in (
            g.length_mm,
            g.width_mm,
            g.height_mm,
            g.luminous_length_mm,
            g.luminous_width_mm,
            g.luminous_height_c0_mm,
            g.luminous_height_c90_mm,
            g.luminous_height_c180_mm,
            g.luminous_height_c270_mm,
            g.dff_percent,
            g.lorl_percent,
            g.conversion_factor,
            g.tilt_degrees,
        )
    )
    lines.append("0")  # reserved
    lines.append(num(ldt.electrical.dr_index))
    lines.append(str(len(ldt.electrical.lamp_sets)))
    for lamp in ldt.electrical.lamp_sets:
        lines.extend(
            [
                str(lamp.num_lamps),
                lamp.lamp_type,
                num(lamp.total_flux),
                lamp.color_temperature,
                lamp.color_rendering,
                num(lamp.wattage),
            ]
        )
    lines.extend(num(a) for a in ldt.c_angles)
    lines.extend(num(a) for a in ldt.g_angles)
    for plane in transpose_g_major(ldt.intensities, mc, ng):
        lines.extend(num(v) for v in plane)
    return "\r\n".join(lines) + "\r\n"


def write_ldt_bytes(ldt: LDTFile, options: Optional[WriterOptions] = None) -> bytes:
    return write_ldt_text(ldt, options).encode("latin-1", errors="replace")
