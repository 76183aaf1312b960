from __future__ import annotations

from typing import List, Optional

from luxconvert.config import WriterOptions
from luxconvert.core.numbers import format_number
from luxconvert.parser.cie_parser import CIEFile


def write_cie_text(cie: CIEFile, options: Optional[WriterOptions] = None) -> str:
    options = options or WriterOptions(precision=0)
    h = cie.header
    lines: List[str] = [f"{h.format_type:4d}{h.symmetry_type:4d}{h.reserved:4d}        {h.description}".rstrip()]
    for row in cie.intensities:
        if options.precision == 0:
            lines.append(" ".join(f"{v:4.0f}" for v in row))
        else:
            lines.append(" ".join(format_number(v, options.precision) for v in row))
    return "\n".join(lines) + "\n"


def write_cie_bytes(cie: CIEFile, options: Optional[WriterOptions] = None) -> bytes:
    return write_cie_text(cie, options).encode("latin-1", errors="replace")
