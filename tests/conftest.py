from __future__ import annotations

import math
from typing import List

import pytest

from luxconvert.models.photometry import (
    ElectricalData,
    Geometry,
    Metadata,
    PhotometricMeasurements,
    PhotometricRecord,
)


IES_SAMPLE = """IESNA:LM-63-2002
[TEST] T-100
[TESTLAB] Acme Labs
[ISSUEDATE] 2024-01-15
[MANUFAC] Acme
[LUMCAT] XZ-400
[LUMINAIRE] Downlight
[MORE] with diffuser
TILT=NONE
1 1000 1 3 2 1 2 0.6 0.6 0.1
1 1 10
0 45 90
0 180
100 100
70 70
0 0
"""


def ldt_sample_lines() -> List[str]:
    header = [
        "Acme;Lighting",
        "1",
        "0",
        "4",
        "90",
        "3",
        "45",
        "R-1",
        "Downlight",
        "XZ-400",
        "dl.ldt",
        "15.01.2024/Acme Labs",
    ]
    geometry = ["600", "600", "100", "500", "500", "0", "0", "0", "0", "100", "85,5", "1", "0"]
    electrical = ["0", "0,85", "1", "1", "LED", "1000", "3000K", "80", "10,5"]
    angles = ["0", "90", "180", "270", "0", "45", "90"]
    # C-plane major: C0, C90, C180, C270
    intensities = ["100", "70", "0", "110", "77", "1", "120", "84", "2", "130", "91", "3"]
    return header + geometry + electrical + angles + intensities


LDT_SAMPLE = "\r\n".join(ldt_sample_lines()) + "\r\n"

CIE_DESCRIPTION = "OSL0526 PLED II 17W AE 3000K 2172.2 lms"


def cie_sample_rows() -> List[List[int]]:
    return [[300 - 15 * g] * 16 for g in range(19)]


def cie_text(description: str = CIE_DESCRIPTION, rows: List[List[int]] | None = None) -> str:
    rows = cie_sample_rows() if rows is None else rows
    lines = [f"   1   0   0        {description}"]
    lines.extend(" ".join(f"{v:4d}" for v in row) for row in rows)
    return "\n".join(lines) + "\n"


def lambertian_record() -> PhotometricRecord:
    vertical = [float(v) for v in range(0, 91, 10)]
    horizontal = [float(h) for h in range(0, 361, 45)]
    peak = 1000.0 / math.pi
    candela = [[round(peak * math.cos(math.radians(v)), 3)] * len(horizontal) for v in vertical]
    return PhotometricRecord(
        metadata=Metadata(
            manufacturer="Acme",
            catalog_number="XZ-400",
            description="Downlight",
            luminaire_type="point",
            test_lab="Acme Labs",
            test_date="2024-01-15",
            test_number="T-100",
        ),
        geometry=Geometry(
            length=0.6,
            width=0.6,
            height=0.1,
            luminous_length=0.5,
            luminous_width=0.5,
            luminous_height=0.05,
        ),
        photometry=PhotometricMeasurements(
            photometry_type="C",
            units_type="absolute",
            luminous_flux=1000.0,
            candela_multiplier=1.0,
            vertical_angles=vertical,
            horizontal_angles=horizontal,
            candela_values=candela,
        ),
        electrical=ElectricalData(
            input_watts=10.0,
            ballast_factor=1.0,
            ballast_lamp_factor=1.0,
            input_voltage=120.0,
            input_current=10.0 / (120.0 * 0.9),
            power_factor=0.9,
        ),
    )


@pytest.fixture
def good_record() -> PhotometricRecord:
    return lambertian_record()


@pytest.fixture
def ies_bytes() -> bytes:
    return IES_SAMPLE.encode("ascii")


@pytest.fixture
def ldt_bytes() -> bytes:
    return LDT_SAMPLE.encode("ascii")


@pytest.fixture
def cie_bytes() -> bytes:
    return cie_text().encode("ascii")
