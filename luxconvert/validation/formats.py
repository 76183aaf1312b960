"""
Per-format physical and structural limits.

`check(record)` collects every violation as a message; `validate(record)`
raises ValidationError carrying all of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Sequence

import numpy as np

from luxconvert.errors import ErrorCollector, ValidationError
from luxconvert.models.photometry import PhotometricRecord
from luxconvert.parser.cie_parser import CIEFile, CIEHeader


@dataclass(frozen=True)
class FormatLimits:
    max_vertical_angles: int
    max_horizontal_angles: int
    min_vertical_angles: int
    min_increment_deg: float
    max_increment_deg: float
    max_candela: float
    max_dynamic_range: float
    min_flux: float
    max_flux: float
    max_multiplier: float
    max_dimension_m: float
    max_watts: float
    max_ballast_factor: float


IES_LIMITS = FormatLimits(
    max_vertical_angles=181,
    max_horizontal_angles=361,
    min_vertical_angles=2,
    min_increment_deg=0.1,
    max_increment_deg=90.0,
    max_candela=1e6,
    max_dynamic_range=1e6,
    min_flux=0.1,
    max_flux=1e6,
    max_multiplier=1e6,
    max_dimension_m=100.0,
    max_watts=1e5,
    max_ballast_factor=5.0,
)

LDT_LIMITS = FormatLimits(
    max_vertical_angles=181,
    max_horizontal_angles=361,
    min_vertical_angles=2,
    min_increment_deg=0.1,
    max_increment_deg=90.0,
    max_candela=1e7,
    max_dynamic_range=1e7,
    min_flux=0.1,
    max_flux=1e7,
    max_multiplier=1e7,
    max_dimension_m=1000.0,
    max_watts=1e6,
    max_ballast_factor=5.0,
)

MIN_DIMENSION_M = 0.001

CIE_MAX_GAMMA = 90.0
CIE_GAMMA_STEP = (1.0, 15.0)
CIE_C_STEP = (5.0, 45.0)
CIE_MAX_CD_PER_LM = 10000.0
CIE_MIN_FULL_COVERAGE = 315.0


def _increments(angles: Sequence[float]) -> List[float]:
    return [b - a for a, b in zip(angles, angles[1:])]


def _check_increments(name: str, angles: Sequence[float], lo: float, hi: float, out: ErrorCollector) -> None:
    for i, inc in enumerate(_increments(angles)):
        if inc < lo:
            out.add_warning(f"{name} increment {inc:g} deg at index {i + 1} is below {lo:g} deg")
            return
        if inc > hi:
            out.add_warning(f"{name} increment {inc:g} deg at index {i + 1} exceeds {hi:g} deg")
            return


class FormatValidator:
    format_id = ""

    def check(self, record: PhotometricRecord) -> List[str]:
        out = ErrorCollector()
        try:
            record.validate()
        except ValidationError as e:
            out.add_warning(e.message)
            return out.warnings
        self._check(record, out)
        return out.warnings

    def check_file(self, file: Any) -> List[str]:
        """Issues found in the parsed native file itself, before mapping to a record."""
        return []

    def _check(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        raise NotImplementedError

    def validate(self, record: PhotometricRecord) -> None:
        issues = self.check(record)
        if issues:
            raise ValidationError(
                f"{self.format_id.upper()}_CONSTRAINTS",
                issues[0],
                context={"format": self.format_id, "issue_count": len(issues)},
                warnings=issues[1:],
            )


class _LimitValidator(FormatValidator):
    limits: FormatLimits

    def _check_angles(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        lim = self.limits
        p = record.photometry
        nv, nh = len(p.vertical_angles), len(p.horizontal_angles)
        if nv < lim.min_vertical_angles:
            out.add_warning(f"at least {lim.min_vertical_angles} vertical angles are required, got {nv}")
        if nv > lim.max_vertical_angles:
            out.add_warning(f"too many vertical angles: {nv} (max {lim.max_vertical_angles})")
        if nh > lim.max_horizontal_angles:
            out.add_warning(f"too many horizontal angles: {nh} (max {lim.max_horizontal_angles})")
        _check_increments("vertical angle", p.vertical_angles, lim.min_increment_deg, lim.max_increment_deg, out)
        _check_increments("horizontal angle", p.horizontal_angles, lim.min_increment_deg, lim.max_increment_deg, out)

    def _check_candela(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        lim = self.limits
        arr = record.photometry.candela_array() * record.photometry.candela_multiplier
        if arr.size == 0:
            return
        peak = float(arr.max())
        if peak > lim.max_candela:
            out.add_warning(f"candela value {peak:g} exceeds {lim.max_candela:g} cd")
        positive = arr[arr > 0]
        if positive.size and peak / float(positive.min()) > lim.max_dynamic_range:
            out.add_warning(f"candela dynamic range exceeds {lim.max_dynamic_range:g}:1")

    def _check_photometry(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        lim = self.limits
        p = record.photometry
        if p.luminous_flux > 0 and not (lim.min_flux <= p.luminous_flux <= lim.max_flux):
            out.add_warning(f"luminous flux {p.luminous_flux:g} lm outside {lim.min_flux:g}..{lim.max_flux:g} lm")
        if p.candela_multiplier > lim.max_multiplier:
            out.add_warning(f"candela multiplier {p.candela_multiplier:g} exceeds {lim.max_multiplier:g}")

    def _check_geometry(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        lim = self.limits
        g = record.geometry
        for name in ("length", "width", "height"):
            v = getattr(g, name)
            if v > lim.max_dimension_m:
                out.add_warning(f"luminaire {name} {v:g} m exceeds {lim.max_dimension_m:g} m")
            elif 0 < v < MIN_DIMENSION_M:
                out.add_warning(f"luminaire {name} {v:g} m is below 1 mm")

    def _check_electrical(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        lim = self.limits
        e = record.electrical
        if e.input_watts > lim.max_watts:
            out.add_warning(f"input watts {e.input_watts:g} W exceeds {lim.max_watts:g} W")
        if e.ballast_factor > lim.max_ballast_factor:
            out.add_warning(f"ballast factor {e.ballast_factor:g} exceeds {lim.max_ballast_factor:g}")
        if e.ballast_lamp_factor > lim.max_ballast_factor:
            out.add_warning(f"ballast-lamp factor {e.ballast_lamp_factor:g} exceeds {lim.max_ballast_factor:g}")

    def _check(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        self._check_angles(record, out)
        self._check_candela(record, out)
        self._check_photometry(record, out)
        self._check_geometry(record, out)
        self._check_electrical(record, out)


class IESValidator(_LimitValidator):
    format_id = "ies"
    limits = IES_LIMITS

    def _check_angles(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        super()._check_angles(record, out)
        p = record.photometry
        if p.photometry_type == "B" and p.horizontal_angles and p.horizontal_angles[-1] > 180.0:
            out.add_warning(f"type B horizontal angles must lie within 0..180 deg, got {p.horizontal_angles[-1]:g}")
        if p.photometry_type == "A" and p.vertical_angles and p.vertical_angles[-1] > 180.0:
            out.add_warning("type A vertical angles must lie within 0..180 deg")


class LDTValidator(_LimitValidator):
    format_id = "ldt"
    limits = LDT_LIMITS

    def _check_angles(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        super()._check_angles(record, out)
        p = record.photometry
        if p.photometry_type != "C":
            out.add_warning(f"EULUMDAT uses type C photometry, got type {p.photometry_type}")
        if p.vertical_angles and p.vertical_angles[0] != 0.0:
            out.add_warning(f"first gamma angle must be 0 deg, got {p.vertical_angles[0]:g}")

    def _check_geometry(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        super()._check_geometry(record, out)
        g = record.geometry
        if g.luminous_length > 0 and g.length == 0:
            out.add_warning("luminous length given without a luminaire length")
        if g.luminous_width > 0 and g.width == 0:
            out.add_warning("luminous width given without a luminaire width")


class CIEValidator(FormatValidator):
    format_id = "cie"

    def _check(self, record: PhotometricRecord, out: ErrorCollector) -> None:
        p = record.photometry
        if p.photometry_type != "C":
            out.add_warning(f"CIE i-table requires type C photometry, got type {p.photometry_type}")
        if p.vertical_angles and p.vertical_angles[-1] > CIE_MAX_GAMMA:
            out.add_warning(f"vertical angle {p.vertical_angles[-1]:g} deg outside 0..{CIE_MAX_GAMMA:g} deg")
        _check_increments("vertical angle", p.vertical_angles, *CIE_GAMMA_STEP, out=out)
        _check_increments("horizontal angle", p.horizontal_angles, *CIE_C_STEP, out=out)

        arr = p.candela_array() * p.candela_multiplier
        if p.units_type == "absolute" and p.luminous_flux > 0:
            arr = arr / p.luminous_flux
        if arr.size and float(arr.max()) > CIE_MAX_CD_PER_LM:
            out.add_warning(f"intensity {float(arr.max()):g} cd/lm exceeds {CIE_MAX_CD_PER_LM:g} cd/lm")

        self._check_symmetry(p.horizontal_angles, arr, out)

    def _check_symmetry(self, horizontal: Sequence[float], arr: np.ndarray, out: ErrorCollector) -> None:
        if len(horizontal) < 2 or arr.size == 0:
            return
        span = horizontal[-1] - horizontal[0]
        if span > 180.0 and span < CIE_MIN_FULL_COVERAGE:
            out.add_warning(f"C-plane coverage {span:g} deg is neither half nor full (need >= {CIE_MIN_FULL_COVERAGE:g})")
        nadir = float(arr[0].max())
        if nadir > 0:
            for i in range(1, arr.shape[0]):
                if float(arr[i].max()) > 2.0 * nadir:
                    out.add_warning(f"intensity at gamma index {i} exceeds twice the nadir maximum")
                    break

    def check_file(self, file: CIEFile) -> List[str]:
        return self.check_header(file.header)

    def check_header(self, header: CIEHeader) -> List[str]:
        issues: List[str] = []
        if header.format_type != 1:
            issues.append(f"format type must be 1, got {header.format_type}")
        if header.symmetry_type not in (0, 1):
            issues.append(f"symmetry type must be 0 or 1, got {header.symmetry_type}")
        if header.reserved != 0:
            issues.append(f"reserved field must be 0, got {header.reserved}")
        if not header.description.strip():
            issues.append("description must not be empty")
        return issues
