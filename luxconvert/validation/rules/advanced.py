"""
Cross-format plausibility rules.

These look at a record as a whole (geometry against photometry type,
electrical figures against each other, declared flux against the candela
table) and only ever produce warnings: the record already passed its own
structural validation.
"""

from __future__ import annotations

from typing import List

from luxconvert.models.photometry import PhotometricRecord
from luxconvert.models.validation import ValidationFinding
from luxconvert.photometry.flux import estimate_luminous_flux
from luxconvert.photometry.symmetry import mirror_pair_differences


MAX_DIMENSION_M = 100.0
TYPE_A_MIN_HEIGHT_M = 0.1
TYPE_C_MAX_HEIGHT_M = 10.0

IES_MAX_VERTICAL = 37
IES_MAX_HORIZONTAL = 73
MAX_VERTICAL = 181
MAX_HORIZONTAL = 361

MAX_WATTS = 10_000.0
COMMON_VOLTAGES = (12.0, 24.0, 120.0, 208.0, 220.0, 230.0, 240.0, 277.0, 347.0, 480.0)
VOLTAGE_TOLERANCE = 0.10
EFFICACY_RANGE = (10.0, 300.0)
BALLAST_RANGE = (0.5, 1.5)
MIN_POWER_FACTOR = 0.5

FLUX_TOLERANCE = 0.20

SYMMETRY_TOLERANCE = 0.10
MAX_ASYMMETRIC_FRACTION = 0.30


def _warn(rule_id: str, title: str, message: str, **evidence: object) -> ValidationFinding:
    return ValidationFinding(id=rule_id, severity="WARN", title=title, message=message, evidence=dict(evidence))


class RulePhotometryTypeGeometry:
    id = "PHOT_TYPE_GEOMETRY"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        p = record.photometry
        g = record.geometry
        nv, nh = p.shape
        out: List[ValidationFinding] = []
        if p.photometry_type == "A":
            if g.height < TYPE_A_MIN_HEIGHT_M:
                out.append(_warn(self.id, "Low mounting height", "Type A photometry with very low mounting height", height_m=g.height))
            if nh > IES_MAX_VERTICAL:
                out.append(
                    _warn(
                        self.id,
                        "Many horizontal angles",
                        "Type A photometry with unusually many horizontal angles (may not be compatible with all formats)",
                        horizontal_angles=nh,
                    )
                )
        elif p.photometry_type == "B":
            if g.length > 0 and g.length == g.width:
                out.append(_warn(self.id, "Symmetric floodlight", "Type B photometry typically uses asymmetric luminaires"))
            if nv > MAX_VERTICAL or nh > MAX_HORIZONTAL:
                out.append(
                    _warn(
                        self.id,
                        "High angular resolution",
                        "Type B photometry with high angular resolution may not be compatible with all formats",
                    )
                )
        else:
            if g.height > TYPE_C_MAX_HEIGHT_M:
                out.append(_warn(self.id, "High mounting height", "Type C photometry with unusually high mounting height", height_m=g.height))
            if nv > MAX_VERTICAL or nh > MAX_HORIZONTAL:
                out.append(_warn(self.id, "High angular resolution", "high angular resolution may require format-specific handling"))
        return out


class RuleGeometryPlausibility:
    id = "PHOT_GEOMETRY"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        g = record.geometry
        dims = (g.length, g.width, g.height)
        out: List[ValidationFinding] = []
        if any(d <= 0 for d in dims):
            out.append(_warn(self.id, "Missing dimensions", "luminaire dimensions contain zero values", length=g.length, width=g.width, height=g.height))
        if any(d > MAX_DIMENSION_M for d in dims):
            out.append(_warn(self.id, "Oversized luminaire", "luminaire dimensions are unusually large (>100m)"))
        return out


class RuleFormatCapacity:
    id = "PHOT_FORMAT_CAPACITY"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        p = record.photometry
        nv, nh = p.shape
        out: List[ValidationFinding] = []
        if nv > IES_MAX_VERTICAL:
            out.append(_warn(self.id, "IES vertical capacity", "IES format typically supports maximum 37 vertical angles", vertical_angles=nv))
        if nh > IES_MAX_HORIZONTAL:
            out.append(_warn(self.id, "IES horizontal capacity", "IES format typically supports maximum 73 horizontal angles", horizontal_angles=nh))
        if p.units_type == "relative" and p.luminous_flux <= 0:
            out.append(
                _warn(
                    self.id,
                    "Relative photometry without flux",
                    "relative photometry without luminous flux cannot be scaled to absolute intensities",
                )
            )
        return out


def _near_common_voltage(v: float) -> bool:
    return any(abs(v - c) <= c * VOLTAGE_TOLERANCE for c in COMMON_VOLTAGES)


class RuleElectricalSanity:
    id = "PHOT_ELECTRICAL"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        e = record.electrical
        flux = record.photometry.luminous_flux
        out: List[ValidationFinding] = []

        if e.input_watts <= 0:
            out.append(_warn(self.id, "No input power", "input power is zero"))
        elif e.input_watts > MAX_WATTS:
            out.append(_warn(self.id, "Input power high", "input power is unusually high (>10kW)", watts=e.input_watts))

        if e.input_voltage <= 0:
            out.append(_warn(self.id, "No input voltage", "input voltage is zero"))
        elif not _near_common_voltage(e.input_voltage):
            out.append(_warn(self.id, "Unusual voltage", "input voltage doesn't match common standards", volts=e.input_voltage))

        if flux <= 0:
            out.append(_warn(self.id, "No luminous flux", "luminous flux is zero"))
        elif e.input_watts > 0:
            efficacy = flux / e.input_watts
            lo, hi = EFFICACY_RANGE
            if efficacy < lo:
                out.append(_warn(self.id, "Low efficacy", "luminous efficacy is very low (<10 lm/W)", efficacy=efficacy))
            elif efficacy > hi:
                out.append(_warn(self.id, "High efficacy", "luminous efficacy is unusually high (>300 lm/W)", efficacy=efficacy))

        lo, hi = BALLAST_RANGE
        if e.ballast_factor > 0 and not (lo <= e.ballast_factor <= hi):
            out.append(_warn(self.id, "Ballast factor", "ballast factor outside typical range (0.5-1.5)", ballast_factor=e.ballast_factor))
        if e.ballast_lamp_factor > 0 and not (lo <= e.ballast_lamp_factor <= hi):
            out.append(
                _warn(
                    self.id,
                    "Ballast-lamp factor",
                    "ballast lamp factor outside typical range (0.5-1.5)",
                    ballast_lamp_factor=e.ballast_lamp_factor,
                )
            )
        if 0 < e.power_factor < MIN_POWER_FACTOR:
            out.append(_warn(self.id, "Low power factor", "power factor is quite low (<0.5)", power_factor=e.power_factor))
        return out


class RuleFluxConsistency:
    """Declared luminous flux against the flux integrated from the candela table."""

    id = "PHOT_FLUX_CONSISTENCY"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        p = record.photometry
        if p.luminous_flux <= 0:
            return []
        estimated = estimate_luminous_flux(p)
        if estimated <= 0:
            return []
        deviation = abs(p.luminous_flux - estimated) / estimated
        if deviation <= FLUX_TOLERANCE:
            return []
        return [
            ValidationFinding(
                id=self.id,
                severity="WARN",
                title="Flux mismatch",
                message=(
                    f"declared luminous flux ({p.luminous_flux:.0f} lm) differs significantly "
                    f"from calculated flux ({estimated:.0f} lm)"
                ),
                evidence={"declared_lm": p.luminous_flux, "estimated_lm": estimated, "deviation": deviation},
                suggested_fix="Check the lumens-per-lamp value and the candela multiplier.",
            )
        ]


class RuleSymmetry:
    id = "PHOT_SYMMETRY"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        p = record.photometry
        if len(p.horizontal_angles) < 4:
            return []
        differing, compared = mirror_pair_differences(p.candela_array(), SYMMETRY_TOLERANCE)
        if compared == 0 or differing / compared <= MAX_ASYMMETRIC_FRACTION:
            return []
        return [
            _warn(
                self.id,
                "Asymmetric distribution",
                "significant asymmetry detected in candela distribution",
                differing_pairs=differing,
                compared_pairs=compared,
            )
        ]
