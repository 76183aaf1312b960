from __future__ import annotations

from typing import List, Sequence

import numpy as np

from luxconvert.models.photometry import UNKNOWN, PhotometricRecord
from luxconvert.models.validation import ValidationFinding


MAX_INTENSITY_CD = 1_000_000.0
HIGH_INTENSITY_CD = 100_000.0
LOW_INTENSITY_CD = 0.001
MAX_ZERO_FRACTION = 0.5
MAX_DYNAMIC_RANGE = 10_000.0
MAX_INCREMENT_RATIO = 10.0


class RuleIntensityRange:
    id = "PHOT_INTENSITY_RANGE"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        arr = record.photometry.absolute_candela()
        peak = float(arr.max()) if arr.size else 0.0
        if peak <= 0:
            return [
                ValidationFinding(
                    id=self.id,
                    severity="WARN",
                    title="No light output",
                    message="maximum intensity is zero",
                    evidence={"max_cd": peak},
                )
            ]
        if peak > MAX_INTENSITY_CD:
            return [
                ValidationFinding(
                    id=self.id,
                    severity="WARN",
                    title="Intensity unusually high",
                    message="maximum intensity is unusually high (>1,000,000 cd)",
                    evidence={"max_cd": peak},
                    suggested_fix="Check the candela multiplier and the units of the source file.",
                )
            ]
        if peak > HIGH_INTENSITY_CD:
            return [
                ValidationFinding(
                    id=self.id,
                    severity="WARN",
                    title="Intensity high",
                    message="maximum candela value seems unusually high (>100,000 cd)",
                    evidence={"max_cd": peak},
                )
            ]
        return []


class RuleCandelaDistribution:
    """Zero-heavy tables, vanishing minima and extreme dynamic range."""

    id = "PHOT_CANDELA_DISTRIBUTION"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        arr = record.photometry.absolute_candela()
        if arr.size == 0:
            return []
        out: List[ValidationFinding] = []
        zeros = int(np.count_nonzero(arr == 0))
        if zeros / arr.size > MAX_ZERO_FRACTION:
            out.append(
                ValidationFinding(
                    id=self.id,
                    severity="WARN",
                    title="Mostly zero intensities",
                    message="more than 50% of candela values are zero",
                    evidence={"zero_values": zeros, "total_values": int(arr.size)},
                )
            )
        positive = arr[arr > 0]
        if positive.size:
            lo, hi = float(positive.min()), float(positive.max())
            if lo < LOW_INTENSITY_CD:
                out.append(
                    ValidationFinding(
                        id=self.id,
                        severity="WARN",
                        title="Vanishing intensity",
                        message="minimum candela value seems unusually low (<0.001 cd)",
                        evidence={"min_cd": lo},
                    )
                )
            if hi / lo > MAX_DYNAMIC_RANGE:
                out.append(
                    ValidationFinding(
                        id=self.id,
                        severity="WARN",
                        title="Extreme dynamic range",
                        message="very high dynamic range in candela values (>10,000:1)",
                        evidence={"min_cd": lo, "max_cd": hi},
                    )
                )
        return out


def _increment_ratio(angles: Sequence[float]) -> float:
    if len(angles) < 3:
        return 1.0
    inc = np.diff(np.asarray(angles, dtype=float))
    return float(inc.max() / inc.min())


class RuleAngleIncrements:
    id = "PHOT_ANGLE_INCREMENTS"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        p = record.photometry
        out: List[ValidationFinding] = []
        for name, angles in (("vertical", p.vertical_angles), ("horizontal", p.horizontal_angles)):
            ratio = _increment_ratio(angles)
            if ratio > MAX_INCREMENT_RATIO:
                out.append(
                    ValidationFinding(
                        id=self.id,
                        severity="WARN",
                        title="Inconsistent angle increments",
                        message=f"inconsistent {name} angle increments",
                        evidence={"max_min_ratio": ratio},
                    )
                )
        return out


class RuleMetadataCompleteness:
    id = "PHOT_METADATA"

    def evaluate(self, record: PhotometricRecord) -> List[ValidationFinding]:
        m = record.metadata
        out: List[ValidationFinding] = []
        if m.manufacturer.strip() in ("", UNKNOWN):
            out.append(
                ValidationFinding(
                    id=self.id,
                    severity="WARN",
                    title="Manufacturer missing",
                    message="manufacturer information is missing",
                    suggested_fix="Supply the manufacturer as a metadata override.",
                )
            )
        if m.catalog_number.strip() in ("", UNKNOWN):
            out.append(
                ValidationFinding(
                    id=self.id,
                    severity="WARN",
                    title="Catalog number missing",
                    message="catalog number is missing",
                    suggested_fix="Supply the catalog number as a metadata override.",
                )
            )
        return out
