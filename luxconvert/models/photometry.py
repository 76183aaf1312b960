from __future__ import annotations

import copy
import math
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Literal, Sequence

import numpy as np

from luxconvert.errors import SemanticError, ValidationError


PhotometryType = Literal["A", "B", "C"]
UnitsType = Literal["absolute", "relative"]

UNKNOWN = "Unknown"

PHOTOMETRY_TYPES = ("A", "B", "C")
UNITS_TYPES = ("absolute", "relative")

ELECTRICAL_TOLERANCE = 0.10


def _check_finite(section: str, name: str, value: float) -> None:
    if not math.isfinite(value):
        raise SemanticError(f"{section.upper()}_NOT_FINITE", f"{name} must be finite", context={"field": name, "value": value})


def _check_ascending(name: str, values: Sequence[float], lo: float, hi: float) -> None:
    if not values:
        raise SemanticError("ANGLES_EMPTY", f"{name} must not be empty")
    prev = None
    for i, a in enumerate(values):
        if not math.isfinite(a) or a < lo or a > hi:
            raise SemanticError(
                "ANGLE_OUT_OF_RANGE",
                f"{name}[{i}]={a} outside {lo:g}..{hi:g} degrees",
                context={"index": i, "value": a},
            )
        if prev is not None and a <= prev:
            raise SemanticError(
                "ANGLES_NOT_ASCENDING",
                f"{name} must be strictly ascending ({prev} then {a})",
                context={"index": i},
            )
        prev = a


@dataclass
class Metadata:
    manufacturer: str = UNKNOWN
    catalog_number: str = UNKNOWN
    description: str = ""
    luminaire_type: str = ""
    test_lab: str = ""
    test_date: str = ""
    test_number: str = ""

    def defaulted(self) -> "Metadata":
        return replace(
            self,
            manufacturer=self.manufacturer.strip() or UNKNOWN,
            catalog_number=self.catalog_number.strip() or UNKNOWN,
        )

    def validate(self) -> None:
        if not self.manufacturer.strip():
            raise SemanticError("MISSING_MANUFACTURER", "manufacturer is required")
        if not self.catalog_number.strip():
            raise SemanticError("MISSING_CATALOG_NUMBER", "catalog number is required")


@dataclass
class Geometry:
    """Luminaire and luminous-opening dimensions in meters."""

    length: float = 0.0
    width: float = 0.0
    height: float = 0.0
    luminous_length: float = 0.0
    luminous_width: float = 0.0
    luminous_height: float = 0.0

    def validate(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            _check_finite("geometry", f.name, v)
            if v < 0:
                raise SemanticError("NEGATIVE_DIMENSION", f"{f.name} must be >= 0", context={"field": f.name, "value": v})
        for dim in ("length", "width", "height"):
            physical = getattr(self, dim)
            luminous = getattr(self, f"luminous_{dim}")
            if physical > 0 and luminous > physical:
                raise SemanticError(
                    "LUMINOUS_EXCEEDS_PHYSICAL",
                    f"luminous {dim} ({luminous:g} m) exceeds luminaire {dim} ({physical:g} m)",
                    context={"dimension": dim},
                )


@dataclass
class PhotometricMeasurements:
    photometry_type: PhotometryType = "C"
    units_type: UnitsType = "absolute"
    luminous_flux: float = 0.0
    candela_multiplier: float = 1.0
    vertical_angles: List[float] = field(default_factory=list)
    horizontal_angles: List[float] = field(default_factory=list)
    # rows follow vertical_angles, columns follow horizontal_angles
    candela_values: List[List[float]] = field(default_factory=list)

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.vertical_angles), len(self.horizontal_angles)

    def check_shape(self) -> None:
        nv, nh = self.shape
        if len(self.candela_values) != nv:
            raise SemanticError(
                "CANDELA_SHAPE_MISMATCH",
                f"candela matrix has {len(self.candela_values)} rows, expected {nv} (one per vertical angle)",
                context={"rows": len(self.candela_values), "vertical_angles": nv},
            )
        for i, row in enumerate(self.candela_values):
            if len(row) != nh:
                raise SemanticError(
                    "CANDELA_SHAPE_MISMATCH",
                    f"candela row {i} has {len(row)} values, expected {nh} (one per horizontal angle)",
                    context={"row": i, "values": len(row), "horizontal_angles": nh},
                )

    def validate(self) -> None:
        if self.photometry_type not in PHOTOMETRY_TYPES:
            raise SemanticError("INVALID_PHOTOMETRY_TYPE", f"photometry type must be A, B or C, got {self.photometry_type!r}")
        if self.units_type not in UNITS_TYPES:
            raise SemanticError("INVALID_UNITS_TYPE", f"units type must be absolute or relative, got {self.units_type!r}")
        _check_finite("photometry", "luminous_flux", self.luminous_flux)
        if self.luminous_flux < 0:
            raise SemanticError("NEGATIVE_FLUX", f"luminous flux must be >= 0, got {self.luminous_flux:g}")
        _check_finite("photometry", "candela_multiplier", self.candela_multiplier)
        if self.candela_multiplier <= 0:
            raise SemanticError("INVALID_MULTIPLIER", f"candela multiplier must be > 0, got {self.candela_multiplier:g}")
        _check_ascending("vertical angles", self.vertical_angles, 0.0, 180.0)
        _check_ascending("horizontal angles", self.horizontal_angles, 0.0, 360.0)
        self.check_shape()
        for i, row in enumerate(self.candela_values):
            for j, v in enumerate(row):
                if not math.isfinite(v):
                    raise SemanticError("CANDELA_NOT_FINITE", f"candela[{i}][{j}] is not finite", context={"row": i, "col": j})
                if v < 0:
                    raise SemanticError(
                        "NEGATIVE_CANDELA",
                        f"candela[{i}][{j}]={v:g} is negative",
                        context={"row": i, "col": j},
                    )

    def candela_array(self) -> np.ndarray:
        self.check_shape()
        return np.asarray(self.candela_values, dtype=float).reshape(self.shape)

    def absolute_candela(self) -> np.ndarray:
        """Intensities in cd; relative (cd/lm) data is scaled by the declared flux when known."""
        arr = self.candela_array() * float(self.candela_multiplier)
        if self.units_type == "relative" and self.luminous_flux > 0:
            arr = arr * float(self.luminous_flux)
        return arr


@dataclass
class ElectricalData:
    input_watts: float = 0.0
    ballast_factor: float = 1.0
    ballast_lamp_factor: float = 1.0
    input_voltage: float = 0.0
    input_current: float = 0.0
    power_factor: float = 0.0

    def validate(self) -> None:
        for f in fields(self):
            v = getattr(self, f.name)
            _check_finite("electrical", f.name, v)
            if v < 0:
                raise SemanticError("NEGATIVE_ELECTRICAL_VALUE", f"{f.name} must be >= 0", context={"field": f.name, "value": v})
        if self.ballast_factor > 2.0:
            raise SemanticError("INVALID_BALLAST_FACTOR", f"ballast factor {self.ballast_factor:g} outside 0..2")
        if self.ballast_lamp_factor > 2.0:
            raise SemanticError("INVALID_BALLAST_LAMP_FACTOR", f"ballast-lamp factor {self.ballast_lamp_factor:g} outside 0..2")
        if self.power_factor > 1.0:
            raise SemanticError("INVALID_POWER_FACTOR", f"power factor {self.power_factor:g} outside 0..1")
        if self.input_watts > 0 and self.input_voltage > 0 and self.input_current > 0 and self.power_factor > 0:
            expected = self.input_voltage * self.input_current * self.power_factor
            if abs(self.input_watts - expected) / expected > ELECTRICAL_TOLERANCE:
                raise SemanticError(
                    "ELECTRICAL_INCONSISTENT",
                    f"input watts {self.input_watts:g} W inconsistent with V*I*PF = {expected:.2f} W",
                    context={"expected_watts": round(expected, 3)},
                )


@dataclass
class PhotometricRecord:
    metadata: Metadata = field(default_factory=Metadata)
    geometry: Geometry = field(default_factory=Geometry)
    photometry: PhotometricMeasurements = field(default_factory=PhotometricMeasurements)
    electrical: ElectricalData = field(default_factory=ElectricalData)

    def validate(self) -> None:
        """Raise ValidationError on the first invalid section (metadata, geometry, photometry, electrical)."""
        for section in ("metadata", "geometry", "photometry", "electrical"):
            try:
                getattr(self, section).validate()
            except SemanticError as e:
                raise ValidationError(
                    "RECORD_INVALID",
                    f"{section} validation failed: {e.message}",
                    context={"section": section},
                    cause=e,
                ) from e

    def copy(self) -> "PhotometricRecord":
        return copy.deepcopy(self)

    def with_metadata(self, **overrides: str) -> "PhotometricRecord":
        known = {f.name for f in fields(Metadata)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown metadata field(s): {', '.join(unknown)}")
        out = self.copy()
        out.metadata = replace(out.metadata, **overrides)
        return out

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_record(record: PhotometricRecord) -> None:
    record.validate()
