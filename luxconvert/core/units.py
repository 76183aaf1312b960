from __future__ import annotations

FT_TO_M = 0.3048
MM_PER_M = 1000.0


def unit_scale_to_m(unit: str) -> float:
    u = str(unit).lower()
    if u == "m":
        return 1.0
    if u == "mm":
        return 1.0 / MM_PER_M
    if u == "ft":
        return FT_TO_M
    raise ValueError(f"Unknown length unit: {unit}")


def to_meters(value: float, unit: str) -> float:
    # millimetres divide so that e.g. 600 mm is exactly 0.6 m
    if str(unit).lower() == "mm":
        return float(value) / MM_PER_M
    return float(value) * unit_scale_to_m(unit)


def from_meters(value_m: float, unit: str) -> float:
    if str(unit).lower() == "mm":
        return float(value_m) * MM_PER_M
    return float(value_m) / unit_scale_to_m(unit)
