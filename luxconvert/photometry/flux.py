from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from luxconvert.models.photometry import PhotometricMeasurements


def trapezoid_weights(x: Sequence[float]) -> np.ndarray:
    """Weights w such that sum(w * f(x)) is the trapezoidal integral of f over x."""
    xs = np.asarray(x, dtype=float)
    w = np.zeros_like(xs)
    if len(xs) < 2:
        return w
    d = np.diff(xs)
    w[:-1] += d / 2.0
    w[1:] += d / 2.0
    return w


def integrate_flux(vertical_deg: Sequence[float], horizontal_deg: Sequence[float], candela: np.ndarray) -> float:
    """
    Total flux (lm) of a gamma-major intensity grid in cd.

    The C-plane coverage is extended to the full circle: a single plane is taken
    as rotationally symmetric, partial coverage (quadrant, half) is scaled up,
    and 0..<360 data is closed at 360 with the C=0 plane.
    """
    v = np.radians(np.asarray(vertical_deg, dtype=float))
    h = np.asarray(horizontal_deg, dtype=float)
    arr = np.asarray(candela, dtype=float)
    if arr.size == 0 or len(v) < 2:
        return 0.0

    # integrate over gamma first: each C-plane -> int I(g) sin(g) dg
    per_plane = (arr * np.sin(v)[:, None] * trapezoid_weights(v)[:, None]).sum(axis=0)

    if len(h) == 1:
        return float(per_plane[0] * 2.0 * math.pi)

    if h[0] == 0.0 and 180.0 < h[-1] < 360.0:
        h = np.append(h, 360.0)
        per_plane = np.append(per_plane, per_plane[0])

    span = float(h[-1] - h[0])
    if span <= 0:
        return 0.0
    total = float((per_plane * trapezoid_weights(np.radians(h))).sum())
    return total * (360.0 / span)


def estimate_luminous_flux(photometry: PhotometricMeasurements) -> float:
    return integrate_flux(photometry.vertical_angles, photometry.horizontal_angles, photometry.absolute_candela())
