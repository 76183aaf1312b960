from __future__ import annotations

from typing import List, Sequence

import numpy as np

from luxconvert.errors import SemanticError


GAMMA_STEP_DEG = 5.0
C_PLANE_STEP_DEG = 22.5


def standard_gamma_angles() -> List[float]:
    """CIE i-table gamma angles: 0..90 in 5 degree steps (19 values)."""
    return [i * GAMMA_STEP_DEG for i in range(19)]


def standard_c_plane_angles() -> List[float]:
    """CIE i-table C-plane angles: 0..337.5 in 22.5 degree steps (16 values)."""
    return [i * C_PLANE_STEP_DEG for i in range(16)]


def nearest_gamma_index(src_gamma: np.ndarray, target: float) -> int:
    # argmin returns the first index on ties
    return int(np.argmin(np.abs(src_gamma - float(target))))


def nearest_c_plane_index(src_c: np.ndarray, target: float, period: float = 360.0) -> int:
    direct = np.abs(src_c - float(target))
    wrapped = np.abs(direct - period)
    return int(np.argmin(np.minimum(direct, wrapped)))


def resample(
    src_gamma: Sequence[float],
    src_c: Sequence[float],
    src_grid: Sequence[Sequence[float]],
    dst_gamma: Sequence[float],
    dst_c: Sequence[float],
) -> List[List[float]]:
    """
    Nearest-neighbour resampling of a gamma-major grid onto new angles.

    C-plane distances consider the 360 degree wraparound, so 350 is closer to 0
    than to 270.
    """
    g = np.asarray(src_gamma, dtype=float)
    c = np.asarray(src_c, dtype=float)
    if len(g) == 0 or len(c) == 0:
        raise SemanticError("RESAMPLE_EMPTY_SOURCE", "source grid has no angles")
    grid = np.asarray(src_grid, dtype=float)
    if grid.shape != (len(g), len(c)):
        raise SemanticError(
            "CANDELA_SHAPE_MISMATCH",
            f"source grid shape {grid.shape} does not match {len(g)} gamma x {len(c)} C-plane angles",
        )

    gi = [nearest_gamma_index(g, t) for t in dst_gamma]
    ci = [nearest_c_plane_index(c, t) for t in dst_c]
    return grid[np.ix_(gi, ci)].tolist()
