from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np


def cie_symmetry_type(horizontal_deg: Sequence[float]) -> int:
    """
    CIE symmetry code: 1 for single-plane or quadrant data, 0 otherwise.

    Half (0..180) and full (0..360) coverage both map to 0; the code cannot tell
    them apart.
    """
    if len(horizontal_deg) <= 1:
        return 1
    if max(horizontal_deg) <= 90.0:
        return 1
    return 0


def mirror_pair_differences(candela: np.ndarray, tolerance: float = 0.10) -> Tuple[int, int]:
    """
    Compare each row's column j with column n-1-j.

    Returns (pairs differing by more than `tolerance` relative, total compared
    slots). Pairs where either value is zero are not counted as differing; the
    total is rows * (n // 2).
    """
    arr = np.asarray(candela, dtype=float)
    if arr.ndim != 2 or arr.shape[1] < 2:
        return 0, 0
    n = arr.shape[1]
    half = n // 2
    left = arr[:, :half]
    right = arr[:, ::-1][:, :half]
    both = (left > 0) & (right > 0)
    denom = np.maximum(left, right)
    with np.errstate(divide="ignore", invalid="ignore"):
        rel = np.where(both, np.abs(left - right) / np.where(denom > 0, denom, 1.0), 0.0)
    differing = int(np.count_nonzero(both & (rel > tolerance)))
    return differing, arr.shape[0] * half
