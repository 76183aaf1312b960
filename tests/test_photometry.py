from __future__ import annotations

import math

import numpy as np
import pytest

from luxconvert.errors import SemanticError
from luxconvert.photometry.flux import estimate_luminous_flux, integrate_flux, trapezoid_weights
from luxconvert.photometry.interp import (
    nearest_c_plane_index,
    nearest_gamma_index,
    resample,
    standard_c_plane_angles,
    standard_gamma_angles,
)
from luxconvert.photometry.symmetry import (
    cie_symmetry_type,
    mirror_pair_differences,
)


def _lambertian(vertical, n_planes):
    peak = 1000.0 / math.pi
    return np.array([[peak * math.cos(math.radians(v))] * n_planes for v in vertical])


def test_standard_grid():
    assert standard_gamma_angles() == [5.0 * i for i in range(19)]
    assert standard_c_plane_angles()[-1] == 337.5


def test_c_plane_wraparound_tie_break():
    src_c = np.array([0.0, 90.0, 180.0, 270.0])
    assert nearest_c_plane_index(src_c, 350.0) == 0
    assert nearest_gamma_index(np.array([0.0, 30.0, 60.0, 90.0]), 0.0) == 0


def test_nearest_takes_first_index_on_ties():
    assert nearest_gamma_index(np.array([0.0, 10.0]), 5.0) == 0
    assert nearest_c_plane_index(np.array([0.0, 90.0]), 45.0) == 0


def test_resample_identity_and_upsampling():
    grid = [[1.0, 2.0], [3.0, 4.0]]
    assert resample([0.0, 90.0], [0.0, 180.0], grid, [0.0, 90.0], [0.0, 180.0]) == grid
    out = resample([0.0, 90.0], [0.0, 180.0], grid, [0.0, 40.0, 50.0, 90.0], [0.0, 90.0, 260.0, 350.0])
    assert out == [
        [1.0, 1.0, 2.0, 1.0],
        [1.0, 1.0, 2.0, 1.0],
        [3.0, 3.0, 4.0, 3.0],
        [3.0, 3.0, 4.0, 3.0],
    ]


def test_resample_rejects_bad_shapes():
    with pytest.raises(SemanticError):
        resample([0.0, 90.0], [0.0], [[1.0, 2.0]], [0.0], [0.0])
    with pytest.raises(SemanticError):
        resample([], [0.0], [], [0.0], [0.0])


def test_trapezoid_weights():
    assert trapezoid_weights([0.0, 1.0, 3.0]).tolist() == [0.5, 1.5, 1.0]
    assert trapezoid_weights([2.0]).tolist() == [0.0]


@pytest.mark.parametrize(
    "horizontal",
    [
        [0.0],
        [0.0, 90.0],
        [0.0, 90.0, 180.0],
        [0.0, 90.0, 180.0, 270.0],
        [0.0, 90.0, 180.0, 270.0, 360.0],
    ],
)
def test_lambertian_flux_for_any_coverage(horizontal):
    vertical = [float(v) for v in range(0, 91)]
    candela = _lambertian(vertical, len(horizontal))
    assert integrate_flux(vertical, horizontal, candela) == pytest.approx(1000.0, rel=1e-3)


def test_flux_of_degenerate_grids():
    assert integrate_flux([0.0], [0.0], np.array([[100.0]])) == 0.0
    assert integrate_flux([], [], np.zeros((0, 0))) == 0.0


def test_estimate_uses_absolute_candela(good_record):
    p = good_record.photometry
    assert estimate_luminous_flux(p) == pytest.approx(1000.0, rel=0.02)
    p.candela_multiplier = 2.0
    assert estimate_luminous_flux(p) == pytest.approx(2000.0, rel=0.02)



def test_cie_symmetry_cannot_tell_half_from_full():
    assert cie_symmetry_type([0.0]) == 1
    assert cie_symmetry_type([0.0, 45.0, 90.0]) == 1
    assert cie_symmetry_type([0.0, 90.0, 180.0]) == 0
    assert cie_symmetry_type(standard_c_plane_angles()) == 0


def test_mirror_pair_differences():
    assert mirror_pair_differences(np.array([[1.0, 2.0, 3.0, 1.0]])) == (1, 2)
    assert mirror_pair_differences(np.array([[5.0, 5.0, 5.0, 5.0]] * 3)) == (0, 6)
    # zero on either side is not counted as a difference
    assert mirror_pair_differences(np.array([[0.0, 4.0]])) == (0, 1)
    assert mirror_pair_differences(np.array([[1.0], [2.0]])) == (0, 0)
