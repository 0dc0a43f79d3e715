import numpy as np
import pytest

from symmshells.cart2sph import cart2sph_matrix, cartcoef
from symmshells.helpers import canonical_order, cart_size, sph_order
from symmshells.sym_solid_harmonics import Rlm_cart2sph, cart2sph_deviations


@pytest.mark.parametrize("L", range(5))
def test_cartesian_identity(L):
    C = cart2sph_matrix(L, spherical=False)
    np.testing.assert_allclose(C, np.eye(cart_size(L)))


@pytest.mark.parametrize("L", range(6))
@pytest.mark.parametrize("keep_contaminants", (False, True))
def test_shape(L, keep_contaminants):
    C = cart2sph_matrix(L, keep_contaminants=keep_contaminants)
    ncols = len(sph_order(L, keep_contaminants))
    assert C.shape == (cart_size(L), ncols)
    if keep_contaminants:
        assert ncols == cart_size(L)


@pytest.mark.parametrize("l", range(5))
def test_cartcoef_odd_j_vanishes(l):
    for m in range(-l, l + 1):
        for lx, ly, lz in canonical_order(l):
            if (lx + ly - abs(m)) % 2 == 1:
                assert cartcoef(l, m, lx, ly, lz) == 0.0


def test_s():
    C = cart2sph_matrix(0)
    np.testing.assert_allclose(C, [[1.0]])


def test_p():
    # Columns m = +1, -1, 0 are x, y and z
    ref = cartcoef(1, 1, 1, 0, 0)
    assert ref != 0.0
    assert cartcoef(1, -1, 0, 1, 0) == pytest.approx(ref)
    assert cartcoef(1, 0, 0, 0, 1) == pytest.approx(ref)
    C = cart2sph_matrix(1)
    np.testing.assert_allclose(C, ref * np.eye(3))


def test_d():
    C = cart2sph_matrix(2)
    # Rows: xx, xy, xz, yy, yz, zz; columns: +2, -2, +1, -1, 0
    sqrt3 = np.sqrt(3)
    ref = np.array(
        (
            (0.5, 0.0, 0.0, 0.0, -0.5 / sqrt3),
            (0.0, 1.0, 0.0, 0.0, 0.0),
            (0.0, 0.0, 1.0, 0.0, 0.0),
            (-0.5, 0.0, 0.0, 0.0, -0.5 / sqrt3),
            (0.0, 0.0, 0.0, 1.0, 0.0),
            (0.0, 0.0, 0.0, 0.0, 1 / sqrt3),
        )
    )
    np.testing.assert_allclose(C, ref, atol=1e-14)


def test_d_contaminants():
    C = cart2sph_matrix(2, keep_contaminants=True)
    assert C.shape == (6, 6)
    np.testing.assert_allclose(C[:, :5], cart2sph_matrix(2))
    assert np.linalg.matrix_rank(C) == 6


def test_f_sine_type():
    # R_3,-3 is proportional to 3x²y - y³
    xxy = cartcoef(3, -3, 2, 1, 0)
    yyy = cartcoef(3, -3, 0, 3, 0)
    assert xxy == pytest.approx(-3 * yyy)
    assert cartcoef(3, 3, 2, 1, 0) == 0.0


@pytest.mark.parametrize("L", range(5))
def test_solid_harmonics(L):
    """Every column is parallel to the symbolic real solid harmonic."""
    C = cart2sph_matrix(L)
    R = Rlm_cart2sph(L)
    for (l, m), col, ref in zip(sph_order(L), C.T, R.T):
        cos = col @ ref / (np.linalg.norm(col) * np.linalg.norm(ref))
        assert abs(cos) == pytest.approx(1.0), f"(l, m)=({l}, {m})"
    assert cart2sph_deviations(L).max() < 1e-12


def test_copies():
    C = cart2sph_matrix(2)
    C[:] = 0.0
    assert np.abs(cart2sph_matrix(2)).max() > 0.0


@pytest.mark.parametrize("L", range(1, 4))
def test_linear_independence(L):
    C = cart2sph_matrix(L)
    assert np.linalg.matrix_rank(C) == 2 * L + 1


@pytest.mark.parametrize("l, m", ((0, 1), (1, -2), (2, 3)))
def test_m_exceeds_l(l, m):
    with pytest.raises(ValueError):
        cartcoef(l, m, l, 0, 0)
