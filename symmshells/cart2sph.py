# [1] https://doi.org/10.1002/qua.560540202
#     Transformation between Cartesian and pure spherical harmonic Gaussians
#     Schlegel, Frisch, 1995

import functools
from math import sqrt

import numpy as np

from symmshells.combinatorics import binom, dfact
from symmshells.helpers import canonical_order, cart_size, nfunc_for, sph_order


def cartcoef(l: int, m: int, lx: int, ly: int, lz: int) -> float:
    """Coefficient of the Cartesian component x^lx y^ly z^lz in the real solid harmonic (l, m).

    Eq. (15) in [1], adapted to real harmonics. Positive m are cosine-type,
    negative m sine-type functions.
    """
    am = abs(m)
    if am > l:
        raise ValueError(f"Got |m| = {am} > l = {l}!")
    j = lx + ly - am
    if j % 2 == 1:
        return 0.0
    j //= 2

    # Integer products are formed exactly before converting to float
    num = binom(2 * lx, lx) * binom(2 * ly, ly) * binom(2 * lz, lz) * binom(l + am, am)
    denom = (
        binom(2 * l, l) * binom(l, am) * binom(lx + ly + lz, lx) * binom(ly + lz, ly)
    )
    dfacts = dfact(2 * lx - 1) * dfact(2 * ly - 1) * dfact(2 * lz - 1)
    c = sqrt(num / denom / dfacts) / 2**l
    if m != 0:
        c *= sqrt(2.0)

    phase = (am - lx) % 4
    if m >= 0:
        if phase % 2 == 1:
            return 0.0
        if phase == 2:
            c = -c
    else:
        if phase % 2 == 0:
            return 0.0
        if phase == 3:
            c = -c

    sum_ = 0
    for i in range((l - am) // 2 + 1):
        for k in range(j + 1):
            tmp = (
                binom(2 * l - 2 * i, l + am)
                * binom(l, i)
                * binom(i, j)
                * binom(j, k)
                * binom(am, lx - 2 * k)
            )
            if (i + k) % 2 == 1:
                tmp = -tmp
            sum_ += tmp
    return sum_ * c


@functools.cache
def _cart2sph_matrix(L: int, spherical: bool, keep_contaminants: bool) -> np.ndarray:
    ncart = cart_size(L)
    if not spherical:
        return np.eye(ncart)

    nfunc = nfunc_for(L, spherical, keep_contaminants)
    cart_inds = canonical_order(L)
    C = np.zeros((ncart, nfunc))
    sf = 0
    for l, m in sph_order(L, keep_contaminants):
        for cf, (x, y, z) in enumerate(cart_inds):
            C[cf, sf] = cartcoef(l, m, x, y, z)
        sf += 1
    assert sf == nfunc, f"Generated {sf} spherical functions, but expected {nfunc}!"
    return C


def cart2sph_matrix(
    L: int, spherical: bool = True, keep_contaminants: bool = False
) -> np.ndarray:
    """Transformation from Cartesian to spherical components of a shell.

    Rows are Cartesian components in canonical order (x descending, then y
    descending), columns are spherical components ordered by descending l and
    +m, -m pairs with m = 0 last. Returns the identity for Cartesian shells.
    """
    return _cart2sph_matrix(L, spherical, keep_contaminants).copy()
