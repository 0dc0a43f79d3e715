"""
Symbolic real regular solid harmonics R_lm(x, y, z), see
    https://en.wikipedia.org/wiki/Solid_harmonics#Real_form

Independent reference for the analytic Cartesian to spherical transformation
in symmshells.cart2sph.
"""

import functools

import numpy as np
import sympy as sym

from symmshells.cart2sph import cart2sph_matrix
from symmshells.helpers import canonical_order, sph_order


x, y, z = sym.symbols("x y z", real=True)
r2 = x**2 + y**2 + z**2


def zpart(l, am):
    terms = [
        (-1) ** k
        * sym.binomial(l, k)
        * sym.binomial(2 * l - 2 * k, l)
        * sym.factorial(l - 2 * k)
        / sym.factorial(l - 2 * k - am)
        * r2**k
        * z ** (l - 2 * k - am)
        for k in range((l - am) // 2 + 1)
    ]
    return sym.Add(*terms) / sym.Integer(2) ** l


def Rlm(l, m):
    am = abs(m)
    # cos(mφ) from the real, sin(mφ) from the imaginary part of (x + iy)^|m|
    re, im = sym.expand((x + sym.I * y) ** am).as_real_imag()
    xypart = im if m < 0 else re
    prefact = sym.sqrt((2 - int(m == 0)) * sym.factorial(l - am) / sym.factorial(l + am))
    return sym.expand(prefact * zpart(l, am) * xypart)


@functools.cache
def Rlm_poly(l, m):
    return sym.Poly(Rlm(l, m), x, y, z)


def Rlm_cart_coeffs(L, l, m):
    """Coefficients of the raw monomials x^a y^b z^c, a + b + c = L, in R_lm.

    Monomials of R_lm with a total degree different from L are dropped, so only
    l = L gives the complete harmonic.
    """
    terms = Rlm_poly(l, m).as_dict()
    return np.array([float(terms.get(lmn, 0)) for lmn in canonical_order(L)])


def Rlm_cart2sph(L):
    """Unnormalized Cartesian to spherical transformation for a pure l = L shell."""
    return np.stack([Rlm_cart_coeffs(L, l, m) for l, m in sph_order(L)], axis=1)


def cart2sph_deviations(L):
    """1 - |cos| of the angle between analytic and symbolic columns, per (l, m).

    Zero when every column of cart2sph_matrix(L) is parallel to R_lm."""
    C = cart2sph_matrix(L)
    R = Rlm_cart2sph(L)
    cos = np.einsum("ij,ij->j", C, R) / (
        np.linalg.norm(C, axis=0) * np.linalg.norm(R, axis=0)
    )
    return 1.0 - np.abs(cos)
