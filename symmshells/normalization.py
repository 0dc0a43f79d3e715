import numpy as np

from symmshells.config import PI2_N34
from symmshells.exceptions import NormalizationError


def primitive_norm(L: int, exps: np.ndarray) -> np.ndarray:
    """Normalization factors of primitive Gaussians x^L exp(-a r²)."""
    exps = np.asarray(exps, dtype=float)
    return PI2_N34 * (4 * exps) ** ((L + 1.5) / 2)


def primitive_overlaps(L: int, exps: np.ndarray) -> np.ndarray:
    """Overlaps between normalized primitives sharing the same angular part."""
    exps = np.asarray(exps, dtype=float)
    zeta = np.sqrt(exps[:, None] * exps[None, :]) / (exps[:, None] + exps[None, :])
    return (2 * zeta) ** (L + 1.5)


def norm_cgto(coeffs: np.ndarray, exps: np.ndarray, L: int, shell: str = "") -> np.ndarray:
    """Normalize contraction coefficients in place.

    coeffs has shape (nprim, ncontr). Every column is rescaled, so that the
    contracted function built from normalized primitives has unit norm and
    the primitive normalization factors are absorbed into the coefficients.
    """
    S = primitive_overlaps(L, exps)
    N = primitive_norm(L, exps)
    # All columns are checked before any of them is rescaled
    norms = np.einsum("ji,jk,ki->i", coeffs, S, coeffs)
    for i, norm in enumerate(norms):
        if not norm > 0.0:
            raise NormalizationError(i, norm, shell)
    coeffs *= N[:, None] / np.sqrt(norms)[None, :]
    return coeffs


def contracted_self_overlap(coeffs: np.ndarray, exps: np.ndarray, L: int) -> np.ndarray:
    """Self-overlaps of the contracted functions from absorbed coefficients.

    Uses the analytic overlap of raw primitives x^L exp(-a r²), divided by
    (2L - 1)!!, i.e., the normalization of the Cartesian component itself.

        S_ab = (π / (a + b))^(3/2) / (2 (a + b))^L
    """
    coeffs = np.asarray(coeffs, dtype=float)
    if coeffs.ndim == 1:
        coeffs = coeffs[:, None]
    exps = np.asarray(exps, dtype=float)
    p = exps[:, None] + exps[None, :]
    S = (np.pi / p) ** 1.5 / (2 * p) ** L
    return np.einsum("ji,jk,ki->i", coeffs, S, coeffs)
