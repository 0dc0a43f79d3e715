"""
Contracted shell on a set of symmetry-equivalent centers.

Each AO function of the shell yields ndegen symmetry-adapted functions, one per
center in the orbit. The irreps they belong to are determined by projecting the
function onto the degenerate centers with the characters of every irrep; a
non-zero projection marks an irrep the function contributes to.
"""

from typing import Iterator, Tuple

import numpy as np

from symmshells.cart2sph import cart2sph_matrix
from symmshells.exceptions import ShellInputError, SymmetryError
from symmshells.helpers import (
    L_MAP,
    canonical_order,
    cart_size,
    nfunc_for,
    sph_order,
    sph_size,
)
from symmshells.logger import logger
from symmshells.normalization import norm_cgto
from symmshells.symmetry import Center


class Shell:
    def __init__(
        self,
        center: Center,
        L: int,
        exponents,
        coefficients,
        spherical: bool = True,
        keep_contaminants: bool = False,
    ):
        self.center = center
        # Plain int from the start, so that error messages carry the shell label
        if isinstance(L, np.integer):
            L = int(L)
        self.L = L
        self.spherical = spherical
        self.keep_contaminants = keep_contaminants
        self.exponents = np.asarray(exponents, dtype=float)
        # Kept as given, so that normalization acts on the caller's array
        coefficients = np.asarray(coefficients, dtype=float)
        if coefficients.ndim == 1:
            coefficients = coefficients[:, None]
        self.coefficients = coefficients

        try:
            self._check_input()
            self.parity = self._build_parity()
            self._classify()
            norm_cgto(self.coefficients, self.exponents, self.L, shell=self.name)
        except ValueError as err:
            logger.error(f"Setup of {self.name} on {self.center} failed: {err}")
            raise
        self.cart2spher = cart2sph_matrix(self.L, spherical, keep_contaminants)

        for arr in (
            self.parity,
            self.irreps,
            self.func_irrep,
            self.irrep_pos,
            self.nirrep_per_func,
            self.nfunc_per_irrep,
            self.cart2spher,
        ):
            arr.flags.writeable = False
        logger.debug(
            f"{self.name}: nfunc={self.nfunc}, ndegen={self.ndegen}, "
            f"functions per irrep {self.nfunc_per_irrep.tolist()}"
        )

    @property
    def name(self) -> str:
        L_str = L_MAP.get(self.L, str(self.L)) if isinstance(self.L, int) else self.L
        kind = "spherical" if self.spherical else "Cartesian"
        return f"{kind} {L_str}-shell"

    @property
    def group(self):
        return self.center.group

    @property
    def nprim(self) -> int:
        return self.coefficients.shape[0]

    @property
    def ncontr(self) -> int:
        return self.coefficients.shape[1]

    @property
    def ndegen(self) -> int:
        return self.center.ndegen

    @property
    def nfunc(self) -> int:
        return nfunc_for(self.L, self.spherical, self.keep_contaminants)

    @property
    def cart_size(self) -> int:
        return cart_size(self.L)

    @property
    def sph_size(self) -> int:
        return sph_size(self.L)

    def _check_input(self):
        L = self.L
        if isinstance(L, bool) or not isinstance(L, (int, np.integer)) or L < 0:
            raise ShellInputError(f"Angular momentum must be a non-negative integer, got {L}!")
        self.L = int(L)
        if self.exponents.ndim != 1 or self.exponents.size == 0:
            raise ShellInputError("At least one primitive exponent is required!")
        if (self.exponents <= 0.0).any():
            raise ShellInputError(f"Exponents must be positive, got {self.exponents}!")
        if self.coefficients.ndim != 2 or self.coefficients.shape[1] == 0:
            raise ShellInputError("At least one contraction column is required!")
        if self.coefficients.shape[0] != self.exponents.size:
            raise ShellInputError(
                f"Got {self.coefficients.shape[0]} coefficient rows for "
                f"{self.exponents.size} exponents!"
            )

        group = self.group
        ndegen = self.ndegen
        if group.order % ndegen != 0:
            raise SymmetryError(
                f"{self.name} on {self.center}: orbit of size {ndegen} is "
                f"incompatible with group order {group.order}!"
            )
        op_map = self.center.op_map
        if op_map.shape != (group.order,) or (op_map < 0).any() or (op_map >= ndegen).any():
            raise SymmetryError(
                f"{self.name} on {self.center}: operation map {op_map.tolist()} "
                f"does not map onto the {ndegen} centers of the orbit!"
            )

    def func_iter(self) -> Iterator[Tuple[int, ...]]:
        """Quantum numbers of the shell's functions in canonical order.

        (l, m) pairs for spherical shells, (x, y, z) exponents otherwise."""
        if self.spherical:
            return iter(sph_order(self.L, self.keep_contaminants))
        return iter(canonical_order(self.L))

    def _build_parity(self) -> np.ndarray:
        group = self.group
        if self.spherical:
            parity_func = group.spherical_parity
        else:
            parity_func = group.cartesian_parity
        funcs = list(self.func_iter())
        parity = np.empty((len(funcs), group.order), dtype=int)
        for op in range(group.order):
            for f, qns in enumerate(funcs):
                parity[f, op] = -1 if parity_func(*qns, op) < 0 else 1
        return parity

    def _classify(self):
        """Irreps of the symmetry-adapted functions arising from every AO function.

        For each function f and irrep, the characters multiplied by the
        function's parities are accumulated per center of the orbit. A
        non-zero projection assigns the function to the irrep in the next free
        slot i:

            irrep_pos[f, irrep] = i
            func_irrep[f, i] = nfunc_per_irrep[irrep]
            irreps[f, i] = irrep

        A function may be assigned to several irreps.
        """
        group = self.group
        nirrep = group.nirrep
        order = group.order
        ndegen = self.ndegen
        nfunc = self.nfunc
        stride = order // ndegen
        op_map = self.center.op_map

        self.irreps = np.full((nfunc, nirrep), -1, dtype=int)
        self.func_irrep = np.full((nfunc, nirrep), -1, dtype=int)
        self.irrep_pos = np.full((nfunc, nirrep), -1, dtype=int)
        self.nirrep_per_func = np.zeros(nfunc, dtype=int)
        self.nfunc_per_irrep = np.zeros(nirrep, dtype=int)

        for f in range(nfunc):
            i = 0
            for irrep in range(nirrep):
                signs = np.where(group.characters[irrep] * self.parity[f] < 0, -1, 1)
                proj = np.zeros(ndegen, dtype=int)
                np.add.at(proj, op_map, signs)
                # Integer division, truncating towards zero
                proj = np.sign(proj) * (np.abs(proj) // stride)
                if np.abs(proj).sum() > 0:
                    self.irrep_pos[f, irrep] = i
                    self.func_irrep[f, i] = self.nfunc_per_irrep[irrep]
                    self.irreps[f, i] = irrep
                    self.nfunc_per_irrep[irrep] += 1
                    i += 1
            self.nirrep_per_func[f] = i

        if (nso := self.nfunc_per_irrep.sum()) != nfunc * ndegen:
            raise SymmetryError(
                f"{self.name} on {self.center}: {nso} symmetry-adapted functions "
                f"were classified, but {nfunc} functions on {ndegen} centers "
                f"require {nfunc * ndegen}!"
            )

    def func_irreps(self, func: int) -> np.ndarray:
        """Irreps the AO function 'func' contributes to."""
        return self.irreps[func, : self.nirrep_per_func[func]]

    def __str__(self):
        return f"Shell({self.name}, nprim={self.nprim}, ncontr={self.ncontr})"

    def __repr__(self):
        return self.__str__()
