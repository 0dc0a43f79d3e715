"""
Abelian point groups (D2h and its subgroups) and symmetry-equivalent centers.

Every operation of these groups is diagonal in Cartesian space, so it is fully
described by the signs it applies to x, y and z. Irreps are labeled by a
representative Cartesian monomial; its parities under the operations are the
characters of the irrep.
"""

from dataclasses import dataclass, field
import functools
from typing import Dict, Sequence, Tuple

import numpy as np

from symmshells.config import ORBIT_TOL
from symmshells.exceptions import SymmetryError


OP_SIGNS = {
    "E": (1, 1, 1),
    "C2z": (-1, -1, 1),
    "C2y": (-1, 1, -1),
    "C2x": (1, -1, -1),
    "i": (-1, -1, -1),
    "sxy": (1, 1, -1),
    "sxz": (1, -1, 1),
    "syz": (-1, 1, 1),
}


# Operations and irreps (label, representative monomial) in Cotton order.
GROUP_TABLE: Dict[str, Tuple[Tuple[str, ...], Tuple[Tuple[str, Tuple[int, int, int]], ...]]] = {
    "C1": (("E",), (("A", (0, 0, 0)),)),
    "Ci": (("E", "i"), (("Ag", (0, 0, 0)), ("Au", (1, 0, 0)))),
    "Cs": (("E", "sxy"), (("A'", (0, 0, 0)), ("A''", (0, 0, 1)))),
    "C2": (("E", "C2z"), (("A", (0, 0, 0)), ("B", (1, 0, 0)))),
    "C2v": (
        ("E", "C2z", "sxz", "syz"),
        (
            ("A1", (0, 0, 1)),
            ("A2", (1, 1, 0)),
            ("B1", (1, 0, 0)),
            ("B2", (0, 1, 0)),
        ),
    ),
    "C2h": (
        ("E", "C2z", "i", "sxy"),
        (
            ("Ag", (0, 0, 0)),
            ("Bg", (1, 0, 1)),
            ("Au", (0, 0, 1)),
            ("Bu", (1, 0, 0)),
        ),
    ),
    "D2": (
        ("E", "C2z", "C2y", "C2x"),
        (
            ("A", (0, 0, 0)),
            ("B1", (0, 0, 1)),
            ("B2", (0, 1, 0)),
            ("B3", (1, 0, 0)),
        ),
    ),
    "D2h": (
        ("E", "C2z", "C2y", "C2x", "i", "sxy", "sxz", "syz"),
        (
            ("Ag", (0, 0, 0)),
            ("B1g", (1, 1, 0)),
            ("B2g", (1, 0, 1)),
            ("B3g", (0, 1, 1)),
            ("Au", (1, 1, 1)),
            ("B1u", (0, 0, 1)),
            ("B2u", (0, 1, 0)),
            ("B3u", (1, 0, 0)),
        ),
    ),
}


def sph_parity_monomial(l: int, m: int) -> Tuple[int, int, int]:
    """Cartesian monomial with the same parities as the real solid harmonic R_lm.

    Cosine-type functions (m >= 0) contain x^|m| (up to even powers of y),
    sine-type functions (m < 0) contain x^(|m| - 1) y."""
    am = abs(m)
    if m >= 0:
        return (am, 0, l - am)
    return (am - 1, 1, l - am)


@dataclass(frozen=True, eq=False)
class PointGroup:
    label: str
    op_labels: Tuple[str, ...]
    irrep_labels: Tuple[str, ...]
    ops: np.ndarray
    characters: np.ndarray

    def __post_init__(self):
        self.ops.flags.writeable = False
        self.characters.flags.writeable = False

    @staticmethod
    @functools.cache
    def from_label(label: str) -> "PointGroup":
        try:
            op_labels, irreps = GROUP_TABLE[label]
        except KeyError:
            raise SymmetryError(
                f"Unknown point group '{label}'! Valid groups are {tuple(GROUP_TABLE)}."
            )
        ops = np.array([OP_SIGNS[op] for op in op_labels], dtype=int)
        irrep_labels = tuple([irrep for irrep, _ in irreps])
        # Character of an irrep is the parity of its representative monomial
        characters = np.array(
            [np.prod(ops ** np.array(monomial), axis=1) for _, monomial in irreps],
            dtype=float,
        )
        return PointGroup(label, tuple(op_labels), irrep_labels, ops, characters)

    @property
    def order(self) -> int:
        return len(self.op_labels)

    @property
    def nirrep(self) -> int:
        return len(self.irrep_labels)

    def character(self, irrep: int, op: int) -> float:
        return self.characters[irrep, op]

    def cartesian_parity(self, x: int, y: int, z: int, op: int) -> int:
        sx, sy, sz = self.ops[op]
        return int(sx**x * sy**y * sz**z)

    def spherical_parity(self, l: int, m: int, op: int) -> int:
        return self.cartesian_parity(*sph_parity_monomial(l, m), op)

    def __repr__(self):
        return f"PointGroup({self.label}, order={self.order}, nirrep={self.nirrep})"


def get_orbit(group: PointGroup, position, tol: float = ORBIT_TOL):
    """Symmetry-equivalent images of a position and the image index per operation.

    Images are ordered by first appearance when applying the operations in
    group order, so the position itself always comes first."""
    position = np.asarray(position, dtype=float)
    images = group.ops * position[None, :]
    orbit = list()
    op_map = np.empty(group.order, dtype=int)
    for op, image in enumerate(images):
        for i, known in enumerate(orbit):
            if np.abs(image - known).max() < tol:
                op_map[op] = i
                break
        else:
            op_map[op] = len(orbit)
            orbit.append(image)
    return np.array(orbit), op_map


@dataclass(frozen=True, eq=False)
class Center:
    group: PointGroup
    position: np.ndarray
    orbit: np.ndarray = field(init=False)
    op_map: np.ndarray = field(init=False)
    tol: float = ORBIT_TOL

    def __post_init__(self):
        position = np.asarray(self.position, dtype=float).reshape(3)
        orbit, op_map = get_orbit(self.group, position, tol=self.tol)
        for key, arr in (("position", position), ("orbit", orbit), ("op_map", op_map)):
            arr.flags.writeable = False
            # Frozen dataclass; set derived fields directly
            object.__setattr__(self, key, arr)

    @staticmethod
    def from_orbit(group: PointGroup, orbit: Sequence, op_map: Sequence) -> "Center":
        """Center with an explicitly given orbit and operation map.

        Used when the orbit comes from an outside source, e.g. a molecule
        whose atoms were already symmetrized."""
        center = Center(group, orbit[0])
        object.__setattr__(center, "orbit", np.array(orbit, dtype=float))
        object.__setattr__(center, "op_map", np.array(op_map, dtype=int))
        return center

    @property
    def ndegen(self) -> int:
        return len(self.orbit)

    def center_after_op(self, op: int) -> int:
        return int(self.op_map[op])

    def __repr__(self):
        x, y, z = self.position
        return f"Center({self.group.label}, ({x:.4f}, {y:.4f}, {z:.4f}), ndegen={self.ndegen})"
