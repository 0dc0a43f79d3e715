#!/usr/bin/env python3

# [1] https://doi.org/10.1002/qua.560540202
#     Transformation between Cartesian and pure spherical harmonic Gaussians
#     Schlegel, Frisch, 1995

import argparse
import sys
import textwrap
from typing import Optional, Sequence

import numpy as np

from symmshells import __version__
from symmshells.config import L_MAX, ORBIT_TOL
from symmshells.helpers import cart_label, get_timer_getter, sph_label
from symmshells.logger import logger
from symmshells.shell import Shell
from symmshells.sym_solid_harmonics import cart2sph_deviations
from symmshells.symmetry import GROUP_TABLE, Center, PointGroup


def format_tables(shell: Shell) -> str:
    group = shell.group
    if shell.spherical:
        labels = [sph_label(l, m) for l, m in shell.func_iter()]
    else:
        labels = [cart_label(lmn) for lmn in shell.func_iter()]

    lines = [
        f"{shell} on {shell.center}",
        f"nfunc={shell.nfunc}, ndegen={shell.ndegen}",
        "",
        f"{'func':>8s}  {'parity':<{3 * group.order}s}  irreps (position in irrep)",
    ]
    for f, label in enumerate(labels):
        parity = "".join([f"{p:>3d}" for p in shell.parity[f]])
        irreps = ", ".join(
            [
                f"{group.irrep_labels[irrep]} ({shell.func_irrep[f, i]})"
                for i, irrep in enumerate(shell.func_irreps(f))
            ]
        )
        lines.append(f"{label:>8s}  {parity}  {irreps}")
    lines.append("")
    per_irrep = ", ".join(
        [
            f"{label}: {n}"
            for label, n in zip(group.irrep_labels, shell.nfunc_per_irrep)
        ]
    )
    lines.append(f"Functions per irrep: {per_irrep}")
    lines.append("")
    lines.append("Cartesian -> spherical transformation")
    with np.printoptions(precision=6, suppress=True, linewidth=120):
        lines.append(textwrap.indent(str(shell.cart2spher), "    "))
    lines.append("")
    lines.append("Normalized contraction coefficients")
    with np.printoptions(precision=8, linewidth=120):
        lines.append(textwrap.indent(str(shell.coefficients), "    "))
    return "\n".join(lines)


def check_cart2sph(L: int, thresh: float = 1e-12) -> float:
    get_timer = get_timer_getter(prefix="Checking ", logger=logger)
    with get_timer("Cartesian -> spherical transformation"):
        deviations = cart2sph_deviations(L)
    max_dev = float(deviations.max())
    status = "ok" if max_dev <= thresh else "FAILED"
    logger.info(f"Max. deviation from solid harmonics for L={L}: {max_dev:.4e} ({status})")
    return max_dev


def run(
    L: int,
    group: str = "C1",
    center: Sequence[float] = (0.0, 0.0, 0.0),
    spherical: bool = True,
    keep_contaminants: bool = False,
    exps: Optional[Sequence[float]] = None,
    coeffs: Optional[Sequence[float]] = None,
    tol: float = ORBIT_TOL,
    check: bool = False,
    cli: bool = False,
) -> Shell:
    if exps is None:
        exps = (1.0,)
    if coeffs is None:
        coeffs = np.ones(len(exps))
    get_timer = get_timer_getter(prefix="Building ", logger=logger)

    point_group = PointGroup.from_label(group)
    center_ = Center(point_group, np.array(center, dtype=float), tol=tol)
    with get_timer("shell"):
        shell = Shell(
            center_,
            L,
            np.array(exps, dtype=float),
            np.array(coeffs, dtype=float),
            spherical=spherical,
            keep_contaminants=keep_contaminants,
        )
    if cli:
        logger.info(format_tables(shell))
    if check:
        check_cart2sph(shell.L)
    return shell


def parse_args(args):
    parser = argparse.ArgumentParser(
        description="Classify the functions of a shell by the irreps of a point group."
    )

    parser.add_argument(
        "L",
        type=int,
        help=f"Angular momentum of the shell, e.g., 0 to {L_MAX}.",
    )
    parser.add_argument(
        "--group",
        default="C1",
        choices=GROUP_TABLE.keys(),
        help="Point group of the molecule.",
    )
    parser.add_argument(
        "--center",
        nargs=3,
        type=float,
        default=(0.0, 0.0, 0.0),
        metavar=("X", "Y", "Z"),
        help="Position of the shell's center in Bohr.",
    )
    parser.add_argument(
        "--cart", action="store_true", help="Use Cartesian instead of spherical functions."
    )
    parser.add_argument(
        "--keep-contaminants",
        action="store_true",
        help="Keep the lower angular momentum components of spherical shells.",
    )
    parser.add_argument(
        "--exps", nargs="+", type=float, default=[1.0], help="Primitive exponents."
    )
    parser.add_argument(
        "--coeffs",
        nargs="+",
        type=float,
        default=None,
        help="Contraction coefficients, one per exponent. Defaults to 1.0.",
    )
    parser.add_argument(
        "--tol",
        type=float,
        default=ORBIT_TOL,
        help="Distance below which two images of the center coincide.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compare the Cartesian to spherical transformation against symbolic "
        "solid harmonics.",
    )
    parser.add_argument("--version", action="version", version=__version__)

    return parser.parse_args(args)


def run_cli():
    args = parse_args(sys.argv[1:])

    return run(
        L=args.L,
        group=args.group,
        center=args.center,
        spherical=not args.cart,
        keep_contaminants=args.keep_contaminants,
        exps=args.exps,
        coeffs=args.coeffs,
        tol=args.tol,
        check=args.check,
        cli=True,
    )


if __name__ == "__main__":
    run_cli()
