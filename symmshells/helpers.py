import sys
import time
from typing import Iterator, List, Tuple

from colorama import Fore, Style


L_MAP = {
    0: "s",
    1: "p",
    2: "d",
    3: "f",
    4: "g",
    5: "h",
    6: "i",
    7: "j",
    8: "k",
}


RST = Style.RESET_ALL  # colorama reset


def canonical_order(L: int) -> List[Tuple[int, int, int]]:
    """Cartesian exponents (x, y, z); x descending, then y descending."""
    inds = list()
    for i in range(L + 1):
        l = L - i
        for n in range(i + 1):
            m = i - n
            inds.append((l, m, n))
    return inds


def sph_ls(L: int, keep_contaminants: bool = False) -> List[int]:
    """Angular momenta contributing to a spherical shell.

    L, L - 2, ..., down to 0 or 1 when contaminants are kept, otherwise only L."""
    stop = -1 if keep_contaminants else L - 1
    return list(range(L, stop, -2))


def sph_order_iter(L: int, keep_contaminants: bool = False) -> Iterator[Tuple[int, int]]:
    # Per l: +l, -l, +(l-1), -(l-1), ..., +1, -1, 0
    for l in sph_ls(L, keep_contaminants):
        for m in range(l, 0, -1):
            yield l, m
            yield l, -m
        yield l, 0


def sph_order(L: int, keep_contaminants: bool = False) -> List[Tuple[int, int]]:
    return list(sph_order_iter(L, keep_contaminants))


def cart_label(angmoms):
    assert len(angmoms) == 3
    L = L_MAP[sum(angmoms)]
    cart_inds = "".join([c * l for l, c in zip(angmoms, ("x", "y", "z"))])
    return L + cart_inds


def sph_label(l, m):
    return f"{L_MAP[l]}{m:+d}"


def cart_size(L):
    return (L + 2) * (L + 1) // 2


def sph_size(L):
    return 2 * L + 1


def nfunc_for(L, spherical=True, keep_contaminants=False):
    if not spherical:
        return cart_size(L)
    return sum([sph_size(l) for l in sph_ls(L, keep_contaminants)])


class Timer:
    def __init__(self, msg, prefix="", width=0, thresh=1.0, logger=None):
        self.msg = msg
        self.prefix = prefix
        self.width = width
        self.thresh = thresh
        self.logger = logger

    def __enter__(self):
        self.start = time.time()
        return self

    def __exit__(self, exc_type, exc_value, exc_tb):
        dur = time.time() - self.start
        color = Fore.RED if dur > self.thresh else ""
        msg = f"{color}{self.prefix}{self.msg:>{self.width}s} took {dur:> 8.3f} s" + RST
        if self.logger is not None:
            self.logger.info(msg)
        else:
            print(msg)
        sys.stdout.flush()


def get_timer_getter(**kwargs):
    def get_timer(*args):
        return Timer(*args, **kwargs)

    return get_timer
