__version__ = "0.1.0"

from symmshells.helpers import (
    canonical_order,
    cart_size,
    get_timer_getter,
    sph_order,
    sph_size,
    Timer,
)
from symmshells.logger import logger
from symmshells.cart2sph import cart2sph_matrix, cartcoef
from symmshells.exceptions import NormalizationError, ShellInputError, SymmetryError
from symmshells.symmetry import Center, PointGroup
from symmshells.shell import Shell
