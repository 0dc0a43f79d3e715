# Largest angular momentum advertised by the command line interface.
L_MAX = 6
# Two images of a center closer than this (in Bohr) are the same center.
ORBIT_TOL = 1e-8
# (2π)^(-3/4), prefactor of a normalized primitive Gaussian
PI2_N34 = 0.25197943553838073034791409490358
LOG_FILE = "symmshells.log"
