from scipy.special import comb, factorial2 as sp_factorial2


def binom(n: int, k: int) -> int:
    """Exact binomial coefficient; 0 for k < 0, k > n or n < 0."""
    if k < 0 or n < 0 or k > n:
        return 0
    return int(comb(n, k, exact=True))


def dfact(n: int) -> int:
    """Exact double factorial with (-1)!! = 1.

    Scipy 1.11 decided that (-1)!! is not 1 anymore!
    Please see https://github.com/scipy/scipy/issues/18813."""
    if n == -1:
        return 1
    elif n < -1:
        raise ValueError(f"Only supported negative argument is -1, but got {n}!")
    return int(sp_factorial2(n, exact=True))
