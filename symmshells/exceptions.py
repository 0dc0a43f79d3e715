"""
Exceptions raised while setting up a shell.
"""

__all__ = ["NormalizationError", "ShellInputError", "SymmetryError"]


class SymmetryError(ValueError):
    """
    Inconsistent point group or orbit data.
    """

    def __init__(self, msg) -> None:
        self.message = msg
        super().__init__(self.message)


class NormalizationError(ValueError):
    def __init__(self, column: int, norm: float, shell: str = "") -> None:
        self.column = column
        self.norm = norm
        where = f" of {shell}" if shell else ""
        self.message = (
            f"Contraction column {column}{where} has non-positive norm {norm:.6e}; "
            "check the exponents and contraction coefficients."
        )
        super().__init__(self.message)


class ShellInputError(ValueError):
    def __init__(self, msg) -> None:
        self.message = msg
        super().__init__(self.message)
