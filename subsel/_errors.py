"""Exceptions raised by subset search."""


class InvalidConfiguration(ValueError):
    """Search parameters that cannot describe a valid run."""


class NumericFailure(ArithmeticError):
    """Criterion evaluation produced an undefined value (NaN, singular matrix)."""
