"""Exception types raised by rreftools."""


class RREFError(Exception):
    """Base class for rreftools errors."""


class DimensionError(RREFError, ValueError):
    """Matrix dimensions are non-positive or do not match the supplied data."""


class DegenerateReciprocalError(RREFError, ArithmeticError):
    """A pivot at or below the tolerance reached the normalization step."""
