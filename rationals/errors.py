"""Exceptions raised by the rational number type."""


class RationalError(ValueError):
    """Base class for invalid rational values."""


class InvalidArgumentError(RationalError):
    """Raised when a rational is constructed with a zero denominator."""


class RationalParseError(RationalError):
    """Raised when text does not describe a rational number."""


__all__ = ["RationalError", "InvalidArgumentError", "RationalParseError"]
