"""Exact rational number utilities."""

from .arrays import as_rational_array, zeros, zeros_like
from .errors import InvalidArgumentError, RationalError, RationalParseError
from .rational import EQUALITY_SIGNIFICANT_DIGITS, Rational, div_by, to_rational

__all__ = [
    "Rational",
    "div_by",
    "to_rational",
    "EQUALITY_SIGNIFICANT_DIGITS",
    "RationalError",
    "InvalidArgumentError",
    "RationalParseError",
    "as_rational_array",
    "zeros",
    "zeros_like",
]
