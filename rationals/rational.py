"""Arbitrary-precision rational numbers with NumPy interoperability."""
from __future__ import annotations

import math
import numbers
import operator
import re
from decimal import ROUND_HALF_UP, Decimal, DecimalTuple, localcontext
from typing import Any, Tuple

import numpy as np

from .errors import InvalidArgumentError, RationalParseError

EQUALITY_SIGNIFICANT_DIGITS = 5

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def _parse_int(text: str, *, name: str) -> int:
    if not _INTEGER_LITERAL.fullmatch(text):
        raise RationalParseError(f"invalid {name} {text!r}: not an integer literal")
    return int(text)


def _require_rational(value: Any) -> "Rational":
    if isinstance(value, Rational):
        return value
    raise TypeError(f"Cannot interpret {type(value)!r} as Rational")


class Rational:
    """Exact ratio of two integers.

    Values are stored exactly as given: ``Rational(2, -4)`` keeps both
    components and is only reduced when rendered with :func:`str`. Arithmetic
    never reduces its result either, so denominators grow as the plain product
    of the operands' denominators.

    Equality is approximate. Two values are equal when their quotients agree
    to :data:`EQUALITY_SIGNIFICANT_DIGITS` significant digits, and ordering
    compares floating-point approximations.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(self, numerator: numbers.Integral, denominator: numbers.Integral = 1) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        if den == 0:
            raise InvalidArgumentError("denominator must be non-zero")

        self._numerator = num
        self._denominator = den

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse ``"N"`` or ``"N/D"`` into a :class:`Rational`.

        The text is split on the first ``/``; a missing denominator defaults
        to ``1``. Each part must be a plain integer literal with an optional
        sign.
        """
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text)!r}")
        numerator, slash, denominator = text.partition("/")
        num = _parse_int(numerator, name="numerator")
        den = _parse_int(denominator, name="denominator") if slash else 1
        return cls(num, den)

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def normalize(self) -> "Rational":
        """Divide both components by their greatest common divisor.

        Each component keeps its own sign, so ``Rational(2, -4)`` becomes
        ``Rational(1, -2)``.
        """
        num, den = self._reduced()
        return Rational(num, den)

    def _reduced(self) -> Tuple[int, int]:
        gcd = math.gcd(self._numerator, self._denominator)
        return self._numerator // gcd, self._denominator // gcd

    def _rounded_quotient(self) -> DecimalTuple:
        """Return the quotient rounded to the equality precision.

        The digits and exponent are both kept, so ``1.0000`` and ``1`` differ.
        A zero quotient carries no sign.
        """
        with localcontext() as ctx:
            ctx.prec = EQUALITY_SIGNIFICANT_DIGITS
            ctx.rounding = ROUND_HALF_UP
            quotient = Decimal(self._numerator) / Decimal(self._denominator)
        if quotient.is_zero():
            quotient = quotient.copy_abs()
        return quotient.as_tuple()

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        try:
            return self._numerator / self._denominator
        except OverflowError:
            negative = (self._numerator < 0) != (self._denominator < 0)
            return -math.inf if negative else math.inf

    def __bool__(self) -> bool:  # pragma: no cover - trivial mapping
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        num, den = self._reduced()
        if den < 0:
            num, den = -num, -den
        if den == 1:
            return str(num)
        return f"{num}/{den}"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        return format(float(self), format_spec)

    # ------------------------------------------------------------------
    # Arithmetic
    def add(self, other: "Rational") -> "Rational":
        other = _require_rational(other)
        return Rational(
            self._numerator * other._denominator + other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def subtract(self, other: "Rational") -> "Rational":
        other = _require_rational(other)
        return Rational(
            self._numerator * other._denominator - other._numerator * self._denominator,
            self._denominator * other._denominator,
        )

    def multiply(self, other: "Rational") -> "Rational":
        other = _require_rational(other)
        return Rational(
            self._numerator * other._numerator,
            self._denominator * other._denominator,
        )

    def divide(self, other: "Rational") -> "Rational":
        """Return ``self / other``.

        Dividing by a zero-valued rational produces a zero denominator, which
        the constructor rejects with :class:`InvalidArgumentError`.
        """
        other = _require_rational(other)
        return Rational(
            self._numerator * other._denominator,
            self._denominator * other._numerator,
        )

    def negate(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, _require_rational(x)),
                otypes=[object],
            )
            return vectorised(other)
        if not isinstance(other, Rational):
            return NotImplemented
        return op(self, other)

    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.add)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.subtract)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.multiply)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, Rational.divide)

    def __neg__(self) -> "Rational":
        return self.negate()

    def __pos__(self) -> "Rational":  # pragma: no cover - trivial
        return self

    # ------------------------------------------------------------------
    # Comparisons
    def compare(self, other: "Rational") -> int:
        """Return -1, 0 or 1 comparing floating-point approximations."""
        other = _require_rational(other)
        a = float(self)
        b = float(other)
        return (a > b) - (a < b)

    def within(self, lower: "Rational", upper: "Rational") -> bool:
        """Return ``True`` when ``lower <= self <= upper``."""
        return self.compare(lower) >= 0 and self.compare(upper) <= 0

    def _compare(self, other: Any, op) -> Any:
        if not isinstance(other, Rational):
            return NotImplemented
        return op(self.compare(other), 0)

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, operator.ge)

    def __eq__(self, other: Any) -> Any:
        if self is other:
            return True
        if not isinstance(other, Rational):
            return NotImplemented
        return self._rounded_quotient() == other._rounded_quotient()

    def __hash__(self) -> int:
        # Hash the same rounded quotient equality uses, so equal values share a hash.
        return hash(self._rounded_quotient())

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Rational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(_require_rational, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                return NotImplemented
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def div_by(numerator: numbers.Integral, denominator: numbers.Integral) -> Rational:
    """Build ``numerator / denominator`` from two integers."""

    return Rational(numerator, denominator)


def to_rational(text: str) -> Rational:
    """Public helper to parse ``"N"`` or ``"N/D"`` into :class:`Rational`."""

    return Rational.parse(text)


__all__ = [
    "Rational",
    "div_by",
    "to_rational",
    "EQUALITY_SIGNIFICANT_DIGITS",
]
