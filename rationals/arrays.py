"""NumPy ``object`` arrays holding :class:`Rational` values."""
from __future__ import annotations

import numbers
from typing import Any

import numpy as np

from .rational import Rational


def _as_rational(item: Any) -> Rational:
    if isinstance(item, Rational):
        return item
    if isinstance(item, numbers.Integral):
        return Rational(int(item), 1)
    if isinstance(item, str):
        return Rational.parse(item)
    raise TypeError(f"Cannot convert {type(item)!r} to Rational")


def as_rational_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable (or NumPy array) of :class:`Rational`
    instances, integers or ``"N/D"`` strings. When ``copy`` is ``False`` and
    ``values`` is already an ``object`` array of :class:`Rational`, it is
    returned unchanged.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Rational) for item in array.flat):
            return array
        if array.size == 0:
            return array.astype(object)
        vectorised = np.vectorize(_as_rational, otypes=[object])
        return vectorised(array)

    if isinstance(values, (list, tuple)):
        coerced = np.empty(len(values), dtype=object)
        for index, item in enumerate(values):
            coerced[index] = _as_rational(item)
        return coerced

    return as_rational_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of length ``length`` filled with zeros."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return as_rational_array([Rational(0, 1) for _ in range(length)])


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    array = as_rational_array(values, copy=False)
    zeros_flat = zeros(array.size)
    return zeros_flat.reshape(array.shape)


__all__ = ["as_rational_array", "zeros", "zeros_like"]
