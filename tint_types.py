# -*- coding: utf-8 -*-
"""
Tint: Measuring the distance between colors
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Typed color triplets.

Every color space gets its own frozen dataclass so that an XYZ triplet can
never be fed to a function expecting Lab (or vice versa).  Untagged
3-sequences (tuples, lists, NumPy vectors) are still accepted at the API
boundary and are tagged with whatever space the receiving function expects.

Validation happens once, on construction: components are coerced to
``float`` and anything that is not a real number raises
:class:`InvalidInputError`.  Numeric *range* is deliberately not checked;
an RGB channel of 300 or a negative XYZ component is passed through to the
formulas unchanged.
"""

from __future__ import annotations

import functools
import inspect
import numbers
from dataclasses import dataclass, fields
from typing import (
    Any, Callable, ClassVar, Iterator, Sequence, Tuple, Type, TypeAlias, TypeVar, Union,
)

import numpy as np

__all__ = [
    "InvalidInputError",
    "RGB",
    "HSV",
    "HSL",
    "XYZ",
    "Lab",
    "DE2000Weights",
    "TripletLike",
    "coerce_input",
]

T = TypeVar("T", bound="_Triplet")


class InvalidInputError(ValueError):
    """Raised when a caller passes something that is not a numeric triplet."""


def _as_component(value: Any, name: str, label: str) -> float:
    # bool is an Integral subclass; True as a colour channel is always a bug
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidInputError(
            f"{label}.{name} must be a real number, got {type(value).__name__}"
        )
    return float(value)


# ---------------------------------------------------------------------------
# 1.  Triplet base
# ---------------------------------------------------------------------------
class _Triplet:
    """Shared behaviour of the per-space dataclasses below."""

    __slots__ = ()

    space: ClassVar[str] = ""

    def __post_init__(self) -> None:
        label = type(self).__name__
        for f in fields(self):
            object.__setattr__(
                self, f.name, _as_component(getattr(self, f.name), f.name, label)
            )

    def __iter__(self) -> Iterator[float]:
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return 3

    def as_tuple(self) -> Tuple[float, float, float]:
        return tuple(getattr(self, f.name) for f in fields(self))  # type: ignore[return-value]

    @classmethod
    def coerce(cls: Type[T], value: Any) -> T:
        """
        Tag *value* as this color space.

        Instances of ``cls`` are returned unchanged.  Instances of any other
        triplet class are rejected, as are strings and sequences whose length
        is not three.

        Raises:
            InvalidInputError: If *value* cannot be read as a ``cls`` triplet.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, _Triplet):
            raise InvalidInputError(
                f"Expected a {cls.space} triplet, got {value.space} {value.as_tuple()}"
            )
        if isinstance(value, (str, bytes)):
            raise InvalidInputError(f"Expected a {cls.space} triplet, got {value!r}")
        if isinstance(value, np.ndarray):
            value = value.tolist() if value.ndim == 1 else [value]
        try:
            items = tuple(value)
        except TypeError:
            raise InvalidInputError(
                f"Expected a {cls.space} triplet, got {type(value).__name__}"
            ) from None
        if len(items) != 3:
            raise InvalidInputError(
                f"Expected 3 components for {cls.space}, got {len(items)}"
            )
        return cls(*items)


# ---------------------------------------------------------------------------
# 2.  Color spaces
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class RGB(_Triplet):
    """sRGB, gamma encoded, channels on the 0..255 scale."""
    r: float
    g: float
    b: float

    space: ClassVar[str] = "RGB"


@dataclass(slots=True, frozen=True)
class HSV(_Triplet):
    """Hue in radians [0, 2*pi), saturation and value in [0, 1]."""
    h: float
    s: float
    v: float

    space: ClassVar[str] = "HSV"


@dataclass(slots=True, frozen=True)
class HSL(_Triplet):
    """Hue in radians [0, 2*pi), saturation and lightness in [0, 1]."""
    h: float
    s: float
    l: float  # noqa: E741

    space: ClassVar[str] = "HSL"


@dataclass(slots=True, frozen=True)
class XYZ(_Triplet):
    """CIE 1931 tristimulus values, scaled so that the reference white has Y = 1."""
    x: float
    y: float
    z: float

    space: ClassVar[str] = "XYZ"


@dataclass(slots=True, frozen=True)
class Lab(_Triplet):
    """CIE 1976 L*a*b*.  L is nominally [0, 100]; a and b are signed."""
    L: float
    a: float
    b: float

    space: ClassVar[str] = "Lab"


TripletLike: TypeAlias = Union[_Triplet, Sequence[float], np.ndarray]


# ---------------------------------------------------------------------------
# 3.  CIEDE2000 parametric weights
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class DE2000Weights:
    """
    Parametric factors of the CIEDE2000 formula.

    The reference viewing conditions of the formula correspond to
    ``k_L = k_C = k_H = 1``.  Applications with other conditions (textiles
    being the common case) scale the lightness, chroma or hue terms.
    """
    k_L: float = 1.0
    k_C: float = 1.0
    k_H: float = 1.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = _as_component(getattr(self, f.name), f.name, "DE2000Weights")
            if not value > 0.0:
                raise InvalidInputError(
                    f"DE2000Weights.{f.name} must be positive, got {value}"
                )
            object.__setattr__(self, f.name, value)

    @classmethod
    def textiles(cls) -> DE2000Weights:
        """CIE recommendation for textile applications (k_L = 2)."""
        return cls(k_L=2.0, k_C=1.0, k_H=1.0)

    @classmethod
    def coerce(cls, value: Any) -> DE2000Weights:
        """
        Read *value* as weights: an instance, or a ``(k_L, k_C, k_H)`` sequence.

        Raises:
            InvalidInputError: If *value* is neither.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (str, bytes, dict)):
            raise InvalidInputError(f"Expected (k_L, k_C, k_H), got {value!r}")
        try:
            items = tuple(value)
        except TypeError:
            raise InvalidInputError(
                f"Expected (k_L, k_C, k_H), got {type(value).__name__}"
            ) from None
        if len(items) != 3:
            raise InvalidInputError(f"Expected 3 weights, got {len(items)}")
        return cls(*items)


# ---------------------------------------------------------------------------
# 4.  Boundary decorator
# ---------------------------------------------------------------------------
def coerce_input(space: Type[_Triplet]) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator that tags the first positional argument as *space*.

    The conversion functions can then assume a validated triplet of the
    right type and unpack it directly.  The argument may be passed
    positionally or by its parameter name.
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        first = next(iter(inspect.signature(func).parameters))

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if args:
                args = (space.coerce(args[0]),) + args[1:]
            elif first in kwargs:
                kwargs[first] = space.coerce(kwargs[first])
            return func(*args, **kwargs)
        return wrapper
    return decorator
