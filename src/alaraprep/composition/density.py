"""
Declared densities of mixture components.

ALARA input writes a component density as a single signed number whose sign
is a control code. Here the two meanings are separate types:

* :class:`AbsoluteDensity` - the value is already the density to use.
* :class:`ReferenceScaledDensity` - the value multiplies the reference
  density found in the element library.

``density_from_signed`` converts the signed input convention: a negative
number asks for the library reference density scaled by its magnitude, a
non-negative number is taken as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AbsoluteDensity:
    """Density already resolved by the caller [g/cm3]."""

    value: float

    def resolve(self, reference: float) -> float:
        return self.value

    def as_signed(self) -> float:
        return self.value


@dataclass(frozen=True)
class ReferenceScaledDensity:
    """Multiplier applied to a library reference density."""

    factor: float

    @property
    def value(self) -> float:
        return self.factor

    def resolve(self, reference: float) -> float:
        return abs(self.factor) * reference

    def as_signed(self) -> float:
        return -abs(self.factor)


Density = Union[AbsoluteDensity, ReferenceScaledDensity]


def density_from_signed(value: float) -> Density:
    if value < 0:
        return ReferenceScaledDensity(-value)
    return AbsoluteDensity(value)
