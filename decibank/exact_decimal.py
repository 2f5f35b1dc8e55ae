# -*- coding: utf-8 -*-
"""
Exact Decimal Value Type.

Purpose:
- Represent money as a signed integer coefficient and a base-10 scale, so
  0.10 is stored as (10, 2) and never as a binary fraction.
- Addition and subtraction widen the lower-scale operand exactly and then
  work on plain integers. Nothing is rounded, so sums are associative and
  commutative with no epsilon.
- Precision is only dropped by `round`/`quantize`, with a named policy.

Textual form: [-]digits[.digits], exactly `scale` fractional digits.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering

from .errors import MalformedDecimal
from .rounding import RoundingPolicy, resolve_policy

_LITERAL = re.compile(r"([+-]?)([0-9]+)(?:\.([0-9]+))?")


@total_ordering
@dataclass(frozen=True, eq=False)
class ExactDecimal:
    """Immutable value = coefficient * 10 ** -scale."""

    coefficient: int
    scale: int = 0

    def __post_init__(self):
        if isinstance(self.coefficient, bool) or not isinstance(self.coefficient, int):
            raise TypeError(f"coefficient must be int, got {type(self.coefficient).__name__}")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int):
            raise TypeError(f"scale must be int, got {type(self.scale).__name__}")
        if self.scale < 0:
            raise ValueError(f"scale must be >= 0, got {self.scale}")

    # ---------- construction ----------
    @classmethod
    def parse(cls, text: str) -> "ExactDecimal":
        if not isinstance(text, str):
            raise MalformedDecimal(f"Decimal literal must be str, got {type(text).__name__}")
        m = _LITERAL.fullmatch(text)
        if m is None:
            raise MalformedDecimal(f"Not a decimal literal: {text!r}")
        sign, whole, frac = m.groups()
        frac = frac or ""
        coefficient = int(whole + frac)
        return cls(-coefficient if sign == "-" else coefficient, len(frac))

    @classmethod
    def from_int(cls, value: int) -> "ExactDecimal":
        return cls(value, 0)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "ExactDecimal":
        if not value.is_finite():
            raise MalformedDecimal(f"Not a finite decimal: {value}")
        sign, digits, exponent = value.as_tuple()
        coefficient = int("".join(map(str, digits)) or "0")
        if exponent > 0:
            coefficient *= 10 ** exponent
            exponent = 0
        return cls(-coefficient if sign else coefficient, -exponent)

    # ---------- structure ----------
    @property
    def sign(self) -> int:
        return (self.coefficient > 0) - (self.coefficient < 0)

    @property
    def unscaled(self) -> int:
        return abs(self.coefficient)

    def is_zero(self) -> bool:
        return self.coefficient == 0

    def is_negative(self) -> bool:
        return self.coefficient < 0

    def is_positive(self) -> bool:
        return self.coefficient > 0

    # ---------- text ----------
    def to_text(self) -> str:
        digits = str(self.unscaled)
        if self.scale:
            digits = digits.rjust(self.scale + 1, "0")
            digits = f"{digits[:-self.scale]}.{digits[-self.scale:]}"
        return f"-{digits}" if self.is_negative() else digits

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"ExactDecimal('{self.to_text()}')"

    def to_decimal(self) -> Decimal:
        return Decimal(self.to_text())

    # ---------- arithmetic ----------
    def widen(self, scale: int) -> "ExactDecimal":
        """Exact rescale to a larger (or equal) scale."""
        if scale < self.scale:
            raise ValueError(f"widen() cannot narrow scale {self.scale} to {scale}; use round()")
        if scale == self.scale:
            return self
        return ExactDecimal(self.coefficient * 10 ** (scale - self.scale), scale)

    def _aligned(self, other: "ExactDecimal"):
        scale = max(self.scale, other.scale)
        return self.widen(scale).coefficient, other.widen(scale).coefficient, scale

    def add(self, other: "ExactDecimal") -> "ExactDecimal":
        a, b, scale = self._aligned(other)
        return ExactDecimal(a + b, scale)

    def subtract(self, other: "ExactDecimal") -> "ExactDecimal":
        a, b, scale = self._aligned(other)
        return ExactDecimal(a - b, scale)

    def negate(self) -> "ExactDecimal":
        return ExactDecimal(-self.coefficient, self.scale)

    def __add__(self, other):
        if not isinstance(other, ExactDecimal):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, ExactDecimal):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self):
        return self.negate()

    def __abs__(self):
        return ExactDecimal(self.unscaled, self.scale)

    # ---------- ordering ----------
    def compare(self, other: "ExactDecimal") -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        a, b, _ = self._aligned(other)
        return (a > b) - (a < b)

    def __eq__(self, other):
        if not isinstance(other, ExactDecimal):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, ExactDecimal):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        coefficient, scale = self.coefficient, self.scale
        while scale and coefficient % 10 == 0:
            coefficient //= 10
            scale -= 1
        return hash((coefficient, scale))

    # ---------- rounding ----------
    def round(self, scale: int, policy=RoundingPolicy.HALF_EVEN) -> "ExactDecimal":
        """
        Drop fractional digits down to `scale` using `policy`.

        Returns self unchanged when `scale` is not smaller than the current
        scale; widening never happens here.
        """
        if scale < 0:
            raise ValueError(f"scale must be >= 0, got {scale}")
        if scale >= self.scale:
            return self
        policy = resolve_policy(policy)
        divisor = 10 ** (self.scale - scale)
        quotient, remainder = divmod(self.unscaled, divisor)
        magnitude = policy.round_quotient(quotient, remainder, divisor, self.is_negative())
        return ExactDecimal(-magnitude if self.is_negative() else magnitude, scale)

    def quantize(self, scale: int, policy=RoundingPolicy.HALF_EVEN) -> "ExactDecimal":
        """Return a value with exactly `scale` fractional digits."""
        if scale >= self.scale:
            return self.widen(scale)
        return self.round(scale, policy)


def parse(text: str) -> ExactDecimal:
    return ExactDecimal.parse(text)


def to_text(value: ExactDecimal) -> str:
    return value.to_text()


def add(a: ExactDecimal, b: ExactDecimal) -> ExactDecimal:
    return a.add(b)


def subtract(a: ExactDecimal, b: ExactDecimal) -> ExactDecimal:
    return a.subtract(b)


def compare(a: ExactDecimal, b: ExactDecimal) -> int:
    return a.compare(b)


def round_to(value: ExactDecimal, scale: int, policy=RoundingPolicy.HALF_EVEN) -> ExactDecimal:
    return value.round(scale, policy)
