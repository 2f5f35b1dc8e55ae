# -*- coding: utf-8 -*-
"""
Rounding Policies.

Purpose:
- Name the strategies a business rule may pick when precision has to be
  dropped, and keep that choice explicit at each rounding point.
- Each policy mirrors the standard `decimal` module constant of the same
  meaning, so values can move between `ExactDecimal` and `Decimal` without
  changing how they round.
"""

from __future__ import annotations

from decimal import (
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
)
from enum import Enum


class RoundingPolicy(Enum):
    HALF_UP = ROUND_HALF_UP
    HALF_EVEN = ROUND_HALF_EVEN
    DOWN = ROUND_DOWN
    UP = ROUND_UP
    HALF_DOWN = ROUND_HALF_DOWN
    CEILING = ROUND_CEILING
    FLOOR = ROUND_FLOOR

    @classmethod
    def from_name(cls, name: str) -> "RoundingPolicy":
        """Resolve a policy by name ("half_even", "HALF_EVEN", "ROUND_HALF_EVEN")."""
        key = str(name).strip().upper()
        if key.startswith("ROUND_"):
            key = key[len("ROUND_"):]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown rounding policy: {name!r}") from None

    def round_quotient(self, quotient: int, remainder: int, divisor: int, negative: bool) -> int:
        """
        Round a non-negative magnitude split as quotient * divisor + remainder.

        Returns the rounded magnitude (quotient or quotient + 1). `negative`
        is the sign of the original value, needed by CEILING and FLOOR.
        """
        if remainder == 0:
            return quotient
        twice = remainder * 2
        if self is RoundingPolicy.DOWN:
            bump = False
        elif self is RoundingPolicy.UP:
            bump = True
        elif self is RoundingPolicy.HALF_UP:
            bump = twice >= divisor
        elif self is RoundingPolicy.HALF_DOWN:
            bump = twice > divisor
        elif self is RoundingPolicy.HALF_EVEN:
            bump = twice > divisor or (twice == divisor and quotient % 2 == 1)
        elif self is RoundingPolicy.CEILING:
            bump = not negative
        else:  # FLOOR
            bump = negative
        return quotient + 1 if bump else quotient


def resolve_policy(policy) -> RoundingPolicy:
    """Accept a RoundingPolicy, its name, or a `decimal.ROUND_*` constant."""
    if isinstance(policy, RoundingPolicy):
        return policy
    if isinstance(policy, str):
        try:
            return RoundingPolicy(policy)
        except ValueError:
            return RoundingPolicy.from_name(policy)
    raise TypeError(f"Unsupported rounding policy: {policy!r}")
