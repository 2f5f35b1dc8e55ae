# -*- coding: utf-8 -*-
"""
Money Input Handling Utilities.

Purpose:
- Turn caller input (decimal strings, ExactDecimal, int, Decimal) into an
  `ExactDecimal`, and refuse `float` outright: a float has already lost the
  value the caller meant.
- Centralize amount rules: strictly positive, and at most MAX_TRANSACTION
  when config sets one.
"""

from decimal import Decimal

import decibank.config as cfg
from .errors import InvalidAmount
from .exact_decimal import ExactDecimal
from .rounding import RoundingPolicy


def as_exact(value) -> ExactDecimal:
    """Normalize caller input to ExactDecimal without rounding."""
    if isinstance(value, ExactDecimal):
        return value
    if isinstance(value, str):
        return ExactDecimal.parse(value)
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(f"Refusing {type(value).__name__} amount {value!r}; pass a decimal string")
    if isinstance(value, int):
        return ExactDecimal.from_int(value)
    if isinstance(value, Decimal):
        return ExactDecimal.from_decimal(value)
    raise TypeError(f"Unsupported amount type: {type(value).__name__}")


def default_policy() -> RoundingPolicy:
    return RoundingPolicy.from_name(cfg.DEFAULT_ROUNDING)


def validate_amount_positive(amount) -> ExactDecimal:
    """
    Validate an add/withdraw amount and return it as ExactDecimal.

    Rules:
    - Must be > 0.
    - Must be <= MAX_TRANSACTION when one is configured.
    - Raises InvalidAmount otherwise.
    """
    amt = as_exact(amount)
    if amt.is_zero() or amt.is_negative():
        raise InvalidAmount(f"Amount must be > 0, got {amt}")
    if cfg.MAX_TRANSACTION is not None and amt > as_exact(cfg.MAX_TRANSACTION):
        raise InvalidAmount(f"Amount must be <= {cfg.MAX_TRANSACTION}, got {amt}")
    return amt
