# -*- coding: utf-8 -*-
from __future__ import annotations
"""
Account - Optimistic Concurrency over an Exact Balance

- Balance is an immutable ExactDecimal held in an AtomicReference.
- Every mutation is read -> compute -> compare-and-publish, retried from a fresh
  read whenever another writer published first (no lost updates).
- Validation and the insufficient-balance check happen before any publish.
- Rounding to the account scale happens once, at commit.
"""

import logging
import time

import decibank.config as cfg
from .atomic import AtomicReference
from .errors import InsufficientBalance, InvalidAmount
from .exact_decimal import ExactDecimal
from .money import as_exact, default_policy, validate_amount_positive
from .rounding import resolve_policy

logger = logging.getLogger(__name__)


class Account:
    def __init__(self, initial_balance, scale: int | None = None, policy=None,
                 account_id: str | None = None):
        if scale is None:
            scale = cfg.DEFAULT_SCALE
        if isinstance(scale, bool) or not isinstance(scale, int) or scale < 0:
            raise ValueError(f"scale must be a non-negative int, got {scale!r}")
        self.account_id = account_id
        self.scale = scale
        self.policy = default_policy() if policy is None else resolve_policy(policy)

        initial = as_exact(initial_balance)
        if initial.is_negative():
            raise InvalidAmount(f"Initial balance must be >= 0, got {initial}")
        self._balance: AtomicReference[ExactDecimal] = AtomicReference(self._commit_value(initial))

    def __repr__(self) -> str:
        return f"Account({self.account_id}, balance={self._balance.get()})"

    def _commit_value(self, value: ExactDecimal) -> ExactDecimal:
        return value.quantize(self.scale, self.policy)

    def _update(self, op: str, compute) -> ExactDecimal:
        """Retry compute(current) until its result is published over current."""
        attempts = 0
        while True:
            attempts += 1
            current = self._balance.get()
            proposed = self._commit_value(compute(current))
            if cfg.CRIT_DELAY_SEC > 0:
                time.sleep(cfg.CRIT_DELAY_SEC)
            if self._balance.compare_and_set(current, proposed):
                break
            if attempts == cfg.RETRY_WARN_THRESHOLD:
                logger.warning("%s on %s still contended after %d attempts",
                               op, self.account_id, attempts)
        logger.debug("%s on %s committed %s -> %s (attempts=%d)",
                     op, self.account_id, current, proposed, attempts)
        return proposed

    def balance(self) -> ExactDecimal:
        return self._balance.get()

    @property
    def conflicts(self) -> int:
        """Publish attempts that lost a race and were retried."""
        return self._balance.conflicts

    def add(self, amount) -> ExactDecimal:
        amt = validate_amount_positive(amount)
        return self._update("add", lambda current: current.add(amt))

    def withdraw(self, amount) -> ExactDecimal:
        amt = validate_amount_positive(amount)

        def compute(current: ExactDecimal) -> ExactDecimal:
            if current.compare(amt) < 0:
                raise InsufficientBalance(
                    f"Insufficient balance: {current} available, {amt} requested")
            return current.subtract(amt)

        return self._update("withdraw", compute)
