# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import random
import time
from threading import Lock, Thread
from typing import Dict, List

from .account import Account
from .errors import InsufficientBalance, InvalidAmount
from .exact_decimal import ExactDecimal

"""
ContentionSimulator: concurrent add/withdraw load on one Account

Purpose:
- Drive many threads against a single shared account and check that the
  optimistic retry loop loses nothing.
- Every committed operation's amount is recorded, so the expected balance is
  known exactly: initial + committed adds - committed withdrawals.

Collected metrics:
- attempted / succeeded / failed totals
- failed.by_reason: {insufficient_balance, invalid_amount, other}
- conflicts (publish attempts that lost a race and were retried)
- avg_latency_ms, p95_latency_ms, ops_per_sec
- expected_balance, final_balance, total_drift (must be exactly 0)
"""

logger = logging.getLogger(__name__)


class ContentionSimulator:
    def __init__(self,
                 account: Account,
                 users: int,
                 ops_per_user: int,
                 withdraw_prob: float = 0.5,
                 seed: int | None = None,
                 max_cents: int = 5000):
        if users <= 0 or ops_per_user <= 0:
            raise ValueError("users and ops_per_user must be positive")
        if max_cents <= 0:
            raise ValueError("max_cents must be positive")
        if account.scale < 2:
            raise ValueError(f"account scale must be >= 2 for cent amounts, got {account.scale}")
        self.account = account
        self.users = users
        self.ops_per_user = ops_per_user
        self.withdraw_prob = max(0.0, min(1.0, float(withdraw_prob)))
        self.max_cents = max_cents
        self._rng = random.Random(seed)
        self._mtx = Lock()
        self._reset_metrics()

    def _reset_metrics(self):
        """Clear the shared counters so each run() reports only its own operations."""
        self._attempted = 0
        self._succeeded = 0
        self._failed = 0
        self._failed_by_reason = {
            'insufficient_balance': 0,
            'invalid_amount': 0,
            'other': 0,
        }
        self._net = ExactDecimal(0, self.account.scale)
        self._latencies: List[float] = []

    # ---------- helpers ----------
    def _amount(self) -> ExactDecimal:
        """Random amount between 0.01 and max_cents / 100."""
        with self._mtx:
            cents = self._rng.randint(1, self.max_cents)
        return ExactDecimal(cents, 2)

    def _pick_withdraw(self) -> bool:
        with self._mtx:
            return self._rng.random() < self.withdraw_prob

    def _do_op(self):
        amt = self._amount()
        withdraw = self._pick_withdraw()
        reason = None
        t0 = time.perf_counter()
        try:
            if withdraw:
                self.account.withdraw(amt)
            else:
                self.account.add(amt)
        except InsufficientBalance:
            reason = 'insufficient_balance'
        except InvalidAmount:
            reason = 'invalid_amount'
        except Exception:
            logger.exception("Unexpected failure during %s of %s",
                             'withdraw' if withdraw else 'add', amt)
            reason = 'other'
        t1 = time.perf_counter()
        with self._mtx:
            self._attempted += 1
            self._latencies.append(t1 - t0)
            if reason is None:
                self._succeeded += 1
                self._net = self._net - amt if withdraw else self._net + amt
            else:
                self._failed += 1
                self._failed_by_reason[reason] += 1

    def _worker(self):
        for _ in range(self.ops_per_user):
            self._do_op()

    # ---------- public ----------
    def run(self) -> Dict:
        """
        Run all worker threads and return the metrics dict.

        Amounts have two fractional digits, so they must be added with no
        rounding at an account scale of 2 or more; total_drift is then 0.
        Counters start from zero on every call.
        """
        self._reset_metrics()
        start_balance = self.account.balance()
        start_conflicts = self.account.conflicts
        t0 = time.perf_counter()

        threads = [Thread(target=self._worker, daemon=True) for _ in range(self.users)]
        for th in threads:
            th.start()
        for th in threads:
            th.join()

        elapsed = max(time.perf_counter() - t0, 1e-9)
        final_balance = self.account.balance()
        expected = start_balance + self._net
        drift = final_balance - expected

        lats = sorted(self._latencies)
        avg_ms = (sum(lats) / len(lats) * 1000.0) if lats else 0.0
        p95_ms = (lats[int(0.95 * (len(lats) - 1))] * 1000.0) if lats else 0.0

        stats = {
            'attempted': {'total': self._attempted},
            'succeeded': {'total': self._succeeded},
            'failed': {
                'total': self._failed,
                'by_reason': self._failed_by_reason.copy(),
            },
            'conflicts': self.account.conflicts - start_conflicts,
            'ops_per_sec': float(self._attempted) / elapsed,
            'avg_latency_ms': round(avg_ms, 3),
            'p95_latency_ms': round(p95_ms, 3),
            'expected_balance': expected,
            'final_balance': final_balance,
            'total_drift': drift,
        }
        if not drift.is_zero():
            logger.error("Balance drift detected on %s: %s", self.account.account_id, drift)
        return stats
