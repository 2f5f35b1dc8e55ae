# -*- coding: utf-8 -*-
"""
Integration tests for ContentionSimulator.

Key invariant: the final balance equals initial + committed adds - committed
withdrawals, exactly, so total_drift is 0.00 under any thread interleaving.
"""

import unittest
from unittest import mock

import decibank.config as cfg
from decibank.account import Account
from decibank.contention_simulator import ContentionSimulator
from decibank.exact_decimal import parse


class TestContentionSimulator(unittest.TestCase):
    def _run(self, account, **kwargs):
        sim = ContentionSimulator(account, **kwargs)
        return sim.run()

    def test_zero_drift_mixed_workload(self):
        acc = Account("1000.00", 2, account_id="SIM")
        users, ops = 16, 500
        stats = self._run(acc, users=users, ops_per_user=ops, withdraw_prob=0.5, seed=7)

        self.assertEqual(stats["attempted"]["total"], users * ops)
        self.assertEqual(stats["succeeded"]["total"] + stats["failed"]["total"], users * ops)
        self.assertEqual(stats["failed"]["by_reason"]["invalid_amount"], 0)
        self.assertEqual(stats["failed"]["by_reason"]["other"], 0)
        self.assertTrue(stats["total_drift"].is_zero(), f"drift = {stats['total_drift']}")
        self.assertEqual(stats["final_balance"], acc.balance())
        self.assertFalse(acc.balance().is_negative())

    def test_add_only_workload_has_no_failures(self):
        acc = Account("0.00", 2)
        stats = self._run(acc, users=8, ops_per_user=250, withdraw_prob=0.0, seed=1)
        self.assertEqual(stats["failed"]["total"], 0)
        self.assertEqual(stats["succeeded"]["total"], 2000)
        self.assertEqual(stats["expected_balance"], acc.balance())
        self.assertTrue(stats["total_drift"].is_zero())

    def test_withdraw_only_from_empty_account_all_fail(self):
        acc = Account("0.00", 2)
        stats = self._run(acc, users=4, ops_per_user=50, withdraw_prob=1.0, seed=3)
        self.assertEqual(stats["failed"]["by_reason"]["insufficient_balance"], 200)
        self.assertEqual(str(acc.balance()), "0.00")

    def test_contention_counted_and_drift_still_zero(self):
        acc = Account("500.00", 2)
        with mock.patch.object(cfg, "CRIT_DELAY_SEC", 0.001):
            stats = self._run(acc, users=8, ops_per_user=20, withdraw_prob=0.3, seed=11)
        self.assertGreater(stats["conflicts"], 0)
        self.assertTrue(stats["total_drift"].is_zero())
        self.assertEqual(stats["final_balance"], stats["expected_balance"])

    def test_repeated_runs_report_only_their_own_operations(self):
        acc = Account("0.00", 2)
        sim = ContentionSimulator(acc, users=2, ops_per_user=5, withdraw_prob=0.0, seed=1)
        first = sim.run()
        second = sim.run()
        for stats in (first, second):
            self.assertEqual(stats["attempted"]["total"], 10)
            self.assertEqual(stats["succeeded"]["total"], 10)
            self.assertEqual(len(sim._latencies), 10)
            self.assertTrue(stats["total_drift"].is_zero(), f"drift = {stats['total_drift']}")
        self.assertEqual(second["expected_balance"], acc.balance())
        self.assertGreater(second["final_balance"], first["final_balance"])

    def test_rejects_account_scale_below_cents(self):
        with self.assertRaises(ValueError):
            ContentionSimulator(Account("0", 1), users=1, ops_per_user=1)

    def test_rejects_bad_arguments(self):
        acc = Account("0.00")
        with self.assertRaises(ValueError):
            ContentionSimulator(acc, users=0, ops_per_user=1)
        with self.assertRaises(ValueError):
            ContentionSimulator(acc, users=1, ops_per_user=1, max_cents=0)

    def test_metrics_shape(self):
        acc = Account(parse("10.00"))
        stats = self._run(acc, users=2, ops_per_user=5, seed=5)
        for key in ("ops_per_sec", "avg_latency_ms", "p95_latency_ms", "conflicts"):
            self.assertIn(key, stats)
        self.assertGreaterEqual(stats["p95_latency_ms"], 0.0)


if __name__ == "__main__":
    unittest.main()
