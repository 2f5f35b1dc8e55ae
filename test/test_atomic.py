# -*- coding: utf-8 -*-
"""Unit tests for AtomicReference."""

import threading
import unittest

from decibank.atomic import AtomicReference
from decibank.exact_decimal import parse


class TestAtomicReference(unittest.TestCase):
    def test_compare_and_set_succeeds_on_identity(self):
        first = parse("1.00")
        ref = AtomicReference(first)
        second = parse("2.00")
        self.assertTrue(ref.compare_and_set(first, second))
        self.assertIs(ref.get(), second)
        self.assertEqual(ref.conflicts, 0)

    def test_equal_but_distinct_value_conflicts(self):
        ref = AtomicReference(parse("1.00"))
        self.assertFalse(ref.compare_and_set(parse("1.00"), parse("3.00")))
        self.assertEqual(str(ref.get()), "1.00")
        self.assertEqual(ref.conflicts, 1)

    def test_stale_expected_value_conflicts(self):
        first = parse("1.00")
        ref = AtomicReference(first)
        ref.compare_and_set(first, parse("2.00"))
        self.assertFalse(ref.compare_and_set(first, parse("9.00")))
        self.assertEqual(str(ref.get()), "2.00")

    def test_one_winner_per_snapshot(self):
        start = parse("0")
        ref = AtomicReference(start)
        barrier = threading.Barrier(8)
        wins = []

        def work(i):
            barrier.wait()
            if ref.compare_and_set(start, parse(str(i))):
                wins.append(i)

        workers = [threading.Thread(target=work, args=(i,)) for i in range(1, 9)]
        for t in workers:
            t.start()
        for t in workers:
            t.join()
        self.assertEqual(len(wins), 1)
        self.assertEqual(ref.conflicts, 7)
        self.assertEqual(str(ref.get()), str(wins[0]))


if __name__ == "__main__":
    unittest.main()
