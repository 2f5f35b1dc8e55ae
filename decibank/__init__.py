# -*- coding: utf-8 -*-
"""
Exact-decimal account balances with optimistic concurrency.

Balances are ExactDecimal values (integer coefficient + base-10 scale), never
floats, and are replaced atomically through a compare-and-publish retry loop.
The package only adds a NullHandler; applications configure logging.
"""
import logging

from .account import Account
from .atomic import AtomicReference
from .contention_simulator import ContentionSimulator
from .errors import BankingError, InsufficientBalance, InvalidAmount, MalformedDecimal
from .exact_decimal import ExactDecimal, parse
from .rounding import RoundingPolicy

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Account",
    "AtomicReference",
    "BankingError",
    "ContentionSimulator",
    "ExactDecimal",
    "InsufficientBalance",
    "InvalidAmount",
    "MalformedDecimal",
    "RoundingPolicy",
    "parse",
]
