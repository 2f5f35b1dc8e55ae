# -*- coding: utf-8 -*-
"""
Custom Exception Classes for the Exact-Decimal Account Domain.

Purpose:
- Give callers one specific exception per business rule violation so they can
  handle bad input or a short balance without catching generic Exception.
- Every error is raised before a new balance is published, so none of them
  leaves an account half-updated.
"""


class BankingError(Exception):
    """Base class for all decibank errors."""


class MalformedDecimal(BankingError, ValueError):
    """
    Raised when text is not a valid decimal literal:
    an optional sign, one or more digits, then optionally a point followed by
    one or more digits.
    """


class InvalidAmount(BankingError):
    """
    Raised when an amount is not acceptable:
    - Zero or negative add/withdraw amount.
    - Negative initial balance.
    - Above the configured per-transaction maximum.
    """


class InsufficientBalance(BankingError):
    """
    Raised when a withdrawal is larger than the balance it was checked against.
    The balance is left unchanged.
    """
