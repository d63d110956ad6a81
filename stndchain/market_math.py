"""Integer helpers for the automated market maker."""

from __future__ import annotations

from stndchain.primitives import Balance


def _check(*values: Balance) -> None:
    if any(value < 0 for value in values):
        raise ValueError("balances must not be negative")


def sqrt(y: Balance) -> Balance:
    """Integer square root, rounded down, by Babylonian iteration."""
    _check(y)
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return y


def minimum(x: Balance, y: Balance) -> Balance:
    """The smaller of two balances."""
    _check(x, y)
    return x if x < y else y


def absdiff(x: Balance, y: Balance) -> Balance:
    """The absolute difference of two balances."""
    _check(x, y)
    return y - x if x < y else x - y