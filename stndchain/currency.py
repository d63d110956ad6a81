"""An in-memory multi-currency ledger of balances and total issuance."""

from __future__ import annotations

from collections import defaultdict
from typing import Hashable

from stndchain.primitives import U128_MAX, Balance, CurrencyId, DispatchError


class CurrencyError(DispatchError):
    """A currency operation failed; ``reason`` names why."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


def _check_amount(amount: Balance) -> None:
    if amount < 0:
        raise ValueError("amount must not be negative")


class MultiCurrency:
    """Balances of many currencies held by many accounts."""

    def __init__(self) -> None:
        self._balances: defaultdict[tuple[CurrencyId, Hashable], Balance] = defaultdict(int)
        self._issuance: defaultdict[CurrencyId, Balance] = defaultdict(int)

    def free_balance(self, currency_id: CurrencyId, who: Hashable) -> Balance:
        return self._balances.get((currency_id, who), 0)

    def total_issuance(self, currency_id: CurrencyId) -> Balance:
        return self._issuance.get(currency_id, 0)

    def deposit(self, currency_id: CurrencyId, who: Hashable, amount: Balance) -> None:
        """Create ``amount`` new units in ``who``'s account."""
        _check_amount(amount)
        if amount == 0:
            return
        issuance = self.total_issuance(currency_id) + amount
        if issuance > U128_MAX:
            raise CurrencyError("TotalIssuanceOverflow")
        self._issuance[currency_id] = issuance
        self._balances[(currency_id, who)] += amount

    def withdraw(self, currency_id: CurrencyId, who: Hashable, amount: Balance) -> None:
        """Destroy ``amount`` units from ``who``'s account."""
        _check_amount(amount)
        if amount == 0:
            return
        balance = self.free_balance(currency_id, who)
        if balance < amount:
            raise CurrencyError("BalanceTooLow")
        self._balances[(currency_id, who)] = balance - amount
        self._issuance[currency_id] -= amount

    def transfer(
        self,
        currency_id: CurrencyId,
        source: Hashable,
        dest: Hashable,
        amount: Balance,
    ) -> None:
        """Move ``amount`` units from ``source`` to ``dest``."""
        _check_amount(amount)
        if amount == 0 or source == dest:
            return
        balance = self.free_balance(currency_id, source)
        if balance < amount:
            raise CurrencyError("BalanceTooLow")
        self._balances[(currency_id, source)] = balance - amount
        self._balances[(currency_id, dest)] += amount