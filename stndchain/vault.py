"""Collateralised debt positions backed by oracle prices and settled into the market."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Hashable

from stndchain.currency import CurrencyError, MultiCurrency
from stndchain.market import Market
from stndchain.oracle import Oracle
from stndchain.primitives import (
    U128_MAX,
    AssetId,
    Balance,
    DispatchError,
    Origin,
    ensure_root,
    ensure_signed,
)

MTR: AssetId = 1

_U256_MAX = 2**256 - 1


class VaultError(DispatchError):
    """A vault call was rejected; ``reason`` names why."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


def _check_balance(value: Balance) -> Balance:
    if not 0 <= value <= U128_MAX:
        raise ValueError(f"balance out of range: {value}")
    return value


def _check_ratio(name: str, ratio: tuple[int, int], bound: int) -> tuple[int, int]:
    numerator, denominator = ratio
    if not (0 <= numerator <= bound and 0 <= denominator <= bound):
        raise ValueError(f"{name} out of range: {ratio}")
    return (numerator, denominator)


def _checked_add(a: Balance, b: Balance) -> Balance:
    total = a + b
    if total > U128_MAX:
        raise OverflowError("addition overflow")
    return total


def _checked_sub(a: Balance, b: Balance) -> Balance:
    if b > a:
        raise OverflowError("subtraction underflow")
    return a - b


def _fee(amount: Balance, rate: tuple[Balance, Balance]) -> Balance:
    numerator, denominator = rate
    if denominator == 0:
        raise ZeroDivisionError("divide by zero")
    fee = amount // denominator * numerator
    if fee > U128_MAX:
        raise OverflowError("multiplication overflow")
    return fee


@dataclass(frozen=True)
class CDP:
    """Terms of a collateral position, each as (numerator, denominator)."""

    liquidation_fee: tuple[Balance, Balance]
    max_collateralization_rate: tuple[int, int]
    stability_fee: tuple[Balance, Balance]

    def __post_init__(self) -> None:
        _check_ratio("liquidation_fee", self.liquidation_fee, U128_MAX)
        _check_ratio("max_collateralization_rate", self.max_collateralization_rate, _U256_MAX)
        _check_ratio("stability_fee", self.stability_fee, U128_MAX)


def is_cdp_valid(
    position: CDP,
    collateral_price: Balance,
    collateral_amount: Balance,
    request_price: Balance,
    request_amount: Balance,
) -> bool:
    """Whether the requested value stays below the allowed share of the collateral value."""
    for value in (collateral_price, collateral_amount, request_price, request_amount):
        _check_balance(value)
    collateral = collateral_price * collateral_amount
    request = request_price * request_amount
    if collateral > _U256_MAX or request > _U256_MAX:
        raise OverflowError("multiplication overflow")
    numerator, denominator = position.max_collateralization_rate
    if denominator == 0:
        raise ZeroDivisionError("divided by zero")
    determinant = collateral // denominator * numerator
    if determinant > _U256_MAX:
        determinant = 0
    return request < determinant


class Vault:
    """Vaults of collateral against which MTR is requested."""

    def __init__(
        self,
        currency: MultiCurrency,
        oracle: Oracle,
        market: Market,
        account_id: Hashable = "stnd/vlt",
        sys_account_id: Hashable = "stnd/mkt",
    ) -> None:
        self.currency = currency
        self.oracle = oracle
        self.market = market
        self.account_id = account_id
        self.sys_account_id = sys_account_id
        self.circulating_supply: Balance = 0
        self.events: list[tuple] = []
        self._vaults: dict[tuple[Hashable, AssetId], tuple[Balance, Balance]] = {}
        self._positions: dict[AssetId, CDP] = {}

    def vault(self, who: Hashable, collateral_id: AssetId) -> tuple[Balance, Balance] | None:
        """The (collateral amount, MTR amount) of ``who``'s vault, or None."""
        return self._vaults.get((who, collateral_id))

    def position(self, collateral_id: AssetId) -> CDP | None:
        """The position terms set for a collateral, or None."""
        return self._positions.get(collateral_id)

    def _require_position(self, collateral_id: AssetId) -> CDP:
        position = self.position(collateral_id)
        if position is None:
            raise VaultError("CollateralNotSupported")
        return position

    def _require_vault(self, who: Hashable, collateral_id: AssetId) -> tuple[Balance, Balance]:
        vault = self.vault(who, collateral_id)
        if vault is None:
            raise VaultError("VaultDoesNotExist")
        return vault

    def _ensure_funds(self, who: Hashable, needs: dict[AssetId, Balance]) -> None:
        for currency_id, amount in needs.items():
            if self.currency.free_balance(currency_id, who) < amount:
                raise CurrencyError("BalanceTooLow")

    def generate(
        self,
        origin: Origin,
        request_amount: Balance,
        collateral_id: AssetId,
        collateral_amount: Balance,
    ) -> None:
        """Lock collateral in the caller's vault against a request for MTR."""
        sender = ensure_signed(origin)
        _check_balance(request_amount)
        _check_balance(collateral_amount)
        position = self._require_position(collateral_id)
        collateral_price = self.oracle.price(collateral_id)
        mtr_price = self.oracle.price(MTR)

        existing = self.vault(sender, collateral_id)
        if existing is None:
            total_collateral, total_request = collateral_amount, request_amount
        else:
            total_collateral = _checked_add(collateral_amount, existing[0])
            total_request = _checked_add(request_amount, existing[1])

        if not is_cdp_valid(position, collateral_price, total_collateral, mtr_price, total_request):
            raise VaultError("InvalidCDP")

        needs = Counter({collateral_id: collateral_amount})
        needs[MTR] += request_amount
        self._ensure_funds(sender, needs)
        self.currency.transfer(collateral_id, sender, self.sys_account_id, collateral_amount)
        self._vaults[(sender, collateral_id)] = (total_collateral, total_request)
        self.currency.transfer(MTR, sender, self.sys_account_id, request_amount)
        self.events.append(
            ("UpdateVault", sender, collateral_id, total_collateral, request_amount)
        )

    def liquidate_vault(self, origin: Origin, account: Hashable, collateral_id: AssetId) -> None:
        """Liquidate ``account``'s vault once it is no longer sufficiently collateralised."""
        liquidator = ensure_signed(origin)
        collateral_amount, request_amount = self._require_vault(account, collateral_id)
        position = self._require_position(collateral_id)
        collateral_price = self.oracle.price(collateral_id)
        mtr_price = self.oracle.price(MTR)
        if is_cdp_valid(position, collateral_price, collateral_amount, mtr_price, request_amount):
            raise VaultError("Unavailable")

        fee = _fee(collateral_amount, position.liquidation_fee)
        rest = _checked_sub(collateral_amount, fee)
        lpt = self.market.pair(MTR, collateral_id)
        if lpt is None:
            raise VaultError("MarketDoesNotExist")
        reserve0, reserve1 = self.market.reserves(lpt)
        liquidated = _checked_add(rest, reserve1)

        self._ensure_funds(liquidator, {collateral_id: fee})
        self.currency.transfer(collateral_id, liquidator, self.account_id, fee)
        self.market.set_reserves(MTR, collateral_id, reserve0, liquidated, lpt)
        del self._vaults[(account, collateral_id)]
        self.events.append(("Liquidate", collateral_id, collateral_amount))

    def close(self, origin: Origin, collateral_id: AssetId) -> None:
        """Pay the stability fee and give the remaining collateral back to the caller."""
        sender = ensure_signed(origin)
        collateral_amount, request_amount = self._require_vault(sender, collateral_id)
        position = self._require_position(collateral_id)
        collateral_price = self.oracle.price(collateral_id)
        mtr_price = self.oracle.price(MTR)
        if not is_cdp_valid(position, collateral_price, collateral_amount, mtr_price, request_amount):
            raise VaultError("AddMoreCollateral")

        fee = _fee(collateral_amount, position.stability_fee)
        rest = _checked_sub(collateral_amount, fee)
        self._ensure_funds(self.account_id, {collateral_id: fee})
        self.currency.transfer(collateral_id, self.account_id, self.sys_account_id, fee)
        try:
            self.currency.transfer(collateral_id, self.sys_account_id, sender, rest)
        except CurrencyError:
            pass
        self.events.append(("CloseVault", collateral_id, collateral_amount, request_amount))

    def set_position(
        self,
        origin: Origin,
        collateral_id: AssetId,
        liquidation_fee: tuple[Balance, Balance],
        max_collateralization_rate: tuple[int, int],
        stability_fee: tuple[Balance, Balance],
    ) -> None:
        """Set the position terms for a collateral; root only."""
        ensure_root(origin)
        position = CDP(
            liquidation_fee=tuple(liquidation_fee),
            max_collateralization_rate=tuple(max_collateralization_rate),
            stability_fee=tuple(stability_fee),
        )
        self._positions[collateral_id] = position
        self.events.append(
            (
                "SetPosition",
                collateral_id,
                *position.liquidation_fee,
                *position.max_collateralization_rate,
                *position.stability_fee,
            )
        )