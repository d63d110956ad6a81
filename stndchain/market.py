"""Constant-product market maker for pairs of assets with liquidity tokens."""

from __future__ import annotations

from typing import Hashable

from stndchain.asset_registry import AssetRegistry
from stndchain.currency import CurrencyError, MultiCurrency
from stndchain.market_math import absdiff, minimum, sqrt
from stndchain.primitives import (
    U128_MAX,
    AssetId,
    Balance,
    DispatchError,
    Origin,
    ensure_signed,
)

LPTOKEN_NAME = b"lptoken"
MINIMUM_LIQUIDITY: Balance = 1
FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000
RATIO_TOLERANCE_DIVISOR = 1000

_U256_MAX = 2**256 - 1


class MarketError(DispatchError):
    """A market call was rejected; ``reason`` names why."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


def _checked_mul(a: int, b: int, bound: int = U128_MAX) -> int:
    product = a * b
    if product > bound:
        raise OverflowError("multiplication overflow")
    return product


def _checked_add(a: int, b: int, bound: int = U128_MAX) -> int:
    total = a + b
    if total > bound:
        raise OverflowError("addition overflow")
    return total


def _checked_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("divide by zero")
    return a // b


def _check_balance(value: Balance) -> None:
    if not 0 <= value <= U128_MAX:
        raise ValueError(f"balance out of range: {value}")


def get_amount_out(amount_in: Balance, reserve_in: Balance, reserve_out: Balance) -> Balance:
    """Output of swapping ``amount_in`` against the reserves, after the 0.3% fee."""
    for value in (amount_in, reserve_in, reserve_out):
        _check_balance(value)
    amount_in_with_fee = _checked_mul(amount_in, FEE_NUMERATOR, _U256_MAX)
    numerator = _checked_mul(amount_in_with_fee, reserve_out, _U256_MAX)
    denominator = _checked_add(
        _checked_mul(reserve_in, FEE_DENOMINATOR, _U256_MAX), amount_in_with_fee, _U256_MAX
    )
    amount_out = _checked_div(numerator, denominator)
    if amount_out > U128_MAX:
        raise OverflowError("amount out does not fit in a balance")
    return amount_out


class Market:
    """Pairs, reserves and liquidity tokens of an automated market maker."""

    def __init__(
        self,
        currency: MultiCurrency,
        registry: AssetRegistry,
        account_id: Hashable = "stnd/mkt",
    ) -> None:
        self.currency = currency
        self.registry = registry
        self.account_id = account_id
        self.events: list[tuple] = []
        self._reserves: dict[AssetId, tuple[Balance, Balance]] = {}
        self._rewards: dict[AssetId, tuple[AssetId, AssetId]] = {}
        self._pairs: dict[tuple[AssetId, AssetId], AssetId] = {}

    def reserves(self, lpt: AssetId) -> tuple[Balance, Balance]:
        """Reserves of a pool, ordered by the smaller asset id first."""
        return self._reserves.get(lpt, (0, 0))

    def reward(self, lpt: AssetId) -> tuple[AssetId, AssetId]:
        """The two assets paid out when burning ``lpt``, smaller id first."""
        return self._rewards.get(lpt, (0, 0))

    def pair(self, token0: AssetId, token1: AssetId) -> AssetId | None:
        """The liquidity token of the pair, or None if no pair exists."""
        return self._pairs.get((token0, token1))

    def set_reserves(
        self,
        token0: AssetId,
        token1: AssetId,
        amount0: Balance,
        amount1: Balance,
        lptoken: AssetId,
    ) -> None:
        """Store the reserves, ordered by asset id."""
        if token0 > token1:
            self._reserves[lptoken] = (amount1, amount0)
        else:
            self._reserves[lptoken] = (amount0, amount1)

    def _set_pair(self, token0: AssetId, token1: AssetId, lptoken: AssetId) -> None:
        self._pairs[(token0, token1)] = lptoken
        self._pairs[(token1, token0)] = lptoken

    def _set_rewards(self, token0: AssetId, token1: AssetId, lptoken: AssetId) -> None:
        self._rewards[lptoken] = (token1, token0) if token0 > token1 else (token0, token1)

    def _ensure_funds(self, currency_id: AssetId, who: Hashable, amount: Balance) -> None:
        if self.currency.free_balance(currency_id, who) < amount:
            raise CurrencyError("BalanceTooLow")

    def mint_liquidity(
        self,
        origin: Origin,
        token0: AssetId,
        amount0: Balance,
        token1: AssetId,
        amount1: Balance,
    ) -> None:
        """Deposit both assets into the pair and mint liquidity tokens to the caller."""
        sender = ensure_signed(origin)
        if token0 == token1:
            raise MarketError("IdenticalIdentifier")
        _check_balance(amount0)
        _check_balance(amount1)

        lpt = self.pair(token0, token1)
        if lpt is None:
            liquidity = sqrt(_checked_mul(amount0, amount1))
            if liquidity < MINIMUM_LIQUIDITY:
                raise ArithmeticError("integer overflow")
            minted = liquidity - MINIMUM_LIQUIDITY
            self._ensure_funds(token0, sender, amount0)
            self._ensure_funds(token1, sender, amount1)
            lpt = self.registry.get_or_create_asset(LPTOKEN_NAME)
            self.currency.transfer(token0, sender, self.account_id, amount0)
            self.currency.transfer(token1, sender, self.account_id, amount1)
            self.set_reserves(token0, token1, amount0, amount1, lpt)
            self._set_pair(token0, token1, lpt)
            self._set_rewards(token0, token1, lpt)
            self.currency.deposit(lpt, sender, minted)
            self.events.append(("CreatePair", token0, token1, lpt))
            return

        total_supply = self.currency.total_issuance(lpt)
        if total_supply <= 0:
            raise MarketError("NoneValue")
        reserve0, reserve1 = self.reserves(lpt)
        ratio = _checked_div(reserve0, reserve1)
        tolerance = amount0 // RATIO_TOLERANCE_DIVISOR
        if token0 > token1:
            deviation = absdiff(_checked_mul(ratio, amount0), amount1)
        else:
            deviation = absdiff(_checked_mul(ratio, amount1), amount0)
        if not deviation < tolerance:
            raise MarketError("K")
        left = _checked_div(_checked_mul(amount0, total_supply), reserve0)
        right = _checked_div(_checked_mul(amount1, total_supply), reserve1)
        minted = minimum(left, right)
        new_reserve0 = _checked_add(reserve0, amount0)
        new_reserve1 = _checked_add(reserve1, amount1)

        self._ensure_funds(token0, sender, amount0)
        self._ensure_funds(token1, sender, amount1)
        self.currency.transfer(token0, sender, self.account_id, amount0)
        self.currency.transfer(token1, sender, self.account_id, amount1)
        self.set_reserves(token0, token1, new_reserve0, new_reserve1, lpt)
        self.currency.deposit(lpt, sender, minted)
        self.events.append(("MintedLiquidity", token0, token1, lpt))

    def burn_liquidity(self, origin: Origin, lpt: AssetId, amount: Balance) -> None:
        """Burn liquidity tokens and pay out the pro-rata share of both reserves."""
        sender = ensure_signed(origin)
        _check_balance(amount)
        reserve0, reserve1 = self.reserves(lpt)
        token0, token1 = self.reward(lpt)
        total_supply = self.currency.total_issuance(lpt)

        reward0 = _checked_div(_checked_mul(amount, reserve0), total_supply)
        reward1 = _checked_div(_checked_mul(amount, reserve1), total_supply)
        if reward0 <= 0 or reward1 <= 0:
            raise MarketError("InsufficientLiquidityBurned")

        self._ensure_funds(lpt, sender, amount)
        self._ensure_funds(token0, self.account_id, reward0)
        self._ensure_funds(token1, self.account_id, reward1)
        self.currency.withdraw(lpt, sender, amount)
        self.currency.transfer(token0, self.account_id, sender, reward0)
        self.currency.transfer(token1, self.account_id, sender, reward1)

        self.set_reserves(token0, token1, reserve0 - reward0, reserve1 - reward1, lpt)
        self.events.append(("BurnedLiquidity", lpt, token0, token1))

    def swap(self, origin: Origin, source: AssetId, amount_in: Balance, target: AssetId) -> None:
        """Swap ``amount_in`` of ``source`` for ``target``, paying the 0.3% fee."""
        sender = ensure_signed(origin)
        _check_balance(amount_in)
        if amount_in <= 0:
            raise MarketError("InsufficientAmount")
        lpt = self.pair(source, target)
        if lpt is None:
            raise MarketError("InvalidPair")
        reserve0, reserve1 = self.reserves(lpt)
        if reserve0 <= 0 or reserve1 <= 0:
            raise MarketError("InsufficientLiquidity")
        if source > target:
            reserve_in, reserve_out = reserve1, reserve0
        else:
            reserve_in, reserve_out = reserve0, reserve1

        amount_out = get_amount_out(amount_in, reserve_in, reserve_out)
        new_reserve_in = _checked_add(reserve_in, amount_in)

        self._ensure_funds(source, sender, amount_in)
        self._ensure_funds(target, self.account_id, amount_out)
        self.currency.transfer(source, sender, self.account_id, amount_in)
        self.currency.transfer(target, self.account_id, sender, amount_out)

        self.set_reserves(source, target, new_reserve_in, reserve_out - amount_out, lpt)
        self.events.append(("Swap", source, amount_in, target, amount_out))