"""Price oracle: registered providers report prices into numbered sockets."""

from __future__ import annotations

from typing import Hashable, Iterable

from stndchain.primitives import (
    U32_MAX,
    U128_MAX,
    AssetId,
    Balance,
    DispatchError,
    EraIndex,
    Origin,
    SocketIndex,
    ensure_root,
    ensure_signed,
)

SLASH_ERA: EraIndex = 1


class OracleError(DispatchError):
    """An oracle call was rejected; ``reason`` names why."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


def _check_u32(name: str, value: int) -> int:
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{name} must be within 0..{U32_MAX}, got {value}")
    return value


def preprocess(batch: Iterable[Balance]) -> list[Balance]:
    """Drop empty (zero) reports and sort the rest in ascending order."""
    return sorted(value for value in batch if value != 0)


def get_median(batch: Iterable[Balance]) -> Balance:
    """Median of the non-zero reports; the upper one for an even count."""
    processed = preprocess(batch)
    if not processed:
        raise ValueError("batch holds no reports")
    return processed[len(processed) // 2]


def determine_outlier(batch: Iterable[Balance], value: Balance) -> bool:
    """Whether ``value`` lies outside 1.5 interquartile ranges of the reports."""
    processed = preprocess(batch)
    if not processed:
        raise ValueError("batch holds no reports")
    mid = len(processed) // 2
    quartile = mid // 2
    q3 = processed[mid + quartile]
    q1 = processed[mid - quartile]
    iqr = 3 * (q3 - q1) // 2
    return q3 + iqr < value or q1 - iqr > value


class Oracle:
    """Providers, their sockets and the price batches they report."""

    def __init__(self, oracles: Iterable[Hashable] = (), provider_count: int = 0) -> None:
        self.provider_count = _check_u32("provider_count", provider_count)
        self.events: list[tuple] = []
        self._providers: dict[Hashable, bool] = {oracle: True for oracle in oracles}
        self._prices: dict[AssetId, list[Balance]] = {}
        self._sockets: dict[SocketIndex, Hashable] = {}
        self._slashes: dict[EraIndex, list[Hashable]] = {}

    def operator(self, who: Hashable) -> bool:
        """Whether ``who`` is a registered provider."""
        return self._providers.get(who, False)

    def asset_price(self, asset_id: AssetId) -> list[Balance] | None:
        """The batch of reported prices for an asset, or None."""
        batch = self._prices.get(asset_id)
        return None if batch is None else list(batch)

    def provider_at(self, socket: SocketIndex) -> Hashable | None:
        """The provider holding ``socket``, or None if it is empty."""
        return self._sockets.get(socket)

    def slashes_at(self, era: EraIndex) -> list[Hashable]:
        """Providers slashed in ``era``."""
        return list(self._slashes.get(era, []))

    def register_operator(self, origin: Origin, socket: SocketIndex, who: Hashable) -> None:
        """Register ``who`` as a provider at ``socket``; root only."""
        ensure_root(origin)
        _check_u32("socket", socket)
        self._providers[who] = True
        self._sockets[socket] = who
        self.events.append(("OperatorRegistered", who))

    def deregister_operator(self, origin: Origin) -> None:
        """Remove the calling provider."""
        who = ensure_signed(origin)
        if not self._providers.pop(who, False):
            raise OracleError("UnknownOperator")
        self.events.append(("OperatorUnregistered", who))

    def report(self, origin: Origin, socket: SocketIndex, asset_id: AssetId, price: Balance) -> None:
        """Submit a price for ``asset_id`` in the caller's socket."""
        who = ensure_signed(origin)
        if who not in self._providers:
            raise OracleError("WrongOperator")
        if self._sockets.get(socket) != who:
            raise OracleError("WrongSocket")
        if not 0 <= price <= U128_MAX:
            raise ValueError(f"price out of range: {price}")
        if socket >= self.provider_count:
            raise IndexError(f"socket {socket} is beyond {self.provider_count} providers")
        existing = self._prices.get(asset_id)
        if existing is None or len(existing) != self.provider_count:
            batch = [0] * self.provider_count
        else:
            batch = list(existing)
        batch[socket] = price
        self._prices[asset_id] = batch
        self.events.append(("PriceSubmitted", socket, who, price))

    def slash(self, origin: Origin, socket: SocketIndex, asset_id: AssetId) -> None:
        """Slash the provider at ``socket`` if its report is an outlier."""
        batch = self._prices.get(asset_id)
        if batch is None:
            raise OracleError("PriceDoesNotExist")
        value = batch[socket]
        if not determine_outlier(batch, value):
            raise OracleError("NotOutlier")
        self._slashes[SLASH_ERA] = [self.provider_at(socket)]
        self._sockets.pop(socket, None)

    def remove_batch(self, origin: Origin, asset_id: AssetId) -> None:
        """Discard the reported prices of an asset; root only."""
        ensure_root(origin)
        self._prices.pop(asset_id, None)

    def set_validator_count(self, origin: Origin, new: int) -> None:
        """Set the number of provider sockets; root only."""
        ensure_root(origin)
        self.provider_count = _check_u32("new", new)

    def increase_validator_count(self, origin: Origin, additional: int) -> None:
        """Add to the number of provider sockets; root only."""
        ensure_root(origin)
        _check_u32("additional", additional)
        total = self.provider_count + additional
        if total > U32_MAX:
            raise OverflowError("provider count overflow")
        self.provider_count = total

    def scale_validator_count(self, origin: Origin, factor: int) -> None:
        """Grow the number of sockets by ``factor`` percent, rounded to nearest; root only."""
        ensure_root(origin)
        if not 0 <= factor <= 100:
            raise ValueError("factor must be a percentage within 0..100")
        extra = (self.provider_count * factor + 50) // 100
        total = self.provider_count + extra
        if total > U32_MAX:
            raise OverflowError("provider count overflow")
        self.provider_count = total

    def price(self, asset_id: AssetId) -> Balance:
        """Median of the reported prices for ``asset_id``."""
        reports = self._prices.get(asset_id)
        if reports is None or not preprocess(reports):
            raise OracleError("PriceDoesNotExist")
        return get_median(reports)