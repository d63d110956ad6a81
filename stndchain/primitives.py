"""Core chain types: balances, asset ids, origins and dispatch errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable

BlockNumber = int
Balance = int
AssetId = int
Amount = int
CurrencyId = int
EraIndex = int
SocketIndex = int

CORE_ASSET_ID: AssetId = 0
U32_MAX = 2**32 - 1
U128_MAX = 2**128 - 1


class DispatchError(Exception):
    """Base class for errors raised by dispatchable calls."""


class BadOrigin(DispatchError):
    """The call was made from an origin it does not accept."""


@dataclass(frozen=True)
class Origin:
    """The origin of a call: a signed account or the root."""

    who: Hashable | None = None
    is_root: bool = False

    @classmethod
    def signed(cls, who: Hashable) -> Origin:
        if who is None:
            raise ValueError("a signed origin needs an account")
        return cls(who=who)

    @classmethod
    def root(cls) -> Origin:
        return cls(is_root=True)

    @property
    def is_signed(self) -> bool:
        return not self.is_root and self.who is not None


def ensure_signed(origin: Origin) -> Hashable:
    """Return the signing account, or raise BadOrigin."""
    if not origin.is_signed:
        raise BadOrigin("expected a signed origin")
    return origin.who


def ensure_root(origin: Origin) -> None:
    """Raise BadOrigin unless the origin is root."""
    if not origin.is_root:
        raise BadOrigin("expected the root origin")