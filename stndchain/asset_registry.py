"""Registry that hands out asset ids for asset names."""

from __future__ import annotations

from typing import Iterable

from stndchain.primitives import CORE_ASSET_ID, U32_MAX, AssetId, DispatchError


class NoIdAvailable(DispatchError):
    """No further asset id can be allocated."""


class AssetRegistry:
    """Maps asset names to ids, allocating new ids in sequence."""

    def __init__(
        self,
        core_asset_id: AssetId = CORE_ASSET_ID,
        next_asset_id: AssetId = 0,
        asset_ids: Iterable[tuple[bytes, AssetId]] = (),
        max_asset_id: AssetId = U32_MAX,
    ) -> None:
        self.core_asset_id = core_asset_id
        self.next_asset_id = next_asset_id
        self.max_asset_id = max_asset_id
        self._asset_ids: dict[bytes, AssetId] = {
            bytes(name): asset_id for name, asset_id in asset_ids
        }

    def get_or_create_asset(self, name: bytes) -> AssetId:
        """Return the id for ``name``, registering it if it is new."""
        key = bytes(name)
        if key in self._asset_ids:
            return self._asset_ids[key]
        asset_id = self.next_asset_id
        if asset_id + 1 > self.max_asset_id:
            raise NoIdAvailable("no asset id available")
        self.next_asset_id = asset_id + 1
        self._asset_ids[key] = asset_id
        return asset_id

    def asset_id(self, name: bytes) -> AssetId | None:
        """Return the id registered for ``name``, or None."""
        return self._asset_ids.get(bytes(name))