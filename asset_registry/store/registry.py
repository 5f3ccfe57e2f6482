"""Registry data store with referential integrity."""

import copy
from dataclasses import dataclass, field

from asset_registry.exceptions import AlreadyInitializedError, AssetNotFoundError
from asset_registry.models import (
    Asset,
    AssetMedia,
    AssetMetadata,
    FractionalOwnership,
    MarketplaceConfig,
    RentData,
)


@dataclass
class AssetCheckpoint:
    """Copies of the mutable per-asset records taken before a commit."""

    asset_id: int
    asset: Asset
    ownership: FractionalOwnership | None


@dataclass
class RegistryStore:
    """In-memory store for listed assets with relationship tracking.

    The store is owned by one :class:`~asset_registry.registry.AssetRegistry`
    and passed to it explicitly; nothing here is a module-level singleton.
    """

    config: MarketplaceConfig

    # Primary entities
    assets: dict[int, Asset] = field(default_factory=dict)
    metadata: dict[int, AssetMetadata] = field(default_factory=dict)
    media: dict[int, AssetMedia] = field(default_factory=dict)
    rent_data: dict[int, RentData] = field(default_factory=dict)
    ownership: dict[int, FractionalOwnership] = field(default_factory=dict)

    # Share token URIs reserved at registration
    token_uris: dict[int, str] = field(default_factory=dict)

    # Relationship indexes
    _seller_assets: dict[str, list[int]] = field(default_factory=dict)
    _next_asset_id: int = 0

    @property
    def asset_count(self) -> int:
        """Number of identifiers handed out so far."""
        return self._next_asset_id

    def add_asset(
        self,
        asset: Asset,
        metadata: AssetMetadata,
        media: AssetMedia,
        token_uri: str = "",
    ) -> int:
        """Store a new asset under the next sequential identifier."""
        asset_id = self._next_asset_id
        self._next_asset_id += 1

        asset.asset_id = asset_id
        self.assets[asset_id] = asset
        self.metadata[asset_id] = metadata
        self.media[asset_id] = media
        if token_uri:
            self.token_uris[asset_id] = token_uri
        self._seller_assets.setdefault(asset.seller, []).append(asset_id)
        return asset_id

    def has_asset(self, asset_id: int) -> bool:
        return asset_id in self.assets

    def get_asset(self, asset_id: int) -> Asset:
        """Get an asset or raise :class:`AssetNotFoundError`."""
        try:
            return self.assets[asset_id]
        except KeyError:
            raise AssetNotFoundError(f"Asset {asset_id} does not exist") from None

    def get_metadata(self, asset_id: int) -> AssetMetadata:
        self.get_asset(asset_id)
        return self.metadata[asset_id]

    def get_media(self, asset_id: int) -> AssetMedia:
        self.get_asset(asset_id)
        return self.media[asset_id]

    def get_rent_data(self, asset_id: int) -> RentData | None:
        self.get_asset(asset_id)
        return self.rent_data.get(asset_id)

    def set_metadata(self, asset_id: int, metadata: AssetMetadata) -> None:
        self.get_asset(asset_id)
        self.metadata[asset_id] = metadata

    def set_media(self, asset_id: int, media: AssetMedia) -> None:
        self.get_asset(asset_id)
        self.media[asset_id] = media

    def set_rent_data(self, asset_id: int, rent_data: RentData) -> None:
        self.get_asset(asset_id)
        self.rent_data[asset_id] = rent_data

    def add_ownership(self, asset_id: int, ownership: FractionalOwnership) -> None:
        """Attach a fractional ownership ledger; at most one per asset."""
        self.get_asset(asset_id)
        if asset_id in self.ownership:
            raise AlreadyInitializedError(f"Fractional ownership already initialized for asset {asset_id}")
        self.ownership[asset_id] = ownership

    def get_ownership(self, asset_id: int) -> FractionalOwnership | None:
        self.get_asset(asset_id)
        return self.ownership.get(asset_id)

    def move_asset(self, asset_id: int, new_seller: str) -> None:
        """Re-index an asset under a new seller and update its seller field."""
        asset = self.get_asset(asset_id)
        previous = self._seller_assets.get(asset.seller, [])
        if asset_id in previous:
            previous.remove(asset_id)
        self._seller_assets.setdefault(new_seller, []).append(asset_id)
        asset.seller = new_seller

    # Query methods
    def get_seller_assets(self, seller: str) -> list[int]:
        """Get all asset ids currently listed by a seller."""
        return list(self._seller_assets.get(seller, []))

    # Rollback support
    def checkpoint(self, asset_id: int) -> AssetCheckpoint:
        """Copy the mutable records of an asset before committing changes."""
        ownership = self.ownership.get(asset_id)
        return AssetCheckpoint(
            asset_id=asset_id,
            asset=copy.deepcopy(self.get_asset(asset_id)),
            ownership=copy.deepcopy(ownership) if ownership is not None else None,
        )

    def rollback(self, checkpoint: AssetCheckpoint) -> None:
        """Restore records captured by :meth:`checkpoint`."""
        self.assets[checkpoint.asset_id] = checkpoint.asset
        if checkpoint.ownership is None:
            self.ownership.pop(checkpoint.asset_id, None)
        else:
            self.ownership[checkpoint.asset_id] = checkpoint.ownership

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "assets": len(self.assets),
            "sellers": sum(1 for ids in self._seller_assets.values() if ids),
            "fractional_ledgers": len(self.ownership),
            "rent_listings": len(self.rent_data),
        }
