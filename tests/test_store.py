"""Tests for RegistryStore."""

from dataclasses import replace

import pytest

from asset_registry.exceptions import AlreadyInitializedError, AssetNotFoundError
from asset_registry.models import (
    Asset,
    AssetMedia,
    AssetMetadata,
    AssetStatus,
    FractionalOwnership,
    MarketplaceConfig,
    RentData,
)
from asset_registry.store import RegistryStore
from asset_registry.units import WAD


@pytest.fixture
def store() -> RegistryStore:
    """Create a fresh store for each test."""
    return RegistryStore(
        config=MarketplaceConfig(
            platform_fee_bps=250, fee_collector="0xfee", listing_fee=10 * WAD, fees_enabled=True
        )
    )


@pytest.fixture
def sample_asset(mock_asset: Asset) -> Asset:
    mock_asset.seller = "0xseller"
    return mock_asset


@pytest.fixture
def ledger() -> FractionalOwnership:
    return FractionalOwnership(
        total_shares=100, available_shares=100, share_price=WAD, min_purchase=1, max_per_owner=0
    )


class TestRegistryStore:
    """Tests for RegistryStore."""

    def test_ids_start_at_zero(self, store: RegistryStore, sample_asset: Asset) -> None:
        first = store.add_asset(sample_asset, AssetMetadata(), AssetMedia())
        assert first == 0
        assert store.assets[0].asset_id == 0
        assert store.asset_count == 1

    def test_sequential_ids(self, store: RegistryStore, sample_asset: Asset) -> None:
        ids = [
            store.add_asset(replace(sample_asset), AssetMetadata(), AssetMedia())
            for _ in range(3)
        ]
        assert ids == [0, 1, 2]
        assert store.get_seller_assets("0xseller") == [0, 1, 2]

    def test_token_uri_recorded(self, store: RegistryStore, sample_asset: Asset) -> None:
        store.add_asset(sample_asset, AssetMetadata(), AssetMedia(), token_uri="https://t/0")
        assert store.token_uris[0] == "https://t/0"

    def test_missing_asset(self, store: RegistryStore) -> None:
        with pytest.raises(AssetNotFoundError, match="Asset 5 does not exist"):
            store.get_asset(5)
        assert not store.has_asset(5)

    def test_side_tables(
        self,
        store: RegistryStore,
        sample_asset: Asset,
        mock_rent_data: RentData,
    ) -> None:
        asset_id = store.add_asset(sample_asset, AssetMetadata(description="a"), AssetMedia())

        store.set_metadata(asset_id, AssetMetadata(description="b"))
        store.set_media(asset_id, AssetMedia(image="ipfs://x"))
        store.set_rent_data(asset_id, mock_rent_data)

        assert store.get_metadata(asset_id).description == "b"
        assert store.get_media(asset_id).image == "ipfs://x"
        assert store.get_rent_data(asset_id) == mock_rent_data

    def test_rent_data_defaults_to_none(self, store: RegistryStore, sample_asset: Asset) -> None:
        asset_id = store.add_asset(sample_asset, AssetMetadata(), AssetMedia())
        assert store.get_rent_data(asset_id) is None

    def test_ownership_once(
        self, store: RegistryStore, sample_asset: Asset, ledger: FractionalOwnership
    ) -> None:
        asset_id = store.add_asset(sample_asset, AssetMetadata(), AssetMedia())
        store.add_ownership(asset_id, ledger)

        assert store.get_ownership(asset_id) is ledger
        with pytest.raises(AlreadyInitializedError):
            store.add_ownership(asset_id, ledger)

    def test_move_asset(self, store: RegistryStore, sample_asset: Asset) -> None:
        asset_id = store.add_asset(sample_asset, AssetMetadata(), AssetMedia())

        store.move_asset(asset_id, "0xnew")

        assert store.get_asset(asset_id).seller == "0xnew"
        assert store.get_seller_assets("0xseller") == []
        assert store.get_seller_assets("0xnew") == [asset_id]

    def test_seller_assets_is_a_copy(self, store: RegistryStore, sample_asset: Asset) -> None:
        store.add_asset(sample_asset, AssetMetadata(), AssetMedia())
        store.get_seller_assets("0xseller").append(99)
        assert store.get_seller_assets("0xseller") == [0]

    def test_checkpoint_rollback(
        self, store: RegistryStore, sample_asset: Asset, ledger: FractionalOwnership
    ) -> None:
        asset_id = store.add_asset(sample_asset, AssetMetadata(), AssetMedia())
        store.add_ownership(asset_id, ledger)
        checkpoint = store.checkpoint(asset_id)

        store.ownership[asset_id].allocate("0xbuyer", 40)
        store.assets[asset_id].status = AssetStatus.SOLD
        store.rollback(checkpoint)

        assert store.get_asset(asset_id).status == AssetStatus.FOR_SALE
        assert store.get_ownership(asset_id).available_shares == 100
        assert store.get_ownership(asset_id).owners == []

    def test_summary(
        self, store: RegistryStore, sample_asset: Asset, ledger: FractionalOwnership
    ) -> None:
        asset_id = store.add_asset(sample_asset, AssetMetadata(), AssetMedia())
        store.add_ownership(asset_id, ledger)

        assert store.summary() == {
            "assets": 1,
            "sellers": 1,
            "fractional_ledgers": 1,
            "rent_listings": 0,
        }
