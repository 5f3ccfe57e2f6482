"""Pytest configuration and fixtures."""

import pytest

from asset_registry import AssetRegistry
from asset_registry.clock import ManualClock
from asset_registry.events import EventBus
from asset_registry.models import (
    Asset,
    AssetFurnishing,
    AssetMedia,
    AssetMetadata,
    AssetStatus,
    AssetType,
    AssetZone,
    RentData,
    ResidentialType,
)
from asset_registry.tokens import InMemoryPaymentToken, ShareTokenIssuer
from asset_registry.units import WAD

START_TIME = 1_700_000_000
FUNDS = 10_000_000 * WAD


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def owner() -> str:
    """Registry and issuer administrator."""
    return "0x" + "01" * 20


@pytest.fixture
def registry_address() -> str:
    return "0x" + "02" * 20


@pytest.fixture
def seller() -> str:
    return "0x" + "03" * 20


@pytest.fixture
def buyer() -> str:
    return "0x" + "04" * 20


@pytest.fixture
def other_buyer() -> str:
    return "0x" + "05" * 20


@pytest.fixture
def clock() -> ManualClock:
    """Clock frozen at a known timestamp."""
    return ManualClock(start=START_TIME)


@pytest.fixture
def payment_token(seller: str, buyer: str, other_buyer: str, registry_address: str) -> InMemoryPaymentToken:
    """Payment token with funded participants that approved the registry."""
    token = InMemoryPaymentToken("0x" + "06" * 20)
    for account in (seller, buyer, other_buyer):
        token.mint(account, FUNDS)
        token.approve(account, registry_address, FUNDS)
    return token


@pytest.fixture
def share_issuer(owner: str, registry_address: str) -> ShareTokenIssuer:
    """Share token issuer that trusts the registry."""
    return ShareTokenIssuer(
        "0x" + "07" * 20,
        owner=owner,
        base_uri="https://shares.test/",
        registry=registry_address,
    )


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def registry(
    owner: str,
    registry_address: str,
    payment_token: InMemoryPaymentToken,
    share_issuer: ShareTokenIssuer,
    clock: ManualClock,
    event_bus: EventBus,
) -> AssetRegistry:
    """Registry with default marketplace settings (2.5% fee, 10 token listing fee)."""
    return AssetRegistry(
        address=registry_address,
        owner=owner,
        payment_token=payment_token,
        share_issuer=share_issuer,
        clock=clock,
        event_bus=event_bus,
    )


@pytest.fixture
def mock_asset() -> Asset:
    """Fractional-enabled apartment listed at 500,000 tokens."""
    return Asset(
        name="Luxury Villa",
        asset_type=AssetType.RESIDENTIAL,
        asset_subtype=ResidentialType.APARTMENT,
        status=AssetStatus.FOR_SALE,
        furnishing=AssetFurnishing.FULLY_FURNISHED,
        zone=AssetZone.RESIDENTIAL,
        price=500_000 * WAD,
        area=5000,
        age=2,
        other_details='{"bedrooms": 3, "bathrooms": 2}',
        is_rentable=True,
        is_sellable=True,
        is_fractional_enabled=True,
    )


@pytest.fixture
def mock_metadata() -> AssetMetadata:
    return AssetMetadata(
        description="Beautiful luxury villa with ocean view",
        features="Smart home system, Solar panels",
        amenities="Pool, Gym, Security",
        location="123 Ocean Drive, Miami, FL",
    )


@pytest.fixture
def mock_media() -> AssetMedia:
    return AssetMedia(
        image="ipfs://QmImageHash",
        video="ipfs://QmVideoHash",
        floor_plan="ipfs://QmFloorPlanHash",
    )


@pytest.fixture
def mock_rent_data() -> RentData:
    return RentData(
        rent_price=2000 * WAD,
        rent_deposit=4000 * WAD,
        rent_period=365,
        rent_security_deposit=2000 * WAD,
    )


@pytest.fixture
def listed_asset(
    registry: AssetRegistry,
    seller: str,
    mock_asset: Asset,
    mock_metadata: AssetMetadata,
    mock_media: AssetMedia,
) -> int:
    """Id of ``mock_asset`` registered by ``seller``."""
    return registry.register_asset(seller, mock_asset, mock_metadata, mock_media)


@pytest.fixture
def fractional_asset(registry: AssetRegistry, seller: str, listed_asset: int) -> int:
    """Listed asset with 1000 shares at 500 tokens, min 10, max 100, 200 kept by the seller."""
    registry.enable_fractional_ownership(
        seller,
        listed_asset,
        total_shares=1000,
        share_price=500 * WAD,
        min_purchase=10,
        max_per_owner=100,
        seller_shares=200,
    )
    return listed_asset
