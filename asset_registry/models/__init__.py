"""Domain models for the asset registry."""

from asset_registry.models.asset import Asset, AssetMedia, AssetMetadata, RentData
from asset_registry.models.base import Event
from asset_registry.models.enums import (
    AssetFurnishing,
    AssetStatus,
    AssetType,
    AssetZone,
    CommercialType,
    LandType,
    ResidentialType,
)
from asset_registry.models.marketplace import MarketplaceConfig
from asset_registry.models.ownership import FractionalOwnership

__all__ = [
    "Asset",
    "AssetFurnishing",
    "AssetMedia",
    "AssetMetadata",
    "AssetStatus",
    "AssetType",
    "AssetZone",
    "CommercialType",
    "Event",
    "FractionalOwnership",
    "LandType",
    "MarketplaceConfig",
    "RentData",
    "ResidentialType",
]
