"""Listed asset records and their side tables."""

from dataclasses import dataclass

from asset_registry.models.enums import (
    AssetFurnishing,
    AssetStatus,
    AssetSubtype,
    AssetType,
    AssetZone,
    PURCHASABLE_STATUSES,
)


@dataclass
class Asset:
    """Real-world property listed on the registry.

    ``price`` is an 18-decimal fixed-point integer. ``listing_expiry`` is a
    unix timestamp in seconds; ``0`` asks the registry for its default.
    """

    name: str
    asset_type: AssetType
    status: AssetStatus
    furnishing: AssetFurnishing
    zone: AssetZone
    price: int
    area: int  # Square feet
    age: int  # Days
    other_details: str = "{}"  # JSON blob or IPFS pointer
    is_rentable: bool = False
    is_sellable: bool = True
    is_fractional_enabled: bool = False
    seller: str = ""
    listing_expiry: int = 0
    asset_subtype: AssetSubtype | None = None
    asset_id: int | None = None  # Assigned at registration

    def is_purchasable(self, now: int) -> bool:
        """Whether the listing can currently be bought."""
        return self.status in PURCHASABLE_STATUSES and now < self.listing_expiry


@dataclass
class AssetMetadata:
    """Descriptive text for an asset."""

    description: str = ""
    features: str = ""
    amenities: str = ""
    location: str = ""


@dataclass
class AssetMedia:
    """Media pointers (usually IPFS URIs) for an asset."""

    image: str = ""
    video: str = ""
    floor_plan: str = ""


@dataclass
class RentData:
    """Rental terms; amounts are 18-decimal fixed-point integers."""

    rent_price: int  # Per month
    rent_deposit: int
    rent_period: int  # Days
    rent_security_deposit: int
