"""Enumeration types for listed assets.

Members are named variants internally. The dense integer encoding
(declaration order, starting at 0) only appears at the serialization
boundary through ``to_code`` / ``from_code``.
"""

from enum import Enum
from typing import Union


class CodedEnum(str, Enum):
    """String enum with a positional integer wire code."""

    def to_code(self) -> int:
        """Integer code of this member (declaration order)."""
        return list(type(self)).index(self)

    @classmethod
    def from_code(cls, code: int) -> "CodedEnum":
        """Member for an integer code.

        Raises
        ------
        ValueError
            If the code is outside the enumeration.
        """
        members = list(cls)
        if not 0 <= code < len(members):
            raise ValueError(f"{code} is not a valid {cls.__name__} code")
        return members[code]


class AssetType(CodedEnum):
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    LAND = "LAND"
    OTHER = "OTHER"


class ResidentialType(CodedEnum):
    NONE = "NONE"
    APARTMENT = "APARTMENT"
    FARMHOUSE = "FARMHOUSE"
    VILLA = "VILLA"
    BUNGALOW = "BUNGALOW"
    OTHER = "OTHER"


class CommercialType(CodedEnum):
    NONE = "NONE"
    SHOP = "SHOP"
    OFFICE = "OFFICE"
    GODOWN = "GODOWN"
    OTHER = "OTHER"


class LandType(CodedEnum):
    NONE = "NONE"
    PLOT = "PLOT"
    FARMS = "FARMS"
    OTHER = "OTHER"


class AssetStatus(CodedEnum):
    FOR_SALE = "FOR_SALE"
    FOR_RENT = "FOR_RENT"
    SOLD = "SOLD"
    RENTED = "RENTED"
    DELISTED = "DELISTED"
    OTHER = "OTHER"


class AssetFurnishing(CodedEnum):
    UNFURNISHED = "UNFURNISHED"
    PARTIALLY_FURNISHED = "PARTIALLY_FURNISHED"
    FULLY_FURNISHED = "FULLY_FURNISHED"
    OTHER = "OTHER"


class AssetZone(CodedEnum):
    INDUSTRIAL = "INDUSTRIAL"
    COMMERCIAL = "COMMERCIAL"
    RESIDENTIAL = "RESIDENTIAL"
    LAND = "LAND"
    OTHER = "OTHER"


AssetSubtype = Union[ResidentialType, CommercialType, LandType]

# Subtype enumeration nested under each asset type (OTHER has none)
SUBTYPES_BY_TYPE: dict[AssetType, type[CodedEnum] | None] = {
    AssetType.RESIDENTIAL: ResidentialType,
    AssetType.COMMERCIAL: CommercialType,
    AssetType.LAND: LandType,
    AssetType.OTHER: None,
}

PURCHASABLE_STATUSES = frozenset({AssetStatus.FOR_SALE, AssetStatus.FOR_RENT})
