"""Sample listing generator for simulations and tests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterator

from asset_registry.generators.base import BaseGenerator
from asset_registry.models import (
    Asset,
    AssetFurnishing,
    AssetMedia,
    AssetMetadata,
    AssetStatus,
    AssetType,
    AssetZone,
    RentData,
)
from asset_registry.models.enums import SUBTYPES_BY_TYPE
from asset_registry.units import WAD


@dataclass
class Listing:
    """Everything a seller submits for one asset."""

    asset: Asset
    metadata: AssetMetadata
    media: AssetMedia
    rent_data: RentData | None = None


class AssetGenerator(BaseGenerator):
    """Generate realistic real-estate listings."""

    ASSET_TYPES = list(AssetType)
    TYPE_WEIGHTS = [0.55, 0.25, 0.15, 0.05]

    # Zone that usually goes with each asset type
    ZONES = {
        AssetType.RESIDENTIAL: AssetZone.RESIDENTIAL,
        AssetType.COMMERCIAL: AssetZone.COMMERCIAL,
        AssetType.LAND: AssetZone.LAND,
        AssetType.OTHER: AssetZone.OTHER,
    }

    # Price per square foot ranges (whole payment-token units)
    PRICE_PER_SQFT = {
        AssetType.RESIDENTIAL: (90, 450),
        AssetType.COMMERCIAL: (120, 600),
        AssetType.LAND: (5, 60),
        AssetType.OTHER: (20, 200),
    }

    AREA_RANGES = {
        AssetType.RESIDENTIAL: (600, 6000),
        AssetType.COMMERCIAL: (400, 20000),
        AssetType.LAND: (2000, 200000),
        AssetType.OTHER: (200, 5000),
    }

    FEATURES = [
        "Smart home system", "Solar panels", "Hardwood floors", "Open floor plan",
        "Walk-in closet", "Rooftop terrace", "Private garden", "Corner unit",
    ]
    AMENITIES = [
        "Gym", "Pool", "Concierge", "Covered parking", "Playground",
        "Spa", "Co-working lounge", "EV charging",
    ]

    def __init__(self, seed: int | None = None, fractional_rate: float = 0.6) -> None:
        super().__init__(seed)
        self.fractional_rate = fractional_rate

    def generate(self, listing_expiry: int = 0) -> Listing:
        """Generate a single listing.

        Parameters
        ----------
        listing_expiry : int
            Expiry to put on the asset (0 lets the registry pick its default).

        Returns
        -------
        Listing
            Generated listing.
        """
        asset_type = self.random.choices(self.ASSET_TYPES, weights=self.TYPE_WEIGHTS, k=1)[0]
        subtypes = SUBTYPES_BY_TYPE[asset_type]
        subtype = self.random.choice(list(subtypes)[1:]) if subtypes else None

        area = self.random.randint(*self.AREA_RANGES[asset_type])
        price_per_sqft = self.random.randint(*self.PRICE_PER_SQFT[asset_type])
        # Round to a whole thousand so share prices divide cleanly
        price_units = max(1000, (area * price_per_sqft) // 1000 * 1000)

        is_rentable = asset_type != AssetType.LAND and self.random.random() < 0.5
        city = self.fake.city()
        asset = Asset(
            name=self._name(asset_type, city),
            asset_type=asset_type,
            asset_subtype=subtype,
            status=AssetStatus.FOR_RENT if is_rentable and self.random.random() < 0.2 else AssetStatus.FOR_SALE,
            furnishing=self.random.choice(list(AssetFurnishing)),
            zone=self.ZONES[asset_type],
            price=price_units * WAD,
            area=area,
            age=self.random.randint(0, 40 * 365),
            other_details=json.dumps(
                {
                    "bedrooms": self.random.randint(1, 6) if asset_type == AssetType.RESIDENTIAL else None,
                    "postcode": self.fake.postcode(),
                }
            ),
            is_rentable=is_rentable,
            is_sellable=True,
            is_fractional_enabled=self.random.random() < self.fractional_rate,
            listing_expiry=listing_expiry,
        )

        metadata = AssetMetadata(
            description=self.fake.paragraph(nb_sentences=3),
            features=", ".join(self.random.sample(self.FEATURES, k=3)),
            amenities=", ".join(self.random.sample(self.AMENITIES, k=3)),
            location=f"{self.fake.street_address()}, {city}, {self.fake.state_abbr()}",
        )
        media = AssetMedia(
            image=f"ipfs://{self._cid()}",
            video=f"ipfs://{self._cid()}" if self.random.random() < 0.5 else "",
            floor_plan=f"ipfs://{self._cid()}",
        )
        rent_data = self._rent_data(price_units) if is_rentable else None
        return Listing(asset=asset, metadata=metadata, media=media, rent_data=rent_data)

    def generate_batch(self, count: int) -> Iterator[Listing]:
        """Generate multiple listings.

        Parameters
        ----------
        count : int
            Number of listings to generate.

        Yields
        ------
        Listing
            Generated listings.
        """
        for _ in range(count):
            yield self.generate()

    def _name(self, asset_type: AssetType, city: str) -> str:
        if asset_type == AssetType.LAND:
            return f"{self.fake.last_name()} Acres, {city}"
        if asset_type == AssetType.COMMERCIAL:
            return f"{self.fake.company()} Building"
        return f"{self.fake.street_name()} {self.random.choice(['Residence', 'Villa', 'Lofts', 'House'])}"

    def _rent_data(self, price_units: int) -> RentData:
        # Roughly 0.4%-0.8% of the price per month
        monthly = max(1, price_units * self.random.randint(4, 8) // 1000)
        return RentData(
            rent_price=monthly * WAD,
            rent_deposit=2 * monthly * WAD,
            rent_period=self.random.choice([180, 365, 730]),
            rent_security_deposit=monthly * WAD,
        )

    def _cid(self) -> str:
        return "Qm" + self.fake.pystr(min_chars=44, max_chars=44)
