"""Marketplace-wide fee configuration."""

from dataclasses import dataclass

from asset_registry.units import fee_for


@dataclass
class MarketplaceConfig:
    """Fee settings shared by every listing."""

    platform_fee_bps: int
    fee_collector: str
    listing_fee: int
    fees_enabled: bool

    def platform_fee(self, amount: int) -> int:
        """Fee taken from ``amount`` at purchase time (0 when fees are off)."""
        if not self.fees_enabled:
            return 0
        return fee_for(amount, self.platform_fee_bps)

    @property
    def charges_listing_fee(self) -> bool:
        """Whether registration must collect a listing fee."""
        return self.fees_enabled and self.listing_fee > 0
