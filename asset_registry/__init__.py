"""Asset registry with fractional ownership and share token issuance."""

from asset_registry.registry import AssetRegistry, PurchasePlan

__version__ = "0.1.0"

__all__ = ["AssetRegistry", "PurchasePlan", "__version__"]
