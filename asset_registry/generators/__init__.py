"""Sample data generators."""

from asset_registry.generators.asset import AssetGenerator, Listing

__all__ = ["AssetGenerator", "Listing"]
