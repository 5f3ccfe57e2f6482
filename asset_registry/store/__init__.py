"""In-memory data stores for maintaining entity relationships."""

from asset_registry.store.registry import AssetCheckpoint, RegistryStore

__all__ = ["AssetCheckpoint", "RegistryStore"]
