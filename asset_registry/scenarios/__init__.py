"""Scenarios for exercising the registry with realistic data."""

from asset_registry.scenarios.marketplace import MarketplaceScenario, ScenarioResult

__all__ = ["MarketplaceScenario", "ScenarioResult"]
