"""Tests for scenarios."""

import pytest

from asset_registry import events
from asset_registry.clock import ManualClock
from asset_registry.config import MarketplaceDefaults, SimulationConfig
from asset_registry.events import EventBus
from asset_registry.models import AssetStatus
from asset_registry.scenarios import MarketplaceScenario, ScenarioResult


@pytest.fixture
def small_config() -> SimulationConfig:
    return SimulationConfig(num_assets=8, num_buyers=5, purchases_per_asset=4)


class TestMarketplaceScenario:
    """Tests for MarketplaceScenario."""

    def test_run(self, seed: int, small_config: SimulationConfig) -> None:
        """Test scenario registers every listing and records purchases."""
        scenario = MarketplaceScenario(config=small_config, seed=seed, clock=ManualClock(start=1_700_000_000))
        result = scenario.run()

        assert isinstance(result, ScenarioResult)
        assert result.registry.asset_count == 8
        assert len(result.buyers) == 5
        assert len(result.sellers) == 2
        assert result.purchases + sum(result.rejections.values()) == 8 * 4

    def test_ledgers_stay_consistent(self, seed: int, small_config: SimulationConfig) -> None:
        result = MarketplaceScenario(config=small_config, seed=seed).run()
        registry = result.registry

        for asset_id in range(registry.asset_count):
            ownership = registry.get_ownership(asset_id)
            if ownership is not None:
                assert ownership.is_consistent()
                if ownership.available_shares == 0:
                    assert registry.get_asset(asset_id).status != AssetStatus.FOR_SALE

    def test_fees_collected(self, seed: int, small_config: SimulationConfig) -> None:
        result = MarketplaceScenario(config=small_config, seed=seed).run()
        collector = result.registry.marketplace_config.fee_collector

        listing_fees = 8 * MarketplaceDefaults().listing_fee
        assert result.payment_token.balance_of(collector) >= listing_fees

    def test_events_published(self, seed: int, small_config: SimulationConfig) -> None:
        bus = EventBus()
        result = MarketplaceScenario(config=small_config, seed=seed, event_bus=bus).run()

        assert len(bus.events_of(events.ASSET_REGISTERED)) == 8
        purchases = bus.events_of(events.SHARES_PURCHASED) + bus.events_of(events.ASSET_PURCHASED)
        assert len(purchases) == result.purchases

    def test_no_fees(self, seed: int, small_config: SimulationConfig) -> None:
        defaults = MarketplaceDefaults(fees_enabled=False)
        result = MarketplaceScenario(config=small_config, defaults=defaults, seed=seed).run()

        collector = result.registry.marketplace_config.fee_collector
        assert result.payment_token.balance_of(collector) == 0

    def test_reproducible(self, seed: int, small_config: SimulationConfig) -> None:
        """Same seed yields the same outcome."""
        clock_start = 1_700_000_000
        first = MarketplaceScenario(config=small_config, seed=seed, clock=ManualClock(clock_start)).run()
        second = MarketplaceScenario(config=small_config, seed=seed, clock=ManualClock(clock_start)).run()

        assert first.purchases == second.purchases
        assert first.rejections == second.rejections
