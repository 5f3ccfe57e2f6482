#!/usr/bin/env python3
"""Run a marketplace simulation and export registry events and state.

Generated listings are registered, fractional ledgers are enabled where
allowed, and random buyers purchase shares or whole assets. Events stream
to the chosen sink while the simulation runs; final asset records are
written as a batch at the end.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from asset_registry.config import RegistrySettings
from asset_registry.events import EventBus
from asset_registry.logging import get_logger, setup_logging
from asset_registry.scenarios import MarketplaceScenario
from asset_registry.sinks import ConsoleSink, JsonFileSink, KafkaSink

logger = get_logger(__name__)


def build_sink(name: str, settings: RegistrySettings):
    """Create the sink selected on the command line."""
    if name == "kafka":
        return KafkaSink(settings.kafka)
    if name == "json":
        return JsonFileSink(settings.output.json_output_dir, pretty=settings.output.pretty_json)
    return ConsoleSink(pretty=False, max_records=10)


def main() -> None:
    """Run the simulation."""
    settings = RegistrySettings.from_env()

    parser = argparse.ArgumentParser(description="Simulate asset registry trading")
    parser.add_argument("--assets", type=int, default=settings.simulation.num_assets, help="Number of listings")
    parser.add_argument("--buyers", type=int, default=settings.simulation.num_buyers, help="Number of buyers")
    parser.add_argument(
        "--purchases-per-asset",
        type=int,
        default=settings.simulation.purchases_per_asset,
        help="Purchase attempts per listing",
    )
    parser.add_argument("--seed", type=int, default=settings.seed or 42, help="Random seed (default: 42)")
    parser.add_argument("--sink", choices=["console", "json", "kafka"], default="console", help="Event sink")
    args = parser.parse_args()

    setup_logging(settings.log_level, settings.log_format)
    logger.info("Simulating %d listings with %d buyers (sink=%s)", args.assets, args.buyers, args.sink)

    settings.simulation.num_assets = args.assets
    settings.simulation.num_buyers = args.buyers
    settings.simulation.purchases_per_asset = args.purchases_per_asset

    sink = build_sink(args.sink, settings)
    event_bus = EventBus(topic_prefix=settings.kafka.topic_prefix)
    event_bus.subscribe(sink)

    scenario = MarketplaceScenario(
        config=settings.simulation,
        defaults=settings.marketplace,
        seed=args.seed,
        event_bus=event_bus,
    )
    result = scenario.run()

    registry = result.registry
    sink.write_batch("assets", list(registry.store.assets.values()))
    sink.close()

    print("=" * 60)
    for entity, count in registry.store.summary().items():
        print(f"  {entity}: {count}")
    print(f"  Purchases: {result.purchases}")
    for code, count in sorted(result.rejections.items()):
        print(f"  Rejected {code}: {count}")
    print(f"  Fees collected: {result.payment_token.balance_of(registry.marketplace_config.fee_collector)}")
    print("=" * 60)


if __name__ == "__main__":
    main()
