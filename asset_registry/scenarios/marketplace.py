"""Marketplace simulation: generated listings traded by random buyers."""

import logging
import random
from collections import Counter
from dataclasses import dataclass, field

from asset_registry.clock import Clock
from asset_registry.config import MarketplaceDefaults, SimulationConfig
from asset_registry.events import EventBus
from asset_registry.exceptions import RegistryError
from asset_registry.generators import AssetGenerator
from asset_registry.registry import AssetRegistry
from asset_registry.tokens import InMemoryPaymentToken, ShareTokenIssuer

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Outcome of a simulation run."""

    registry: AssetRegistry
    payment_token: InMemoryPaymentToken
    share_issuer: ShareTokenIssuer
    sellers: list[str]
    buyers: list[str]
    purchases: int = 0
    rejections: Counter = field(default_factory=Counter)


class MarketplaceScenario:
    """Register generated listings and run random purchases against them.

    This scenario creates:
    - A payment token, a share token issuer and a registry wired together
    - Funded sellers who list generated assets (some with rent terms)
    - Fractional ownership ledgers on assets that allow it
    - Random fractional and whole-asset purchases by funded buyers

    Purchases rejected by registry rules are counted by error code in
    :attr:`ScenarioResult.rejections`.
    """

    OWNER = "0x" + "a1" * 20
    REGISTRY = "0x" + "b2" * 20
    PAYMENT_TOKEN = "0x" + "c3" * 20
    SHARE_ISSUER = "0x" + "d4" * 20

    TOTAL_SHARE_CHOICES = [100, 500, 1000]
    SELLER_SHARE_PCT = [0, 10, 20, 25]

    def __init__(
        self,
        config: SimulationConfig | None = None,
        defaults: MarketplaceDefaults | None = None,
        seed: int | None = None,
        clock: Clock | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the marketplace scenario.

        Parameters
        ----------
        config : SimulationConfig | None
            Scenario sizing.
        defaults : MarketplaceDefaults | None
            Marketplace defaults for the registry.
        seed : int | None
            Random seed for reproducibility.
        clock : Clock | None
            Time source handed to the registry.
        event_bus : EventBus | None
            Event bus handed to the registry (attach sinks before running).
        """
        self.config = config or SimulationConfig()
        self.defaults = defaults or MarketplaceDefaults()
        self.seed = seed
        self.clock = clock
        self.event_bus = event_bus
        self.random = random.Random(seed)
        self._asset_gen = AssetGenerator(seed=seed, fractional_rate=self.config.fractional_rate)

    def run(self) -> ScenarioResult:
        """Run the whole scenario.

        Returns
        -------
        ScenarioResult
            Registry, collaborators, participants and purchase statistics.
        """
        logger.info(
            "Starting marketplace scenario: %d assets, %d buyers",
            self.config.num_assets,
            self.config.num_buyers,
        )
        result = self._deploy()

        for _ in range(self.config.num_assets):
            self._list_asset(result)

        logger.info(
            "Registered %d assets (%d fractional)",
            result.registry.asset_count,
            len(result.registry.store.ownership),
        )

        for asset_id in range(result.registry.asset_count):
            for _ in range(self.config.purchases_per_asset):
                self._attempt_purchase(result, asset_id)

        logger.info(
            "Scenario complete: %d purchases, %d rejected",
            result.purchases,
            sum(result.rejections.values()),
        )
        return result

    def _deploy(self) -> ScenarioResult:
        token = InMemoryPaymentToken(self.PAYMENT_TOKEN)
        issuer = ShareTokenIssuer(
            self.SHARE_ISSUER,
            owner=self.OWNER,
            base_uri=self.defaults.share_token_base_uri,
        )
        registry = AssetRegistry(
            address=self.REGISTRY,
            owner=self.OWNER,
            payment_token=token,
            share_issuer=issuer,
            defaults=self.defaults,
            clock=self.clock,
            event_bus=self.event_bus,
        )
        issuer.set_registry(self.OWNER, registry.address)

        num_sellers = max(1, self.config.num_assets // 4)
        sellers = [self._address() for _ in range(num_sellers)]
        buyers = [self._address() for _ in range(self.config.num_buyers)]
        for account in sellers + buyers:
            token.mint(account, self.config.buyer_funds)
            token.approve(account, registry.address, self.config.buyer_funds)

        return ScenarioResult(
            registry=registry,
            payment_token=token,
            share_issuer=issuer,
            sellers=sellers,
            buyers=buyers,
        )

    def _list_asset(self, result: ScenarioResult) -> None:
        registry = result.registry
        seller = self.random.choice(result.sellers)
        listing = self._asset_gen.generate()
        asset_id = registry.register_asset(seller, listing.asset, listing.metadata, listing.media)

        if listing.rent_data is not None:
            registry.update_asset_rent_data(seller, asset_id, listing.rent_data)

        if listing.asset.is_fractional_enabled:
            total_shares = self.random.choice(self.TOTAL_SHARE_CHOICES)
            registry.enable_fractional_ownership(
                seller,
                asset_id,
                total_shares=total_shares,
                share_price=listing.asset.price // total_shares,
                min_purchase=max(1, total_shares // 100),
                max_per_owner=self.random.choice([0, total_shares // 5]),
                seller_shares=total_shares * self.random.choice(self.SELLER_SHARE_PCT) // 100,
            )

    def _attempt_purchase(self, result: ScenarioResult, asset_id: int) -> None:
        registry = result.registry
        buyer = self.random.choice(result.buyers)
        ownership = registry.get_ownership(asset_id)
        whole_asset = ownership is None or self.random.random() < self.config.whole_asset_rate

        share_count = 0
        if not whole_asset:
            upper = max(ownership.min_purchase, ownership.total_shares // 10)
            share_count = self.random.randint(ownership.min_purchase, upper)

        try:
            registry.purchase_shares(buyer, asset_id, share_count, whole_asset=whole_asset)
        except RegistryError as exc:
            result.rejections[exc.code] += 1
            logger.debug("Purchase of asset %d rejected: %s", asset_id, exc)
        else:
            result.purchases += 1

    def _address(self) -> str:
        return f"0x{self.random.getrandbits(160):040x}"
