"""Asset registry: listings, fees and fractional-ownership accounting.

Every write operation follows the same shape: hold the lock for the asset
(or the registry-wide lock for registration and configuration), validate
all preconditions, commit local state, then perform external token calls.
A failure at any point leaves the store as it was before the call and
publishes no event.
"""

import copy
import logging
import threading
from dataclasses import dataclass, replace

from asset_registry import events
from asset_registry.clock import Clock, system_clock
from asset_registry.config import MarketplaceDefaults
from asset_registry.events import EventBus
from asset_registry.exceptions import (
    AlreadyInitializedError,
    AssetUnavailableError,
    AuthorizationError,
    BelowMinimumPurchaseError,
    ConfigurationError,
    ExceedsMaxPerOwnerError,
    FractionalOwnershipDisabledError,
    InsufficientFundsError,
    InsufficientSharesAvailableError,
    InvalidEntityStateError,
    InvalidParameterError,
    ListingExpiredError,
    NotOwnerError,
    NotSellerError,
    OwnershipNotInitializedError,
    PausedError,
    PaymentTransferFailedError,
    SelfPurchaseForbiddenError,
)
from asset_registry.models import (
    Asset,
    AssetMedia,
    AssetMetadata,
    AssetStatus,
    FractionalOwnership,
    MarketplaceConfig,
    RentData,
)
from asset_registry.models.enums import PURCHASABLE_STATUSES
from asset_registry.store import RegistryStore
from asset_registry.tokens import PaymentToken, ShareIssuer
from asset_registry.units import MAX_PLATFORM_FEE_BPS, is_zero_address

logger = logging.getLogger(__name__)


@dataclass
class PurchasePlan:
    """Everything a validated purchase will change, computed up front."""

    asset_id: int
    buyer: str
    seller: str
    whole_asset: bool
    share_count: int  # Shares allocated from the ledger (0 for whole-asset)
    mint_amount: int
    total_price: int
    platform_fee: int
    seller_amount: int
    fee_collector: str
    new_status: AssetStatus | None


class AssetRegistry:
    """Registry of listed assets and their fractional ownership ledgers.

    Parameters
    ----------
    address : str
        Address the registry acts under when moving payment tokens and
        minting shares.
    owner : str
        Administrative owner (config, pause, collaborator wiring).
    payment_token : PaymentToken
        Token used for listing fees and purchases.
    share_issuer : ShareIssuer | None
        Share token issuer; may be wired later with
        :meth:`set_share_token_issuer`.
    store : RegistryStore | None
        Backing store. A fresh one seeded from ``defaults`` is created when
        omitted.
    defaults : MarketplaceDefaults | None
        Fee and listing defaults.
    clock : Clock | None
        Time source in unix seconds.
    event_bus : EventBus | None
        Where registry events are published.
    """

    def __init__(
        self,
        address: str,
        owner: str,
        payment_token: PaymentToken,
        share_issuer: ShareIssuer | None = None,
        store: RegistryStore | None = None,
        defaults: MarketplaceDefaults | None = None,
        clock: Clock | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        if is_zero_address(address) or is_zero_address(owner):
            raise InvalidParameterError("Registry and owner addresses cannot be zero")
        if payment_token is None:
            raise InvalidParameterError("A payment token is required")

        self.address = address
        self.owner = owner
        self.payment_token = payment_token
        self.share_issuer = share_issuer
        self.defaults = defaults or MarketplaceDefaults()
        self.store = store or RegistryStore(
            config=MarketplaceConfig(
                platform_fee_bps=self.defaults.platform_fee_bps,
                fee_collector=owner,
                listing_fee=self.defaults.listing_fee,
                fees_enabled=self.defaults.fees_enabled,
            )
        )
        self.clock = clock or system_clock
        self.event_bus = event_bus or EventBus()

        self._paused = False
        self._lock = threading.RLock()
        self._asset_locks: dict[int, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_asset(
        self,
        caller: str,
        asset: Asset,
        metadata: AssetMetadata,
        media: AssetMedia,
    ) -> int:
        """List a new asset and return its identifier.

        The listing fee is charged before anything is stored, so a failed
        charge leaves no record behind and consumes no identifier. The
        seller is always the caller, whatever ``asset.seller`` says.

        Raises
        ------
        PausedError
            If the registry is paused.
        InsufficientFundsError, PaymentTransferFailedError
            If the listing fee cannot be collected.
        """
        with self._lock:
            self._require_not_paused()
            config = self.store.config
            now = self.clock()

            if config.charges_listing_fee:
                self._collect(caller, config.fee_collector, config.listing_fee)

            record = replace(
                asset,
                seller=caller,
                listing_expiry=asset.listing_expiry or now + self.defaults.listing_seconds,
                asset_id=None,
            )
            asset_id = self.store.add_asset(
                record,
                replace(metadata),
                replace(media),
                token_uri=self._token_uri(self.store.asset_count),
            )

            logger.info(
                "Registered asset %d (%s) for seller %s",
                asset_id,
                record.name,
                caller,
                extra={"asset_id": asset_id, "caller": caller},
            )
            self.event_bus.publish(
                events.ASSET_REGISTERED,
                asset_id,
                {
                    "asset_id": asset_id,
                    "name": record.name,
                    "caller": caller,
                    "seller": record.seller,
                    "share_token_issuer": self.share_issuer.address if self.share_issuer else None,
                    "listing_expiry": record.listing_expiry,
                },
            )
        return asset_id

    # ------------------------------------------------------------------
    # Fractional ownership
    # ------------------------------------------------------------------

    def enable_fractional_ownership(
        self,
        caller: str,
        asset_id: int,
        total_shares: int,
        share_price: int,
        min_purchase: int,
        max_per_owner: int,
        seller_shares: int = 0,
    ) -> FractionalOwnership:
        """Create the ownership ledger of an asset.

        ``seller_shares`` are credited to the seller immediately; the rest
        form the available pool.
        """
        with self._asset_lock(asset_id):
            self._require_not_paused()
            asset = self.store.get_asset(asset_id)
            self._require_seller(asset, caller)

            if not asset.is_fractional_enabled:
                raise FractionalOwnershipDisabledError(
                    f"Fractional ownership is not enabled for asset {asset_id}"
                )
            if self.store.get_ownership(asset_id) is not None:
                raise AlreadyInitializedError(
                    f"Fractional ownership already initialized for asset {asset_id}"
                )
            if total_shares <= 0:
                raise InvalidParameterError("Total shares must be greater than 0")
            if share_price <= 0:
                raise InvalidParameterError("Share price must be greater than 0")
            if not 0 < min_purchase <= total_shares:
                raise InvalidParameterError("Minimum purchase must be between 1 and total shares")
            if max_per_owner < 0:
                raise InvalidParameterError("Maximum shares per owner cannot be negative")
            if not 0 <= seller_shares <= total_shares:
                raise InvalidParameterError("Seller shares must be between 0 and total shares")

            ownership = FractionalOwnership(
                total_shares=total_shares,
                available_shares=total_shares,
                share_price=share_price,
                min_purchase=min_purchase,
                max_per_owner=max_per_owner,
            )
            if seller_shares > 0:
                ownership.allocate(asset.seller, seller_shares)
            self.store.add_ownership(asset_id, ownership)

            logger.info(
                "Enabled fractional ownership for asset %d: %d shares at %d",
                asset_id,
                total_shares,
                share_price,
                extra={"asset_id": asset_id, "caller": caller},
            )
            self.event_bus.publish(
                events.OWNERSHIP_ENABLED,
                asset_id,
                {
                    "asset_id": asset_id,
                    "total_shares": total_shares,
                    "share_price": share_price,
                    "seller_shares": seller_shares,
                },
            )
            return copy.deepcopy(ownership)

    # ------------------------------------------------------------------
    # Purchases
    # ------------------------------------------------------------------

    def purchase_shares(
        self,
        caller: str,
        asset_id: int,
        share_count: int = 0,
        whole_asset: bool = False,
    ) -> PurchasePlan:
        """Buy shares of an asset, or the whole asset.

        Whole-asset purchases ignore ``share_count``, mint the ledger's
        total shares (or the default share count when there is no ledger)
        and always mark the asset SOLD. Fractional purchases allocate from
        the available pool and mark the asset SOLD once the pool is empty
        while it was FOR_SALE.

        Returns
        -------
        PurchasePlan
            The settled purchase.
        """
        with self._asset_lock(asset_id):
            self._require_not_paused()
            asset = self.store.get_asset(asset_id)
            self._require_purchasable(asset)
            if self.share_issuer is None:
                raise ConfigurationError("Share token issuer is not configured")

            if whole_asset:
                plan = self._plan_whole_asset(caller, asset)
            else:
                plan = self._plan_fractional(caller, asset, share_count)
            self._require_funds(caller, plan.total_price)
            if not self.share_issuer.can_mint(self.address):
                raise AuthorizationError(
                    f"Share token issuer {self.share_issuer.address} does not accept mints from {self.address}"
                )

            previous_status = asset.status
            checkpoint = self.store.checkpoint(asset_id)
            self._commit(plan)
            try:
                self._settle(plan)
            except Exception:
                self.store.rollback(checkpoint)
                logger.error(
                    "Purchase of asset %d by %s failed during settlement; state restored",
                    asset_id,
                    caller,
                    extra={"asset_id": asset_id, "caller": caller},
                )
                raise

            logger.info(
                "%s bought %s of asset %d for %d (fee %d)",
                caller,
                "all" if whole_asset else f"{plan.share_count} shares",
                asset_id,
                plan.total_price,
                plan.platform_fee,
                extra={"asset_id": asset_id, "caller": caller},
            )
            self.event_bus.publish(
                events.ASSET_PURCHASED if whole_asset else events.SHARES_PURCHASED,
                asset_id,
                {
                    "asset_id": asset_id,
                    "buyer": caller,
                    "seller": plan.seller,
                    "share_count": plan.share_count,
                    "minted": plan.mint_amount,
                    "total_price": plan.total_price,
                    "platform_fee": plan.platform_fee,
                    "seller_amount": plan.seller_amount,
                },
            )
            if plan.new_status is not None and plan.new_status != previous_status:
                self._publish_status_change(asset_id, previous_status, plan.new_status)
            return plan

    def _plan_whole_asset(self, caller: str, asset: Asset) -> PurchasePlan:
        config = self.store.config
        ownership = self.store.get_ownership(asset.asset_id)
        total_price = asset.price
        fee = config.platform_fee(total_price)
        # Mints the full ledger total even when shares are already allocated
        mint_amount = (
            ownership.total_shares if ownership is not None
            else self.defaults.default_whole_asset_shares
        )
        return PurchasePlan(
            asset_id=asset.asset_id,
            buyer=caller,
            seller=asset.seller,
            whole_asset=True,
            share_count=0,
            mint_amount=mint_amount,
            total_price=total_price,
            platform_fee=fee,
            seller_amount=total_price - fee,
            fee_collector=config.fee_collector,
            new_status=AssetStatus.SOLD,
        )

    def _plan_fractional(self, caller: str, asset: Asset, share_count: int) -> PurchasePlan:
        config = self.store.config
        ownership = self.store.get_ownership(asset.asset_id)
        if ownership is None:
            raise OwnershipNotInitializedError(
                f"Fractional ownership is not initialized for asset {asset.asset_id}"
            )
        if share_count < ownership.min_purchase:
            raise BelowMinimumPurchaseError(
                f"Share count {share_count} below minimum purchase amount {ownership.min_purchase}"
            )
        if share_count > ownership.available_shares:
            raise InsufficientSharesAvailableError(
                f"Only {ownership.available_shares} shares available, requested {share_count}"
            )
        if caller == asset.seller:
            raise SelfPurchaseForbiddenError("Seller cannot purchase shares of their own asset")
        holding = ownership.shares_of(caller) + share_count
        if ownership.max_per_owner > 0 and holding > ownership.max_per_owner:
            raise ExceedsMaxPerOwnerError(
                f"Purchase would exceed maximum shares per owner ({holding} > {ownership.max_per_owner})"
            )

        total_price = share_count * ownership.share_price
        fee = config.platform_fee(total_price)
        sells_out = ownership.available_shares == share_count
        return PurchasePlan(
            asset_id=asset.asset_id,
            buyer=caller,
            seller=asset.seller,
            whole_asset=False,
            share_count=share_count,
            mint_amount=share_count,
            total_price=total_price,
            platform_fee=fee,
            seller_amount=total_price - fee,
            fee_collector=config.fee_collector,
            new_status=AssetStatus.SOLD if sells_out and asset.status == AssetStatus.FOR_SALE else None,
        )

    def _commit(self, plan: PurchasePlan) -> None:
        """Apply the local ledger and status changes of a validated plan."""
        if not plan.whole_asset:
            self.store.ownership[plan.asset_id].allocate(plan.buyer, plan.share_count)
        if plan.new_status is not None:
            self.store.assets[plan.asset_id].status = plan.new_status

    def _settle(self, plan: PurchasePlan) -> None:
        """External side of a purchase: token binding, escrow, mint, payout.

        The buyer's payment is held by the registry until the shares are
        minted. If minting or a payout fails, minted shares are burned and
        whatever is still held goes back to the buyer.
        """
        self._ensure_token(plan.asset_id)
        self._collect(plan.buyer, self.address, plan.total_price)

        held = plan.total_price
        minted = False
        try:
            self.share_issuer.mint_shares(self.address, plan.buyer, plan.asset_id, plan.mint_amount)
            minted = True
            self._pay_out(plan.seller, plan.seller_amount)
            held -= plan.seller_amount
            if plan.platform_fee > 0:
                self._pay_out(plan.fee_collector, plan.platform_fee)
                held -= plan.platform_fee
        except Exception:
            if minted:
                self.share_issuer.burn_shares(self.address, plan.buyer, plan.asset_id, plan.mint_amount)
            if held > 0:
                self._pay_out(plan.buyer, held)
            if held < plan.total_price:
                logger.error(
                    "Refunded %d of %d to %s; %d already paid out",
                    held,
                    plan.total_price,
                    plan.buyer,
                    plan.total_price - held,
                    extra={"asset_id": plan.asset_id, "caller": plan.buyer},
                )
            raise

    def _ensure_token(self, asset_id: int) -> int:
        """Get-or-create the share token binding for an asset."""
        token_id = self.share_issuer.get_token_id(asset_id)
        if token_id == 0:
            uri = self.store.token_uris.get(asset_id) or self._token_uri(asset_id)
            token_id = self.share_issuer.tokenize_asset(self.address, asset_id, uri)
            logger.debug("Bound asset %d to share token %d", asset_id, token_id)
        return token_id

    # ------------------------------------------------------------------
    # Seller administration
    # ------------------------------------------------------------------

    def update_asset_price(self, caller: str, asset_id: int, new_price: int) -> None:
        """Change the asking price.

        When the asset has an ownership ledger and share price rescaling is
        on, the share price becomes ``new_price // total_shares``.
        """
        with self._asset_lock(asset_id):
            asset = self.store.get_asset(asset_id)
            self._require_seller(asset, caller)
            if new_price <= 0:
                raise InvalidParameterError("Price must be greater than 0")

            ownership = self.store.get_ownership(asset_id)
            new_share_price = None
            if ownership is not None and self.defaults.rescale_share_price:
                new_share_price = new_price // ownership.total_shares
                if new_share_price == 0:
                    raise InvalidParameterError(
                        f"Price {new_price} is too small for {ownership.total_shares} shares"
                    )
                if ownership.share_price != asset.price // ownership.total_shares:
                    logger.warning(
                        "Overwriting custom share price %d of asset %d with %d",
                        ownership.share_price,
                        asset_id,
                        new_share_price,
                        extra={"asset_id": asset_id, "caller": caller},
                    )

            old_price = asset.price
            asset.price = new_price
            if new_share_price is not None:
                ownership.share_price = new_share_price

            self.event_bus.publish(
                events.ASSET_UPDATED,
                asset_id,
                {
                    "asset_id": asset_id,
                    "field": "price",
                    "old": old_price,
                    "new": new_price,
                    "share_price": new_share_price,
                },
            )

    def update_asset_status(self, caller: str, asset_id: int, status: AssetStatus) -> None:
        with self._asset_lock(asset_id):
            asset = self.store.get_asset(asset_id)
            self._require_seller(asset, caller)
            status = AssetStatus(status)
            previous = asset.status
            asset.status = status
            self._publish_status_change(asset_id, previous, status)

    def update_asset_metadata(self, caller: str, asset_id: int, metadata: AssetMetadata) -> None:
        with self._asset_lock(asset_id):
            self._require_seller(self.store.get_asset(asset_id), caller)
            self.store.set_metadata(asset_id, replace(metadata))
            self.event_bus.publish(events.ASSET_UPDATED, asset_id, {"asset_id": asset_id, "field": "metadata"})

    def update_asset_media(self, caller: str, asset_id: int, media: AssetMedia) -> None:
        with self._asset_lock(asset_id):
            self._require_seller(self.store.get_asset(asset_id), caller)
            self.store.set_media(asset_id, replace(media))
            self.event_bus.publish(events.ASSET_UPDATED, asset_id, {"asset_id": asset_id, "field": "media"})

    def update_asset_rent_data(self, caller: str, asset_id: int, rent_data: RentData) -> None:
        with self._asset_lock(asset_id):
            self._require_seller(self.store.get_asset(asset_id), caller)
            self.store.set_rent_data(asset_id, replace(rent_data))
            self.event_bus.publish(events.ASSET_UPDATED, asset_id, {"asset_id": asset_id, "field": "rent_data"})

    def extend_listing_expiry(self, caller: str, asset_id: int, new_expiry: int) -> None:
        """Push the listing expiry later; it can never move backwards."""
        with self._asset_lock(asset_id):
            asset = self.store.get_asset(asset_id)
            self._require_seller(asset, caller)
            if new_expiry <= self.clock():
                raise InvalidParameterError("New expiry must be in the future")
            if new_expiry <= asset.listing_expiry:
                raise InvalidParameterError("New expiry must be later than the current expiry")

            previous = asset.listing_expiry
            asset.listing_expiry = new_expiry
            self.event_bus.publish(
                events.LISTING_EXTENDED,
                asset_id,
                {"asset_id": asset_id, "old": previous, "new": new_expiry},
            )

    def transfer_sellership(self, caller: str, asset_id: int, new_seller: str) -> None:
        """Hand the listing to another seller."""
        with self._asset_lock(asset_id):
            self._require_not_paused()
            asset = self.store.get_asset(asset_id)
            self._require_seller(asset, caller)
            if is_zero_address(new_seller):
                raise InvalidParameterError("New seller cannot be the zero address")

            self.store.move_asset(asset_id, new_seller)
            logger.info(
                "Asset %d moved from %s to %s",
                asset_id,
                caller,
                new_seller,
                extra={"asset_id": asset_id, "caller": caller},
            )
            self.event_bus.publish(
                events.SELLERSHIP_TRANSFERRED,
                asset_id,
                {"asset_id": asset_id, "previous_seller": caller, "new_seller": new_seller},
            )

    # ------------------------------------------------------------------
    # Owner administration
    # ------------------------------------------------------------------

    def update_marketplace_config(
        self,
        caller: str,
        platform_fee_bps: int,
        fee_collector: str,
        listing_fee: int,
        fees_enabled: bool,
    ) -> None:
        """Replace all four marketplace settings at once."""
        with self._lock:
            self._require_owner(caller)
            if not 0 <= platform_fee_bps <= MAX_PLATFORM_FEE_BPS:
                raise InvalidParameterError(
                    f"Platform fee cannot exceed {MAX_PLATFORM_FEE_BPS} basis points"
                )
            if is_zero_address(fee_collector):
                raise InvalidParameterError("Fee collector cannot be the zero address")
            if listing_fee < 0:
                raise InvalidParameterError("Listing fee cannot be negative")

            self.store.config = MarketplaceConfig(
                platform_fee_bps=platform_fee_bps,
                fee_collector=fee_collector,
                listing_fee=listing_fee,
                fees_enabled=fees_enabled,
            )
            logger.info(
                "Marketplace config updated: fee=%d bps, collector=%s, listing_fee=%d, enabled=%s",
                platform_fee_bps,
                fee_collector,
                listing_fee,
                fees_enabled,
            )
            self.event_bus.publish(
                events.MARKETPLACE_CONFIG_UPDATED,
                self.address,
                {
                    "platform_fee_bps": platform_fee_bps,
                    "fee_collector": fee_collector,
                    "listing_fee": listing_fee,
                    "fees_enabled": fees_enabled,
                },
            )

    def update_payment_token(self, caller: str, payment_token: PaymentToken) -> None:
        with self._lock:
            self._require_owner(caller)
            if payment_token is None or is_zero_address(getattr(payment_token, "address", None)):
                raise InvalidParameterError("Payment token address cannot be zero")
            self.payment_token = payment_token
            self.event_bus.publish(
                events.PAYMENT_TOKEN_UPDATED, self.address, {"payment_token": payment_token.address}
            )

    def set_share_token_issuer(self, caller: str, share_issuer: ShareIssuer) -> None:
        with self._lock:
            self._require_owner(caller)
            if share_issuer is None or is_zero_address(getattr(share_issuer, "address", None)):
                raise InvalidParameterError("Share token issuer address cannot be zero")
            self.share_issuer = share_issuer

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        with self._lock:
            self._require_owner(caller)
            if is_zero_address(new_owner):
                raise InvalidParameterError("New owner cannot be the zero address")
            self.owner = new_owner

    def pause(self, caller: str) -> None:
        """Stop registrations and ownership changes; reads stay available."""
        with self._lock:
            self._require_owner(caller)
            self._require_not_paused()
            self._paused = True
            logger.warning("Registry paused by %s", caller)
            self.event_bus.publish(events.REGISTRY_PAUSED, self.address, {"by": caller})

    def unpause(self, caller: str) -> None:
        with self._lock:
            self._require_owner(caller)
            if not self._paused:
                raise InvalidEntityStateError("Registry is not paused")
            self._paused = False
            logger.info("Registry unpaused by %s", caller)
            self.event_bus.publish(events.REGISTRY_UNPAUSED, self.address, {"by": caller})

    @property
    def is_paused(self) -> bool:
        return self._paused

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def asset_count(self) -> int:
        return self.store.asset_count

    @property
    def marketplace_config(self) -> MarketplaceConfig:
        """Snapshot of the current marketplace settings."""
        return replace(self.store.config)

    def get_asset(self, asset_id: int) -> Asset:
        return copy.copy(self.store.get_asset(asset_id))

    def get_metadata(self, asset_id: int) -> AssetMetadata:
        return replace(self.store.get_metadata(asset_id))

    def get_media(self, asset_id: int) -> AssetMedia:
        return replace(self.store.get_media(asset_id))

    def get_rent_data(self, asset_id: int) -> RentData | None:
        rent_data = self.store.get_rent_data(asset_id)
        return replace(rent_data) if rent_data is not None else None

    def get_ownership(self, asset_id: int) -> FractionalOwnership | None:
        ownership = self.store.get_ownership(asset_id)
        return copy.deepcopy(ownership) if ownership is not None else None

    def get_ownership_percentage(self, asset_id: int, owner: str) -> int:
        """Share of ``owner`` in 18-decimal fixed point (10**18 = 100%)."""
        ownership = self.store.get_ownership(asset_id)
        return ownership.percentage_of(owner) if ownership is not None else 0

    def get_shares_owned(self, asset_id: int, owner: str) -> int:
        ownership = self.store.get_ownership(asset_id)
        return ownership.shares_of(owner) if ownership is not None else 0

    def get_asset_owners(self, asset_id: int) -> list[str]:
        ownership = self.store.get_ownership(asset_id)
        return list(ownership.owners) if ownership is not None else []

    def get_seller_assets(self, seller: str) -> list[int]:
        return self.store.get_seller_assets(seller)

    def token_uri(self, asset_id: int) -> str:
        """URI reserved for the asset's share token."""
        self.store.get_asset(asset_id)
        return self.store.token_uris.get(asset_id) or self._token_uri(asset_id)

    # ------------------------------------------------------------------
    # Guards and helpers
    # ------------------------------------------------------------------

    def _asset_lock(self, asset_id: int) -> threading.RLock:
        # Unknown ids fail here so no lock is created for them
        self.store.get_asset(asset_id)
        with self._locks_guard:
            return self._asset_locks.setdefault(asset_id, threading.RLock())

    def _require_not_paused(self) -> None:
        if self._paused:
            raise PausedError("Registry is paused")

    def _require_owner(self, caller: str) -> None:
        if caller != self.owner:
            raise NotOwnerError(f"{caller} is not the registry owner")

    def _require_seller(self, asset: Asset, caller: str) -> None:
        if caller != asset.seller:
            raise NotSellerError("Only the asset seller can call this function")

    def _require_purchasable(self, asset: Asset) -> None:
        if asset.status not in PURCHASABLE_STATUSES:
            raise AssetUnavailableError(
                f"Asset {asset.asset_id} is not available for purchase (status {asset.status.value})"
            )
        if self.clock() >= asset.listing_expiry:
            raise ListingExpiredError(f"Asset {asset.asset_id} listing has expired")

    def _require_funds(self, payer: str, amount: int) -> None:
        balance = self.payment_token.balance_of(payer)
        allowance = self.payment_token.allowance(payer, self.address)
        if balance < amount or allowance < amount:
            raise InsufficientFundsError(
                f"{payer} needs {amount}; balance {balance}, allowance {allowance}"
            )

    def _collect(self, payer: str, recipient: str, amount: int) -> None:
        if not self.payment_token.transfer_from(self.address, payer, recipient, amount):
            raise PaymentTransferFailedError(
                f"Transfer of {amount} from {payer} to {recipient} failed"
            )

    def _pay_out(self, recipient: str, amount: int) -> None:
        if not self.payment_token.transfer(self.address, recipient, amount):
            raise PaymentTransferFailedError(f"Payout of {amount} to {recipient} failed")

    def _token_uri(self, asset_id: int) -> str:
        return f"{self.defaults.share_token_base_uri}{asset_id}"

    def _publish_status_change(
        self, asset_id: int, previous: AssetStatus, status: AssetStatus
    ) -> None:
        logger.info(
            "Asset %d status %s -> %s",
            asset_id,
            previous.value,
            status.value,
            extra={"asset_id": asset_id},
        )
        self.event_bus.publish(
            events.ASSET_STATUS_CHANGED,
            asset_id,
            {"asset_id": asset_id, "old": previous.value, "new": status.value},
        )
