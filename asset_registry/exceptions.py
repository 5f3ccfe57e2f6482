"""Custom exception hierarchy for asset-registry.

Every class carries a stable ``code`` so callers can branch on the
failure without parsing messages.
"""


class RegistryError(Exception):
    """Base exception for all asset-registry errors."""

    code = "REGISTRY_ERROR"


# Validation


class ValidationError(RegistryError):
    """Raised when an operation receives bad parameters."""

    code = "VALIDATION_ERROR"


class InvalidParameterError(ValidationError):
    """Raised for zero prices, invalid share counts, zero addresses and similar."""

    code = "INVALID_PARAMETER"


class BelowMinimumPurchaseError(ValidationError):
    """Raised when a share purchase is smaller than the minimum quantum."""

    code = "BELOW_MINIMUM_PURCHASE"


class InsufficientSharesAvailableError(ValidationError):
    """Raised when a share purchase exceeds the unallocated pool."""

    code = "INSUFFICIENT_SHARES_AVAILABLE"


class ExceedsMaxPerOwnerError(ValidationError):
    """Raised when a purchase would push an owner above the per-owner cap."""

    code = "EXCEEDS_MAX_PER_OWNER"


# Authorization


class AuthorizationError(RegistryError):
    """Raised when the caller is not allowed to perform the operation."""

    code = "NOT_AUTHORIZED"


class NotOwnerError(AuthorizationError):
    """Raised when an administrative operation is called by a non-owner."""

    code = "NOT_OWNER"


class NotSellerError(AuthorizationError):
    """Raised when a seller-only operation is called by someone else."""

    code = "NOT_SELLER"


# Lookup


class EntityNotFoundError(RegistryError):
    """Raised when a referenced entity does not exist."""

    code = "NOT_FOUND"


class AssetNotFoundError(EntityNotFoundError):
    """Raised for an unknown asset identifier."""

    code = "ASSET_NOT_FOUND"


class TokenNotFoundError(EntityNotFoundError):
    """Raised when an asset has no share token binding."""

    code = "TOKEN_NOT_FOUND"


# State


class InvalidEntityStateError(RegistryError):
    """Raised when an entity is in an invalid state for the operation."""

    code = "INVALID_STATE"


StateError = InvalidEntityStateError


class AssetUnavailableError(InvalidEntityStateError):
    """Raised when an asset is not in a purchasable status."""

    code = "ASSET_UNAVAILABLE"


class ListingExpiredError(InvalidEntityStateError):
    """Raised when the listing expiry has passed."""

    code = "LISTING_EXPIRED"


class AlreadyInitializedError(InvalidEntityStateError):
    """Raised when fractional ownership is enabled twice."""

    code = "ALREADY_INITIALIZED"


class OwnershipNotInitializedError(InvalidEntityStateError):
    """Raised when a share purchase targets an asset without a ledger."""

    code = "OWNERSHIP_NOT_INITIALIZED"


class FractionalOwnershipDisabledError(InvalidEntityStateError):
    """Raised when the asset's fractional-ownership flag is off."""

    code = "FRACTIONAL_OWNERSHIP_DISABLED"


class SelfPurchaseForbiddenError(InvalidEntityStateError):
    """Raised when a seller tries to buy shares of their own asset."""

    code = "SELF_PURCHASE_FORBIDDEN"


class AlreadyTokenizedError(InvalidEntityStateError):
    """Raised when an asset already has a share token binding."""

    code = "ALREADY_TOKENIZED"


# Value transfer


class TransferError(RegistryError):
    """Raised when an external payment call fails."""

    code = "TRANSFER_ERROR"


class InsufficientFundsError(TransferError):
    """Raised when balance or allowance does not cover the amount."""

    code = "INSUFFICIENT_FUNDS"


class PaymentTransferFailedError(TransferError):
    """Raised when the payment token reports a failed transfer."""

    code = "PAYMENT_TRANSFER_FAILED"


# Administrative halt


class PausedError(RegistryError):
    """Raised when a mutating operation is called while the registry is paused."""

    code = "PAUSED"


# Ambient


class ConfigurationError(RegistryError):
    """Raised when configuration is invalid or missing."""

    code = "CONFIGURATION_ERROR"


class SinkError(RegistryError):
    """Raised when a sink operation fails."""

    code = "SINK_ERROR"
