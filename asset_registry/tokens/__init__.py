"""Token collaborators used by the registry."""

from asset_registry.tokens.payment import InMemoryPaymentToken, PaymentToken
from asset_registry.tokens.share_token import ShareIssuer, ShareTokenIssuer

__all__ = ["InMemoryPaymentToken", "PaymentToken", "ShareIssuer", "ShareTokenIssuer"]
