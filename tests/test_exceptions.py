"""Tests for custom exception hierarchy."""

import pytest

from asset_registry.exceptions import (
    AlreadyInitializedError,
    AssetNotFoundError,
    AssetUnavailableError,
    AuthorizationError,
    BelowMinimumPurchaseError,
    ConfigurationError,
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidEntityStateError,
    InvalidParameterError,
    ListingExpiredError,
    NotOwnerError,
    NotSellerError,
    PausedError,
    RegistryError,
    SelfPurchaseForbiddenError,
    SinkError,
    StateError,
    TransferError,
    ValidationError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_registry_error_is_exception(self) -> None:
        assert isinstance(RegistryError("test"), Exception)

    def test_asset_not_found_is_entity_not_found(self) -> None:
        err = AssetNotFoundError("test")
        assert isinstance(err, EntityNotFoundError)
        assert isinstance(err, RegistryError)

    def test_authorization_errors(self) -> None:
        assert isinstance(NotOwnerError("test"), AuthorizationError)
        assert isinstance(NotSellerError("test"), AuthorizationError)

    def test_validation_errors(self) -> None:
        assert isinstance(InvalidParameterError("test"), ValidationError)
        assert isinstance(BelowMinimumPurchaseError("test"), ValidationError)

    def test_state_errors(self) -> None:
        for cls in (
            AssetUnavailableError,
            ListingExpiredError,
            AlreadyInitializedError,
            SelfPurchaseForbiddenError,
        ):
            assert isinstance(cls("test"), InvalidEntityStateError)

    def test_transfer_errors(self) -> None:
        assert isinstance(InsufficientFundsError("test"), TransferError)

    @pytest.mark.parametrize("cls", [PausedError, ConfigurationError, SinkError])
    def test_top_level_errors(self, cls: type) -> None:
        assert isinstance(cls("test"), RegistryError)

    def test_exception_message(self) -> None:
        err = AssetNotFoundError("Asset 7 does not exist")
        assert str(err) == "Asset 7 does not exist"


class TestErrorCodes:
    """Test stable error codes."""

    def test_codes_are_distinct(self) -> None:
        classes = [
            AssetNotFoundError,
            AssetUnavailableError,
            BelowMinimumPurchaseError,
            ListingExpiredError,
            NotSellerError,
            PausedError,
            SelfPurchaseForbiddenError,
        ]
        codes = [cls.code for cls in classes]
        assert len(set(codes)) == len(codes)

    def test_code_available_on_instance(self) -> None:
        assert PausedError("paused").code == "PAUSED"
        assert ListingExpiredError("expired").code == "LISTING_EXPIRED"

    def test_state_error_alias(self) -> None:
        assert StateError is InvalidEntityStateError
