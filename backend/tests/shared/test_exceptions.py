"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    MarketplaceError,
    NotFoundError,
    StoreError,
    ValidationError,
)


class TestMarketplaceError:
    def test_message(self):
        error = MarketplaceError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code_is_class_name(self):
        assert MarketplaceError("Test error").code == "MarketplaceError"
        assert NotFoundError("missing").code == "NotFoundError"

    def test_custom_code_and_details(self):
        error = MarketplaceError("Test error", code="CUSTOM", details={"key": "value"})
        assert error.code == "CUSTOM"
        assert error.details == {"key": "value"}

    def test_to_dict(self):
        error = MarketplaceError("Test error", code="TEST_ERROR", details={"key": "value"})
        assert error.to_dict() == {
            "error": "TEST_ERROR",
            "message": "Test error",
            "details": {"key": "value"},
        }

    def test_to_dict_minimal(self):
        assert MarketplaceError("Test error").to_dict()["details"] == {}


class TestHierarchy:
    def test_all_inherit_base(self):
        for cls in (
            NotFoundError,
            ValidationError,
            ConflictError,
            AuthenticationError,
            AuthorizationError,
            ConfigurationError,
            StoreError,
        ):
            assert isinstance(cls("x"), MarketplaceError)

    def test_store_error_default_code(self):
        assert StoreError("connection reset").code == "STORE_ERROR"
        assert StoreError("boom", code="OTHER").code == "OTHER"
