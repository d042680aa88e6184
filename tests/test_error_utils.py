"""Unit tests for ecr_auth/error_utils.py"""

from conftest import server_exception
from ecr_auth.error_utils import (
    ActionableError,
    ErrorCategory,
    InvalidImageReferenceError,
    IssuerClientError,
    MalformedRegistryHostError,
    RegistryAuthError,
    ResponseShapeError,
    TokenFetchError,
)


class TestActionableError:
    """Tests for ActionableError formatting"""

    def test_format_message_with_suggestions_and_details(self):
        error = ActionableError(
            "Something failed",
            category=ErrorCategory.CONNECTION,
            suggestions=["Try again", "Check the network"],
            details={"registry_id": "12345"},
        )
        text = str(error)
        assert text.startswith("Something failed")
        assert "1. Try again" in text
        assert "2. Check the network" in text
        assert "registry_id: 12345" in text

    def test_plain_message(self):
        assert str(ActionableError("Just a message")) == "Just a message"


class TestRegistryAuthErrors:
    """Tests for the registry auth error hierarchy"""

    def test_categories(self):
        assert MalformedRegistryHostError("localhost").category == ErrorCategory.CONFIGURATION
        assert InvalidImageReferenceError("").category == ErrorCategory.CONFIGURATION
        assert ResponseShapeError(0, None).category == ErrorCategory.RESOURCE
        assert TokenFetchError("12345", 2, server_exception()).category == ErrorCategory.CONNECTION
        assert IssuerClientError("12345", server_exception()).category == ErrorCategory.AUTHENTICATION

    def test_cause_details(self):
        cause = server_exception()
        error = TokenFetchError("12345", 2, cause)
        assert isinstance(error, RegistryAuthError)
        assert error.cause is cause
        assert error.details["error_type"] == "ClientError"
        assert error.details["attempts"] == 2

    def test_shape_error_message(self):
        error = ResponseShapeError(2, "12345")
        assert "Expected 1 item but instead got 2" in error.message
        assert "'12345'" in error.message
