"""
Error types for ECR registry authentication.

This module provides the exception hierarchy raised while resolving,
fetching and decoding ECR credentials. Every error carries actionable
guidance (suggested fixes and context details) for the user.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCategory(Enum):
    """Categories of errors for better error handling"""
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    CONFIGURATION = "configuration"
    PERMISSION = "permission"
    RESOURCE = "resource"
    UNKNOWN = "unknown"


class ActionableError(Exception):
    """Exception with actionable guidance for users"""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN,
                 suggestions: Optional[List[str]] = None, details: Optional[Dict[str, Any]] = None):
        """Initialize actionable error

        Args:
            message: Primary error message
            category: Error category for classification
            suggestions: List of suggested fixes
            details: Additional context information
        """
        self.message = message
        self.category = category
        self.suggestions = suggestions or []
        self.details = details or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format the complete error message with suggestions"""
        lines = [self.message]

        if self.suggestions:
            lines.append("\nSuggested fixes:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"   {i}. {suggestion}")

        if self.details:
            lines.append("\nAdditional details:")
            for key, value in self.details.items():
                lines.append(f"   {key}: {value}")

        return "\n".join(lines)


class RegistryAuthError(ActionableError):
    """Base class for every failure while producing ECR registry auth"""

    default_category = ErrorCategory.UNKNOWN

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 suggestions: Optional[List[str]] = None, details: Optional[Dict[str, Any]] = None):
        self.cause = cause
        details = dict(details or {})
        if cause is not None:
            details.setdefault("error_type", type(cause).__name__)
            details.setdefault("error_message", str(cause))
        super().__init__(message, category=self.default_category, suggestions=suggestions, details=details)


class MalformedRegistryHostError(RegistryAuthError):
    """The registry host has no account id subdomain"""

    default_category = ErrorCategory.CONFIGURATION

    def __init__(self, host: str):
        self.host = host
        super().__init__(
            f"Could not parse AWS account ID from registry host {host}",
            suggestions=[
                "ECR registry hosts look like <account-id>.dkr.ecr.<region>.amazonaws.com",
                "Check the registry portion of the image reference",
            ],
            details={"registry_host": host},
        )


class InvalidImageReferenceError(RegistryAuthError):
    """The image name could not be parsed as a Docker image reference"""

    default_category = ErrorCategory.CONFIGURATION

    def __init__(self, image_name: str, cause: Optional[BaseException] = None):
        self.image_name = image_name
        super().__init__(
            f"Invalid image reference {image_name!r}",
            cause=cause,
            suggestions=["Image references look like [registry/]repository[:tag][@digest]"],
            details={"image": image_name},
        )


class ResponseShapeError(RegistryAuthError):
    """ECR returned zero or several authorization data entries"""

    default_category = ErrorCategory.RESOURCE

    def __init__(self, count: Optional[int], registry_id: Optional[str]):
        self.count = count
        self.registry_id = registry_id
        got = "[null]" if count is None else str(count)
        super().__init__(
            "Didn't get expected number of AuthorizationData results from ECR. "
            f"Expected 1 item but instead got {got}. "
            f"Tried to fetch authorization for registry ID '{registry_id}'.",
            details={"registry_id": registry_id, "count": got},
        )


class TokenFetchError(RegistryAuthError):
    """ECR kept failing with server-side errors until retries ran out"""

    default_category = ErrorCategory.CONNECTION

    def __init__(self, registry_id: Optional[str], attempts: int, cause: BaseException):
        self.registry_id = registry_id
        self.attempts = attempts
        super().__init__(
            f"Failed to get ECR authorization token after {attempts} attempt(s)",
            cause=cause,
            suggestions=[
                "Check the AWS service health dashboard for ECR in this region",
                "Increase retry.max_retries or retry.backoff_ms in config.yaml",
            ],
            details={"registry_id": registry_id, "attempts": attempts},
        )


class IssuerClientError(RegistryAuthError):
    """ECR rejected the token request; retrying will not help"""

    default_category = ErrorCategory.AUTHENTICATION

    def __init__(self, registry_id: Optional[str], cause: BaseException):
        self.registry_id = registry_id
        super().__init__(
            "ECR rejected the authorization token request",
            cause=cause,
            suggestions=[
                "Verify AWS credentials are configured (aws configure)",
                "Check AWS IAM permissions for ecr:GetAuthorizationToken",
                "Verify the registry ID belongs to an account you can access",
            ],
            details={"registry_id": registry_id},
        )


class CredentialDecodeError(RegistryAuthError):
    """The authorization token could not be decoded"""

    default_category = ErrorCategory.AUTHENTICATION

    def __init__(self, endpoint: Optional[str]):
        self.endpoint = endpoint
        super().__init__(
            f"Unexpected null authorization token for endpoint '{endpoint}'",
            details={"endpoint": endpoint},
        )


class MalformedCredentialError(RegistryAuthError):
    """The decoded token is not in user:password form"""

    default_category = ErrorCategory.AUTHENTICATION

    def __init__(self, endpoint: Optional[str]):
        self.endpoint = endpoint
        super().__init__(
            f"Invalid format for authorization token for endpoint '{endpoint}'",
            details={"endpoint": endpoint},
        )


class EndpointParseError(RegistryAuthError):
    """The proxy endpoint returned by ECR is not a usable URL"""

    default_category = ErrorCategory.CONFIGURATION

    def __init__(self, endpoint: Optional[str], cause: Optional[BaseException] = None):
        self.endpoint = endpoint
        super().__init__(
            f"Unable to parse server URL '{endpoint}' for AWS ECR registry",
            cause=cause,
            details={"endpoint": endpoint},
        )
