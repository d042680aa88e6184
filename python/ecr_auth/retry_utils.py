"""Classification of ECR API errors for retry decisions"""

from enum import Enum

from botocore.exceptions import ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError


class RetryableErrorType(Enum):
    """Types of errors, and whether they should trigger retries"""

    NETWORK = "network"  # Connection errors, timeouts
    TEMPORARY = "temporary"  # ECR ServerException, 5xx errors, throttling
    PERMANENT = "permanent"  # Invalid parameters, 4xx errors, missing credentials


# Error codes the ECR API uses for faults on the service side
SERVER_ERROR_CODES = frozenset(
    {
        "ServerException",
        "InternalFailure",
        "InternalError",
        "ServiceUnavailable",
        "ServiceUnavailableException",
        "RequestTimeout",
        "RequestTimeoutException",
    }
)

THROTTLING_ERROR_CODES = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "ThrottledException",
        "TooManyRequestsException",
        "RequestLimitExceeded",
    }
)

RETRYABLE_ERROR_TYPES = (RetryableErrorType.NETWORK, RetryableErrorType.TEMPORARY)


def get_error_code(error: ClientError) -> str:
    """Return the AWS error code of a ClientError ('Unknown' if missing)"""
    return error.response.get("Error", {}).get("Code", "Unknown")


def classify_issuer_error(error: Exception) -> RetryableErrorType:
    """Determine what kind of failure an ECR API error is

    Args:
        error: Exception raised by the boto3 ECR client

    Returns:
        The RetryableErrorType of the error
    """
    if isinstance(error, ClientError):
        code = get_error_code(error)
        if code in SERVER_ERROR_CODES or code in THROTTLING_ERROR_CODES:
            return RetryableErrorType.TEMPORARY

        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if isinstance(status, int) and (status >= 500 or status == 429):
            return RetryableErrorType.TEMPORARY

        return RetryableErrorType.PERMANENT

    if isinstance(error, (BotoConnectionError, HTTPClientError)):
        return RetryableErrorType.NETWORK

    # NoCredentialsError, ParamValidationError and friends won't fix themselves
    return RetryableErrorType.PERMANENT


def is_retryable_error(error: Exception) -> bool:
    """Return True if the ECR API error is a transient fault worth retrying"""
    return classify_issuer_error(error) in RETRYABLE_ERROR_TYPES
