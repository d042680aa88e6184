"""
Fetching of ECR authorization tokens with retries.

ECR's GetAuthorizationToken occasionally fails with a ServerException. Those
faults are retried after a fixed backoff; anything the service rejects as a bad
request is surfaced immediately.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from ecr_auth.error_utils import IssuerClientError, ResponseShapeError, TokenFetchError
from ecr_auth.retry_utils import classify_issuer_error, RETRYABLE_ERROR_TYPES

logger = logging.getLogger(__name__)

DEFAULT_RETRY_BACKOFF_MILLIS = 50
DEFAULT_MAX_RETRIES = 1


class Sleep(Protocol):
    """Blocks the calling thread; swapped out in unit tests"""

    def sleep_ms(self, millis: int) -> None:
        ...


class DefaultSleep:
    """Sleep implementation that actually sleeps"""

    def sleep_ms(self, millis: int) -> None:
        time.sleep(millis / 1000.0)


@dataclass(frozen=True)
class AuthorizationData:
    """One item of a GetAuthorizationToken response"""

    proxy_endpoint: Optional[str]
    authorization_token: Optional[str]

    @classmethod
    def from_response(cls, item: Dict[str, Any]) -> "AuthorizationData":
        return cls(
            proxy_endpoint=item.get("proxyEndpoint"),
            authorization_token=item.get("authorizationToken"),
        )

    def __repr__(self) -> str:
        return f"AuthorizationData(proxy_endpoint={self.proxy_endpoint!r})"


class EcrTokenFetcher:
    """Gets a single authorization token from ECR, retrying server faults

    Args:
        client: boto3 ECR client
        sleep: Sleep used between retries
        retry_backoff_millis: Milliseconds to wait before each retry
        max_retries: Retries allowed after the initial request
    """

    def __init__(
        self,
        client: Any,
        sleep: Sleep,
        retry_backoff_millis: int = DEFAULT_RETRY_BACKOFF_MILLIS,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        self.client = client
        self.sleep = sleep
        self.retry_backoff_millis = retry_backoff_millis
        self.max_retries = max_retries

    def fetch(self, registry_id: Optional[str] = None) -> AuthorizationData:
        """Get the authorization data for a registry

        Args:
            registry_id: AWS account ID of the registry, or None for the default registry
                of the caller's account

        Returns:
            The single AuthorizationData item ECR returned

        Raises:
            TokenFetchError: If ECR kept failing with server errors
            IssuerClientError: If ECR rejected the request
            ResponseShapeError: If ECR didn't return exactly one item
        """
        request: Dict[str, Any] = {}
        if registry_id is not None:
            request["registryIds"] = [registry_id]

        response = self._get_token_with_retries(request, registry_id)

        auths = response.get("authorizationData")
        if auths is None or len(auths) != 1:
            raise ResponseShapeError(None if auths is None else len(auths), registry_id)

        return AuthorizationData.from_response(auths[0])

    def _get_token_with_retries(self, request: Dict[str, Any], registry_id: Optional[str]) -> Dict[str, Any]:
        retries = 0

        while True:
            try:
                response = self.client.get_authorization_token(**request)
            except (ClientError, BotoCoreError) as e:
                error_type = classify_issuer_error(e)

                if error_type not in RETRYABLE_ERROR_TYPES:
                    raise IssuerClientError(registry_id, e) from e

                if retries >= self.max_retries:
                    raise TokenFetchError(registry_id, retries + 1, e) from e

                logger.debug(
                    "Sleeping for %d ms before retry because of %s error fetching ECR token: %s",
                    self.retry_backoff_millis,
                    error_type.value,
                    e,
                )
                self.sleep.sleep_ms(self.retry_backoff_millis)
                retries += 1
                continue

            if retries > 0:
                logger.info(f"Got ECR authorization token on attempt {retries + 1}")
            return response
