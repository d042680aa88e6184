"""
Registry auth supplier for Amazon Elastic Container Registry (ECR).

ECR credentials are short-lived tokens issued by the GetAuthorizationToken API,
so they are fetched on every call rather than read from configuration.
"""

import logging
from typing import Any, Optional

from ecr_auth.auth.base import RegistryAuthSupplier
from ecr_auth.credentials import Base64Decoder, DefaultBase64Decoder, decode_credential
from ecr_auth.error_utils import InvalidImageReferenceError
from ecr_auth.image_ref import ImageRef
from ecr_auth.registry_auth import RegistryAuth, RegistryConfigs
from ecr_auth.registry_host import is_ecr_registry, parse_account_id, registry_name_from_endpoint
from ecr_auth.token_fetcher import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_BACKOFF_MILLIS,
    DefaultSleep,
    EcrTokenFetcher,
    Sleep,
)

logger = logging.getLogger(__name__)


class EcrRegistryAuthSupplier(RegistryAuthSupplier):
    """Authenticates with ECR using a provided boto3 ECR client.

    Instances are immutable; create them with :meth:`builder`.
    """

    def __init__(self, builder: "Builder"):
        self._client = builder.client
        self._decoder = builder.decoder
        self._sleep = builder.sleep
        self._retry_backoff_millis = builder.retry_backoff_millis
        self._max_retries = builder.max_retries
        self._fetcher = EcrTokenFetcher(
            self._client,
            self._sleep,
            retry_backoff_millis=self._retry_backoff_millis,
            max_retries=self._max_retries,
        )

    @staticmethod
    def builder() -> "Builder":
        """Return a new builder for constructing ECR auth suppliers"""
        return Builder()

    @property
    def client(self) -> Any:
        return self._client

    @property
    def decoder(self) -> Base64Decoder:
        return self._decoder

    @property
    def sleep(self) -> Sleep:
        return self._sleep

    @property
    def retry_backoff_millis(self) -> int:
        return self._retry_backoff_millis

    @property
    def max_retries(self) -> int:
        return self._max_retries

    def _auth_for_registry_id(self, registry_id: Optional[str]) -> RegistryAuth:
        data = self._fetcher.fetch(registry_id)
        credential = decode_credential(data.authorization_token, self._decoder, endpoint=data.proxy_endpoint)
        return RegistryAuth(
            username=credential.username,
            password=credential.password,
            server_address=data.proxy_endpoint,
        )

    def auth_for(self, image_name: str) -> Optional[RegistryAuth]:
        """Get auth for pulling an image.

        Returns:
            RegistryAuth for ECR images, None for images from any other registry

        Raises:
            InvalidImageReferenceError: If the image name is empty
            RegistryAuthError: If the image is an ECR image and auth could not be fetched
        """
        try:
            image = ImageRef.parse(image_name)
        except ValueError as e:
            raise InvalidImageReferenceError(image_name, e) from e
        if not is_ecr_registry(image.registry_name):
            return None

        registry_id = parse_account_id(image.registry_name)
        return self._auth_for_registry_id(registry_id)

    def auth_for_swarm(self) -> Optional[RegistryAuth]:
        """Get auth for the caller's default ECR registry, or None on any failure."""
        try:
            return self._auth_for_registry_id(None)
        except Exception:
            logger.warning(
                "Unable to get authentication data for AWS ECR registry, "
                "configuration for Swarm will not contain registry auth for ECR",
                exc_info=True,
            )
            return None

    def auth_for_build(self) -> RegistryConfigs:
        """Get registry configs for image builds, empty on any failure."""
        try:
            auth = self._auth_for_registry_id(None)
        except Exception:
            logger.warning(
                "Unable to get authentication data for AWS ECR registry, "
                "configuration for building images will not contain RegistryAuth for ECR",
                exc_info=True,
            )
            return RegistryConfigs.empty()

        try:
            registry_name = registry_name_from_endpoint(auth.server_address)
        except Exception:
            logger.warning(
                "Unable to parse server URL for AWS ECR registry, "
                "configuration for building images will not contain RegistryAuth for ECR",
                exc_info=True,
            )
            return RegistryConfigs.empty()

        return RegistryConfigs.create({registry_name: auth})


class Builder:
    """Builder for creating a new immutable EcrRegistryAuthSupplier.

    All values except the ECR client are optional and will use reasonable
    defaults if not supplied.
    """

    def __init__(self):
        self.client: Any = None
        self.decoder: Base64Decoder = DefaultBase64Decoder()
        self.sleep: Sleep = DefaultSleep()
        self.retry_backoff_millis: int = DEFAULT_RETRY_BACKOFF_MILLIS
        self.max_retries: int = DEFAULT_MAX_RETRIES

    def with_client(self, client: Any) -> "Builder":
        """The boto3 ECR client to use"""
        self.client = client
        return self

    def with_decoder(self, decoder: Base64Decoder) -> "Builder":
        self.decoder = decoder
        return self

    def with_sleep(self, sleep: Sleep) -> "Builder":
        """The Sleep implementation to use (only replaced in unit tests)"""
        self.sleep = sleep
        return self

    def with_retry_backoff_millis(self, retry_backoff_millis: int) -> "Builder":
        """Milliseconds to wait between retries after server errors"""
        self.retry_backoff_millis = retry_backoff_millis
        return self

    def with_max_retries(self, max_retries: int) -> "Builder":
        """Max number of retries attempted after the initial request (default 1)"""
        self.max_retries = max_retries
        return self

    def build(self) -> EcrRegistryAuthSupplier:
        """Return a new immutable EcrRegistryAuthSupplier using the configured values

        Raises:
            ValueError: If no client was set or a retry setting is negative
        """
        if self.client is None:
            raise ValueError("An ECR client is required to build an EcrRegistryAuthSupplier")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be a non-negative integer, got: {self.max_retries}")
        if self.retry_backoff_millis < 0:
            raise ValueError(f"retry_backoff_millis must be non-negative, got: {self.retry_backoff_millis}")
        return EcrRegistryAuthSupplier(self)
