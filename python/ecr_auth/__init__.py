"""ECR registry credential supplier for container tooling."""

from ecr_auth.auth import EcrRegistryAuthSupplier, RegistryAuthSupplier
from ecr_auth.error_utils import (
    CredentialDecodeError,
    EndpointParseError,
    InvalidImageReferenceError,
    IssuerClientError,
    MalformedCredentialError,
    MalformedRegistryHostError,
    RegistryAuthError,
    ResponseShapeError,
    TokenFetchError,
)
from ecr_auth.registry_auth import RegistryAuth, RegistryConfigs

__version__ = "0.1.0"

__all__ = [
    "CredentialDecodeError",
    "EcrRegistryAuthSupplier",
    "EndpointParseError",
    "InvalidImageReferenceError",
    "IssuerClientError",
    "MalformedCredentialError",
    "MalformedRegistryHostError",
    "RegistryAuth",
    "RegistryAuthError",
    "RegistryAuthSupplier",
    "RegistryConfigs",
    "ResponseShapeError",
    "TokenFetchError",
]
