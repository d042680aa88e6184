"""Helpers for recognising ECR registry hosts and naming ECR endpoints.

ECR registry hosts have the form ``<account-id>.dkr.ecr.<region>.amazonaws.com``.
See https://docs.aws.amazon.com/AmazonECR/latest/userguide/Registries.html
"""

from typing import Optional
from urllib.parse import urlsplit

from ecr_auth.error_utils import EndpointParseError, MalformedRegistryHostError

ECR_DOMAIN = ".amazonaws.com"
DEFAULT_HTTPS_PORT = 443


def is_ecr_registry(host: str) -> bool:
    """Return True if the registry host belongs to ECR."""
    return host.endswith(ECR_DOMAIN)


def parse_account_id(host: str) -> str:
    """Get the AWS account ID from an ECR registry host.

    The account ID is everything before the first ``.`` of the host. Only call
    this for hosts already known to be ECR hosts.

    Raises:
        MalformedRegistryHostError: If the host has no ``.`` in it
    """
    subdomain_index = host.find(".")
    if subdomain_index == -1:
        raise MalformedRegistryHostError(host)
    return host[:subdomain_index]


def registry_name_from_endpoint(endpoint: Optional[str]) -> str:
    """Get the host name and optional port of an ECR proxy endpoint.

    This is the key used for multi-registry auth configs. Port is omitted when the
    endpoint doesn't include one or when it is the HTTPS default (443).
    See https://docs.docker.com/engine/api/v1.37/#section/Authentication

    Args:
        endpoint: Proxy endpoint URL (e.g. 'https://12345.dkr.ecr.us-east-1.amazonaws.com/')

    Returns:
        'host' or 'host:port'

    Raises:
        EndpointParseError: If the endpoint is not a URL with a host and valid port
    """
    if not endpoint:
        raise EndpointParseError(endpoint)

    try:
        parsed = urlsplit(endpoint)
        host = parsed.hostname
        port = parsed.port
    except ValueError as e:
        raise EndpointParseError(endpoint, cause=e) from e

    if not host:
        raise EndpointParseError(endpoint)

    if port is None or port == DEFAULT_HTTPS_PORT:
        return host
    return f"{host}:{port}"
