"""Decoding of ECR authorization tokens into username/password pairs."""

import base64
import binascii
from dataclasses import dataclass
from typing import Optional, Protocol

from ecr_auth.error_utils import CredentialDecodeError, MalformedCredentialError


@dataclass(frozen=True)
class Credential:
    """Decoded registry credential"""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, password='***')"


class Base64Decoder(Protocol):
    """Decodes base64 text into a plain-text string, or None on failure"""

    def decode(self, encoded: Optional[str]) -> Optional[str]:
        ...


class DefaultBase64Decoder:
    """Base64 decoder backed by the standard library"""

    def decode(self, encoded: Optional[str]) -> Optional[str]:
        if encoded is None:
            return None
        try:
            raw = base64.b64decode(encoded, validate=True)
            return raw.decode("utf-8")
        except (binascii.Error, ValueError):
            return None


def decode_credential(encoded: Optional[str], decoder: Base64Decoder,
                      endpoint: Optional[str] = None) -> Credential:
    """Decode an ECR authorization token.

    The token is a base64 encoded string of the format "user:password". Only the
    first ':' separates the two; any further ':' belong to the password.

    Args:
        encoded: The base64 authorization token
        decoder: Decoder to turn the token into text
        endpoint: Proxy endpoint the token belongs to (used in error messages)

    Raises:
        CredentialDecodeError: If the decoder could not decode the token
        MalformedCredentialError: If the decoded token is not user:password
    """
    decoded = decoder.decode(encoded)
    if decoded is None:
        raise CredentialDecodeError(endpoint)

    username, separator, password = decoded.partition(":")
    if not separator or not username or not password:
        raise MalformedCredentialError(endpoint)

    return Credential(username=username, password=password)
