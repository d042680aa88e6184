"""Parse Docker image references into registry components."""

from dataclasses import dataclass
from typing import Optional

DEFAULT_REGISTRY = "docker.io"


@dataclass(frozen=True)
class ImageRef:
    """Parsed reference to a Docker image.

    Attributes:
        registry_name: Registry host with optional port (e.g. ``12345.dkr.ecr.us-east-1.amazonaws.com``),
            ``docker.io`` when the reference names no registry.
        image: Image name without tag or digest, including any registry prefix.
        tag: Tag, or None when the reference has no tag.
        digest: Digest (``sha256:...``) when the reference is pinned by digest.
    """

    registry_name: str
    image: str
    tag: Optional[str] = None
    digest: Optional[str] = None

    @classmethod
    def parse(cls, reference: str) -> "ImageRef":
        """Parse an image reference such as ``team/project:latest`` or
        ``registry.example.com:5000/team/project@sha256:...``.

        Raises:
            ValueError: If the reference is empty
        """
        if not reference or not reference.strip():
            raise ValueError("Image reference cannot be empty")

        image = reference
        tag = None
        digest = None

        at = image.rfind("@")
        if at >= 0:
            image, digest = image[:at], image[at + 1:]

        colon = image.rfind(":")
        if colon >= 0 and "/" not in image[colon + 1:]:
            # A ':' followed by a '/' is a registry port, not a tag
            image, tag = image[:colon], image[colon + 1:]

        return cls(registry_name=_registry_name(image), image=image, tag=tag, digest=digest)


def _registry_name(image: str) -> str:
    """The first path component is a registry when it looks like a host."""
    parts = image.split("/", 1)
    if len(parts) == 1:
        return DEFAULT_REGISTRY
    first = parts[0]
    if "." in first or ":" in first or first == "localhost":
        return first
    return DEFAULT_REGISTRY
