"""Interface for objects that supply registry auth to container tooling."""

from abc import ABC, abstractmethod
from typing import Optional

from ecr_auth.registry_auth import RegistryAuth, RegistryConfigs


class RegistryAuthSupplier(ABC):
    """Supplies registry auth for pulling images, swarm services and builds"""

    @abstractmethod
    def auth_for(self, image_name: str) -> Optional[RegistryAuth]:
        """Return auth for pulling the image, or None if this supplier does not apply."""

    @abstractmethod
    def auth_for_swarm(self) -> Optional[RegistryAuth]:
        """Return auth used when configuring a swarm, or None if unavailable."""

    @abstractmethod
    def auth_for_build(self) -> RegistryConfigs:
        """Return auth for every registry an image build may pull from."""
