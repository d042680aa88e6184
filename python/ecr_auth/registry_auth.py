"""
Registry authentication records handed to container tooling.

RegistryAuth is the auth for a single registry. RegistryConfigs maps registry
names (host or host:port) to RegistryAuth and is what image builds use, since a
build may pull from several registries.
"""

import base64
import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class RegistryAuth:
    """Username/password auth for one registry"""

    username: str
    password: str
    server_address: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Docker Engine API representation"""
        data = {"username": self.username, "password": self.password}
        if self.server_address:
            data["serveraddress"] = self.server_address
        return data

    def to_header(self) -> str:
        """Value for the X-Registry-Auth header"""
        return _encode_header(self.to_dict())

    def basic_auth(self) -> str:
        """base64 'user:password', as stored in docker config.json 'auth' fields"""
        return base64.b64encode(f"{self.username}:{self.password}".encode("utf-8")).decode("ascii")

    def __repr__(self) -> str:
        return f"RegistryAuth(username={self.username!r}, password='***', server_address={self.server_address!r})"


@dataclass(frozen=True)
class RegistryConfigs:
    """Immutable mapping of registry name to RegistryAuth"""

    configs: Mapping[str, RegistryAuth] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "configs", MappingProxyType(dict(self.configs)))

    @classmethod
    def empty(cls) -> "RegistryConfigs":
        return cls()

    @classmethod
    def create(cls, configs: Mapping[str, RegistryAuth]) -> "RegistryConfigs":
        return cls(configs=configs)

    def is_empty(self) -> bool:
        return not self.configs

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {name: auth.to_dict() for name, auth in self.configs.items()}

    def to_header(self) -> str:
        """Value for the X-Registry-Config header used by image builds"""
        return _encode_header(self.to_dict())

    def to_docker_config(self) -> Dict[str, Any]:
        """Body of a docker config.json ('auths' section only)"""
        return {"auths": {name: {"auth": auth.basic_auth()} for name, auth in self.configs.items()}}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegistryConfigs):
            return NotImplemented
        return dict(self.configs) == dict(other.configs)

    def __hash__(self) -> int:
        return hash(frozenset(self.configs.items()))


def _encode_header(data: Dict[str, Any]) -> str:
    return base64.urlsafe_b64encode(json.dumps(data).encode("utf-8")).decode("ascii")
