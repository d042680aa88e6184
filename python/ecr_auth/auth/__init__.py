"""
Registry auth suppliers.

This module provides the suppliers that hand registry credentials to container
tooling:
- RegistryAuthSupplier (the interface)
- EcrRegistryAuthSupplier (AWS ECR, dynamically issued tokens)
"""

from ecr_auth.auth.base import RegistryAuthSupplier
from ecr_auth.auth.ecr import Builder, EcrRegistryAuthSupplier

__all__ = [
    "Builder",
    "EcrRegistryAuthSupplier",
    "RegistryAuthSupplier",
]
