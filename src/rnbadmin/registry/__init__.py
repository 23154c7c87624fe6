"""RNB building registry access."""

from rnbadmin.registry.client import RegistryClient, RegistryLookupError
from rnbadmin.registry.models import RegistryBuilding

__all__ = ["RegistryBuilding", "RegistryClient", "RegistryLookupError"]
