"""Component registry: models, loader and retrying client."""

from .client import MAX_RETRIES, RETRY_DELAY, RegistryClient, with_retry
from .loader import RegistryLoader, parse_registry
from .models import ComponentFile, ComponentRecord, FileType, Registry, UtilityEntry

__all__ = [
    "FileType",
    "ComponentFile",
    "ComponentRecord",
    "UtilityEntry",
    "Registry",
    "RegistryLoader",
    "parse_registry",
    "RegistryClient",
    "with_retry",
    "MAX_RETRIES",
    "RETRY_DELAY",
]
