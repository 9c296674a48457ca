"""Package index access."""

from pyangler.registry.base import PublishOptions, Registry
from pyangler.registry.pypi import PyPIRegistry

__all__ = ["PublishOptions", "PyPIRegistry", "Registry"]
