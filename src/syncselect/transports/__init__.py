"""Directory listing transports that feed a selective sync session."""

from .base_transport import BaseListingTransport
from .local_transport import LocalDirectoryTransport
from .static_transport import StaticListingTransport

__all__ = [
    "BaseListingTransport",
    "LocalDirectoryTransport",
    "StaticListingTransport",
]
