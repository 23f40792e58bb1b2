"""Destinations component - remote and local content stores."""

from .component import (
    Destination,
    LocalDestination,
    RemoteDestination,
    resolve_destination,
    validate_repository,
)
from .models import DEFAULT_API_URL, CommitContent
from .ports import CommitTransportPort, FileSystemPort, ResponseDecodeError, TransportError

__all__ = [
    # Destinations
    "Destination",
    "LocalDestination",
    "RemoteDestination",
    "resolve_destination",
    "validate_repository",
    # Models
    "CommitContent",
    "DEFAULT_API_URL",
    # Ports
    "CommitTransportPort",
    "FileSystemPort",
    "ResponseDecodeError",
    "TransportError",
]
