"""Publish component port definitions - protocols for dependencies."""

from chasm.ports.filesystem import FileSystemPort
from chasm.ports.transport import CommitTransportPort

__all__ = ["CommitTransportPort", "FileSystemPort"]
