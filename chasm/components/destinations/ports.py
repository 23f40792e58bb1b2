"""
Destinations component port definitions.
"""

from chasm.ports.filesystem import FileSystemPort
from chasm.ports.transport import CommitTransportPort, ResponseDecodeError, TransportError

__all__ = [
    "CommitTransportPort",
    "FileSystemPort",
    "ResponseDecodeError",
    "TransportError",
]
