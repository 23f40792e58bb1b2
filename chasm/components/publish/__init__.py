"""Publish component - posts and images to remote or local destinations."""

from chasm.components.publish.component import (
    DOCUMENT_FILENAME,
    PublishComponent,
    require_postfolder,
    run,
    upload_location,
)
from chasm.components.publish.models import (
    PublishDocumentInput,
    PublishDocumentOutput,
    PublishImageInput,
    PublishImageOutput,
    PublishSettings,
)
from chasm.components.publish.ports import CommitTransportPort, FileSystemPort

__all__ = [
    # Entry point
    "run",
    # Component
    "PublishComponent",
    # Helpers
    "DOCUMENT_FILENAME",
    "require_postfolder",
    "upload_location",
    # Models
    "PublishDocumentInput",
    "PublishDocumentOutput",
    "PublishImageInput",
    "PublishImageOutput",
    "PublishSettings",
    # Ports
    "CommitTransportPort",
    "FileSystemPort",
]
