"""Publish component - renders posts and stores posts and images at their destination."""

import logging

from chasm.components.destinations import Destination, resolve_destination
from chasm.components.multipart import demux
from chasm.components.render import render_document
from chasm.domain.entities import (
    GithubLocation,
    LocalLocation,
    RenderedDocument,
    UploadRequest,
)
from chasm.domain.errors import MissingFieldError, PublishError
from chasm.domain.sanitize import build_logical_path, sanitize_filename, sanitize_postfolder

from .models import (
    PublishDocumentInput,
    PublishDocumentOutput,
    PublishImageInput,
    PublishImageOutput,
    PublishSettings,
)
from .ports import CommitTransportPort, FileSystemPort

logger = logging.getLogger(__name__)

DOCUMENT_FILENAME = "index.md"

# Type alias for all supported inputs
PublishInput = PublishDocumentInput | PublishImageInput
PublishOutput = PublishDocumentOutput | PublishImageOutput


def require_postfolder(postfolder: str | None) -> str:
    """Sanitize a post folder, failing if nothing usable remains."""
    safe = sanitize_postfolder(postfolder or "")
    if not safe:
        raise MissingFieldError("postfolder")
    return safe


def upload_location(upload: UploadRequest) -> GithubLocation | LocalLocation:
    """
    Decide where an upload goes from the scalar fields it carried.

    Any remote field selects the remote destination, which then needs both.
    Otherwise a base path selects the local destination.
    """
    scalars = upload.scalars
    if scalars.repo or scalars.access_token:
        if not scalars.repo:
            raise MissingFieldError("repo")
        if not scalars.access_token:
            raise MissingFieldError("access_token")
        return GithubLocation(repo=scalars.repo, access_token=scalars.access_token)
    if scalars.base_path:
        return LocalLocation(path=scalars.base_path)
    raise MissingFieldError("repo")


class PublishComponent:
    """Component for publishing posts and images."""

    def __init__(
        self,
        transport: CommitTransportPort,
        filesystem: FileSystemPort,
        settings: PublishSettings | None = None,
    ) -> None:
        self._transport = transport
        self._filesystem = filesystem
        self._settings = settings or PublishSettings()

    def run(self, input_data: PublishInput) -> PublishOutput:
        """Main dispatcher - routes to appropriate handler based on input type."""
        if isinstance(input_data, PublishDocumentInput):
            return self.run_publish_document(input_data)
        elif isinstance(input_data, PublishImageInput):
            return self.run_publish_image(input_data)
        else:
            raise TypeError(f"Unknown input type: {type(input_data)}")

    def _destination(self, location: GithubLocation | LocalLocation) -> Destination:
        return resolve_destination(
            location,
            transport=self._transport,
            filesystem=self._filesystem,
            api_url=self._settings.api_url,
        )

    def run_publish_document(self, input_data: PublishDocumentInput) -> PublishDocumentOutput:
        """Render a post and store it as <content_root>/<postfolder>/index.md."""
        request = input_data.request

        try:
            postfolder = require_postfolder(request.postfolder)
            destination = self._destination(request.location)
            data = render_document(
                request.title,
                request.date,
                request.content,
                summary_marker=self._settings.summary_marker,
            )
            document = RenderedDocument(
                data=data,
                logical_path=build_logical_path(
                    self._settings.content_root, postfolder, DOCUMENT_FILENAME
                ),
            )
            result = destination.store(document, message=self._settings.document_commit_message)
        except PublishError as e:
            logger.warning("Publishing post to %r failed: %s", request.postfolder, e)
            return PublishDocumentOutput(request=request, result=None, error=e, success=False)

        logger.info("Published post %s (%d bytes)", document.logical_path, len(data))
        return PublishDocumentOutput(
            request=request,
            result=result,
            error=None,
            success=True,
            logical_path=document.logical_path,
        )

    def run_publish_image(self, input_data: PublishImageInput) -> PublishImageOutput:
        """Demultiplex an upload and store its file as <content_root>/<postfolder>/<filename>."""
        filename: str | None = None

        try:
            upload = demux(input_data.fields)

            if upload.payload is None:
                raise MissingFieldError("file")
            if not upload.filename:
                raise MissingFieldError("filename")
            if not upload.payload:
                raise MissingFieldError("file")

            postfolder = require_postfolder(upload.scalars.postfolder)
            destination = self._destination(upload_location(upload))

            filename = sanitize_filename(upload.filename)
            if not filename:
                raise MissingFieldError("filename")

            document = RenderedDocument(
                data=upload.payload,
                logical_path=build_logical_path(self._settings.content_root, postfolder, filename),
            )
            result = destination.store(document, message=self._settings.image_commit_message)
        except PublishError as e:
            logger.warning("Publishing image failed: %s", e)
            return PublishImageOutput(filename=filename, result=None, error=e, success=False)

        logger.info("Published image %s (%d bytes)", document.logical_path, len(document.data))
        return PublishImageOutput(
            filename=filename,
            result=result,
            error=None,
            success=True,
            logical_path=document.logical_path,
        )


def run(
    input_data: PublishInput,
    *,
    transport: CommitTransportPort,
    filesystem: FileSystemPort,
    settings: PublishSettings | None = None,
) -> PublishOutput:
    """Functional entry point for the publish component."""
    component = PublishComponent(transport=transport, filesystem=filesystem, settings=settings)
    return component.run(input_data)
