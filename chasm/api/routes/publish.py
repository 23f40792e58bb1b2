"""
Publish API routes.

Provides endpoints for publishing a post document and uploading an image.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from chasm.api.deps import get_publish_component
from chasm.api.errors import to_http_exception
from chasm.api.schemas import ErrorResponse, ImageUploadResponse
from chasm.components.multipart import iter_multipart_fields
from chasm.components.publish import PublishComponent, PublishDocumentInput, PublishImageInput
from chasm.domain.entities import CommitResponse, CommitResponseContent, PostRequest

router = APIRouter()

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


@router.post("/post_content", response_model=PostRequest, responses=ERROR_RESPONSES)
def post_content(
    request: PostRequest,
    component: PublishComponent = Depends(get_publish_component),
) -> PostRequest:
    """Render a post and publish it; echoes the request on success."""
    result = component.run_publish_document(PublishDocumentInput(request=request))

    if result.error is not None:
        raise to_http_exception(result.error)

    return result.request


@router.post("/upload_image", response_model=ImageUploadResponse, responses=ERROR_RESPONSES)
async def upload_image(
    request: Request,
    component: PublishComponent = Depends(get_publish_component),
) -> ImageUploadResponse:
    """Publish the image carried in a multipart upload."""
    body = [chunk async for chunk in request.stream()]
    fields = iter_multipart_fields(request.headers.get("content-type", ""), body)
    result = await run_in_threadpool(
        component.run_publish_image, PublishImageInput(fields=fields)
    )

    if result.error is not None:
        raise to_http_exception(result.error)

    commit_response = None
    if result.result is not None and result.result.public_url is not None:
        commit_response = CommitResponse(
            content=CommitResponseContent(download_url=result.result.public_url)
        )

    return ImageUploadResponse(commit_response=commit_response, filename=result.filename or "")
