"""Mapping from publish errors to HTTP responses."""

from fastapi import HTTPException, status

from chasm.api.schemas import ErrorDetail
from chasm.domain.errors import (
    LocalWriteFailedError,
    MalformedFieldError,
    MissingFieldError,
    PublishError,
    RemoteCommitFailedError,
    RemoteResponseMalformedError,
)

STATUS_BY_ERROR: dict[type[PublishError], int] = {
    MissingFieldError: status.HTTP_400_BAD_REQUEST,
    MalformedFieldError: status.HTTP_400_BAD_REQUEST,
    RemoteCommitFailedError: status.HTTP_502_BAD_GATEWAY,
    RemoteResponseMalformedError: status.HTTP_502_BAD_GATEWAY,
    LocalWriteFailedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_exception(error: PublishError) -> HTTPException:
    status_code = STATUS_BY_ERROR.get(type(error), status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = ErrorDetail(code=error.code, message=error.message, field=error.field)
    return HTTPException(status_code=status_code, detail=detail.model_dump())
