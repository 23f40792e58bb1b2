from pydantic import BaseModel

from chasm.domain.entities import CommitResponse


class ImageUploadResponse(BaseModel):
    commit_response: CommitResponse | None
    filename: str


class ErrorDetail(BaseModel):
    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    detail: ErrorDetail
