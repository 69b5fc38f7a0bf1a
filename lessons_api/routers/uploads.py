"""
Upload router.

Accepts a single multipart file and copies it into the configured upload
directory.
"""

import structlog
from fastapi import APIRouter, Depends, File, UploadFile, status

from lessons_api.dependencies import get_upload_service
from lessons_api.metrics import lesson_metrics
from lessons_api.models.items import ErrorResponse
from lessons_api.models.uploads import UploadResult
from lessons_api.services.upload_service import UploadService

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/uploads",
    tags=["Uploads"],
    responses={400: {"model": ErrorResponse, "description": "Invalid upload"}}
)


@router.post(
    "",
    response_model=UploadResult,
    status_code=status.HTTP_201_CREATED,
    summary="Upload File",
    description="""
    Store an uploaded file.

    The stored name is the final component of the client file name; a
    file with the same name is overwritten.

    **Error Responses:**
    - 400: File name is empty or unusable
    - 422: No file part in the request
    """
)
def upload_file(
    file: UploadFile = File(..., description="File to store"),
    upload_service: UploadService = Depends(get_upload_service)
) -> UploadResult:
    # Sync handler: FastAPI runs it in the threadpool, so the blocking copy
    # does not stall the event loop.
    result = upload_service.save(file.file, file.filename, file.content_type)

    lesson_metrics.uploads.inc()
    lesson_metrics.upload_bytes.inc(result.size)

    return result
