"""Upload response schema."""

from typing import Optional

from pydantic import BaseModel, Field


class UploadResult(BaseModel):
    """Where an uploaded file was stored and how large it is."""
    filename: str = Field(..., description="Stored file name")
    content_type: Optional[str] = Field(None, description="Client-declared media type")
    size: int = Field(..., ge=0, description="Bytes written")
    path: str = Field(..., description="Path of the stored file")
