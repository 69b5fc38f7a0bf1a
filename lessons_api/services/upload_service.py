"""
Upload service that copies uploaded files to local disk.

Files are written as-is: no content checks, no size limits and no
resumable or chunked handling.
"""

import shutil
import structlog
from pathlib import Path, PureWindowsPath
from typing import BinaryIO, Optional

from lessons_api.exceptions import InvalidUploadError
from lessons_api.models.uploads import UploadResult

logger = structlog.get_logger(__name__)


def safe_filename(filename: Optional[str]) -> str:
    """
    Reduce a client-supplied file name to its final path component.

    Args:
        filename: Name sent by the client

    Returns:
        Base name usable inside the upload directory

    Raises:
        InvalidUploadError: If nothing usable remains
    """
    # PureWindowsPath splits on both "/" and "\\"
    name = PureWindowsPath(filename or "").name.strip()
    if not name or set(name) == {"."}:
        raise InvalidUploadError(f"Unusable file name: {filename!r}")
    return name


class UploadService:
    """Stores uploaded files in a single directory."""

    def __init__(self, upload_dir: str):
        """
        Initialize upload service.

        Args:
            upload_dir: Directory files are written into (created on demand)
        """
        self.upload_dir = Path(upload_dir)

    def save(
        self,
        source: BinaryIO,
        filename: Optional[str],
        content_type: Optional[str] = None
    ) -> UploadResult:
        """
        Copy an uploaded stream to ``upload_dir``.

        An existing file with the same name is overwritten.

        Args:
            source: Readable binary stream
            filename: Client file name
            content_type: Client-declared media type

        Returns:
            Where the file was stored and how many bytes were written
        """
        name = safe_filename(filename)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        destination = self.upload_dir / name

        with destination.open("wb") as buffer:
            shutil.copyfileobj(source, buffer)
            size = buffer.tell()

        logger.info(
            "upload_stored",
            filename=name,
            content_type=content_type,
            size=size,
            path=str(destination)
        )

        return UploadResult(
            filename=name,
            content_type=content_type,
            size=size,
            path=str(destination)
        )
