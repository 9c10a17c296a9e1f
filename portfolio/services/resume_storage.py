"""
Resume File Storage

Uploaded resumes live on local disk under ``<STORAGE_DIR>/resumes/`` and are
served back through ``GET /storage/resumes/{filename}``. Only the generated
file name ever reaches the filesystem; the client's name is kept in the
database for display.
"""
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.os

from portfolio.core.config import settings
from portfolio.core.exceptions import NotFoundError, ValidationError
from portfolio.core.logging_config import logger

PDF_CONTENT_TYPE = "application/pdf"
PDF_MAGIC = b"%PDF-"
PUBLIC_PREFIX = "/storage/resumes/"


@dataclass
class StoredFile:
    filename: str
    file_url: str
    size: int


class ResumeStorage:
    """Writes, resolves and removes resume PDFs"""

    def __init__(self, base_path: Optional[Path] = None, max_size: Optional[int] = None):
        self._base_path = Path(base_path) if base_path else None
        self._max_size = max_size

    @property
    def base_path(self) -> Path:
        return self._base_path or settings.RESUMES_DIR

    @property
    def max_size(self) -> int:
        return self._max_size or settings.RESUME_MAX_SIZE_BYTES

    def validate(self, content: bytes, filename: Optional[str], content_type: Optional[str]) -> None:
        """
        Accept only non-empty PDFs within the size limit.

        Raises:
            ValidationError: wrong type, empty or oversized file
        """
        if not content:
            raise ValidationError("Resume file is empty", field="file")
        if len(content) > self.max_size:
            limit_mb = self.max_size // (1024 * 1024)
            raise ValidationError(f"Resume must be {limit_mb}MB or smaller", field="file")

        looks_like_pdf = (
            content_type == PDF_CONTENT_TYPE
            or (filename or "").lower().endswith(".pdf")
        )
        if not looks_like_pdf or not content.startswith(PDF_MAGIC):
            raise ValidationError("Only PDF files are allowed", field="file")

    def resolve(self, filename: str) -> Path:
        """
        Path of a stored file, refusing anything outside the storage directory.

        Raises:
            NotFoundError: unknown file or a name that escapes the directory
        """
        base = self.base_path.resolve()
        candidate = (base / filename).resolve()
        if candidate.parent != base or not candidate.is_file():
            raise NotFoundError("File", filename, code="FILE_NOT_FOUND")
        return candidate

    async def save(self, content: bytes, filename: Optional[str], content_type: Optional[str]) -> StoredFile:
        self.validate(content, filename, content_type)

        await aiofiles.os.makedirs(self.base_path, exist_ok=True)
        stored_name = f"resume-{uuid.uuid4().hex}.pdf"
        target = self.base_path / stored_name

        async with aiofiles.open(target, "wb") as f:
            await f.write(content)

        logger.info(f"Stored resume {stored_name} ({len(content)} bytes)")
        return StoredFile(
            filename=stored_name,
            file_url=PUBLIC_PREFIX + stored_name,
            size=len(content),
        )

    async def delete(self, file_url: str) -> bool:
        """Remove the file behind a stored ``file_url``; False when it is already gone"""
        if not file_url.startswith(PUBLIC_PREFIX):
            return False
        try:
            path = self.resolve(file_url[len(PUBLIC_PREFIX):])
        except NotFoundError:
            logger.warning(f"Resume file missing on delete: {file_url}")
            return False
        await aiofiles.os.remove(path)
        return True


resume_storage = ResumeStorage()
