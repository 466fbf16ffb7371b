"""
Document Storage.

Validates uploaded files and stores them in the local upload directory.
"""

import logging
import os
import secrets
import time
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile, status
from starlette.concurrency import run_in_threadpool

from fleetops.app.core.config import settings
from fleetops.app.core.exceptions import UploadRejectedError

logger = logging.getLogger("fleetops.documents")

CHUNK_SIZE = 1024 * 1024

# Extension -> content type served back on view
CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

ALLOWED_MIME_TYPES = set(CONTENT_TYPES.values()) | {"image/jpg", "image/pjpeg"}

REJECTED_TYPE_MESSAGE = "Only images, PDFs, and documents are allowed"


class StoredFile:
    """A file written to disk during an upload."""

    def __init__(self, original_name: str, path: Path, size: int, content_type: str):
        self.original_name = original_name
        self.path = path
        self.size = size
        self.content_type = content_type


class DocumentStorage:
    """
    Disk-backed document store.

    Usage:
        storage = DocumentStorage()
        stored = await storage.save_all(files)
        ...
        storage.delete(document.file_path)
    """

    def __init__(
        self,
        upload_dir: Optional[str] = None,
        max_files: Optional[int] = None,
        max_file_size: Optional[int] = None
    ):
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.max_files = max_files or settings.max_upload_files
        self.max_file_size = max_file_size or settings.max_upload_bytes

    @staticmethod
    def extension_of(filename: str) -> str:
        return os.path.splitext(filename or "")[1].lower()

    def is_allowed(self, filename: str, content_type: Optional[str]) -> bool:
        """Both the extension and the declared MIME type must be allow-listed."""
        mime = (content_type or "").split(";")[0].strip().lower()
        return self.extension_of(filename) in CONTENT_TYPES and mime in ALLOWED_MIME_TYPES

    def validate_batch(self, files: List[UploadFile]) -> None:
        """
        Check count and types before anything touches the disk.

        Raises:
            UploadRejectedError: 400 on empty, too many or disallowed files
        """
        if not files:
            raise UploadRejectedError("No files uploaded")

        if len(files) > self.max_files:
            raise UploadRejectedError(
                f"Too many files. Maximum {self.max_files} files per upload",
                details={"max_files": self.max_files, "received": len(files)}
            )

        for upload in files:
            if not self.is_allowed(upload.filename, upload.content_type):
                raise UploadRejectedError(
                    REJECTED_TYPE_MESSAGE,
                    details={"file_name": upload.filename, "content_type": upload.content_type}
                )

    def _unique_path(self, filename: str) -> Path:
        suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return self.upload_dir / f"files-{suffix}{self.extension_of(filename)}"

    async def save(self, upload: UploadFile) -> StoredFile:
        """
        Stream one upload to disk, enforcing the size limit.

        Raises:
            UploadRejectedError: 413 if the file exceeds the size limit
        """
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self._unique_path(upload.filename)
        size = 0

        handle = await run_in_threadpool(open, path, "wb")
        try:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_file_size:
                    raise UploadRejectedError(
                        f"File too large. Maximum size: {self.max_file_size // (1024 * 1024)}MB",
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        details={"file_name": upload.filename, "max_bytes": self.max_file_size}
                    )
                await run_in_threadpool(handle.write, chunk)
        except Exception:
            await run_in_threadpool(handle.close)
            self.delete(str(path))
            raise
        await run_in_threadpool(handle.close)

        return StoredFile(
            original_name=upload.filename,
            path=path,
            size=size,
            content_type=CONTENT_TYPES[self.extension_of(upload.filename)],
        )

    async def save_all(self, files: List[UploadFile]) -> List[StoredFile]:
        """
        Validate then store a batch; a failure removes files already written.
        """
        self.validate_batch(files)

        stored: List[StoredFile] = []
        try:
            for upload in files:
                stored.append(await self.save(upload))
        except Exception:
            for item in stored:
                self.delete(str(item.path))
            raise

        logger.info("Stored %s uploaded file(s) in %s", len(stored), self.upload_dir)
        return stored

    def delete(self, file_path: str) -> bool:
        """Remove a stored file. Returns False when it was already gone."""
        try:
            os.remove(file_path)
            return True
        except FileNotFoundError:
            logger.warning("File %s not found on disk", file_path)
            return False

    @staticmethod
    def exists(file_path: str) -> bool:
        return os.path.isfile(file_path)

    @staticmethod
    def content_type_for(filename: str) -> str:
        return CONTENT_TYPES.get(DocumentStorage.extension_of(filename), "application/octet-stream")


def get_document_storage() -> DocumentStorage:
    """FastAPI dependency returning the configured store."""
    return DocumentStorage()
