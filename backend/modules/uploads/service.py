"""
Upload gate implementation.

Validates multipart files against per-field policies and writes accepted
files under the upload directory with collision-resistant names.
"""

import logging
import re
import secrets
import time
from pathlib import Path
from typing import Sequence

from fastapi import UploadFile

from shared.config import Settings

from .exceptions import FileTooLargeError, TooManyFilesError, UnsupportedFileTypeError
from .models import FieldPolicy, UploadedFile, policy_for

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class UploadGate:
    """
    Accepts or rejects uploaded files and stores the accepted ones.

    Limits apply per request: each file may be at most `max_file_size`
    bytes and a request may carry at most `max_files` files. Files already
    written for a request that ends up rejected are removed again.
    """

    def __init__(
        self,
        upload_dir: Path,
        base_url: str,
        max_file_size: int = 10 * 1024 * 1024,
        max_files: int = 10,
    ):
        self._upload_dir = Path(upload_dir)
        self._base_url = base_url.rstrip("/")
        self._max_file_size = max_file_size
        self._max_files = max_files

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadGate":
        return cls(
            upload_dir=Path(settings.upload_dir),
            base_url=settings.base_url,
            max_file_size=settings.max_upload_size,
            max_files=settings.max_upload_files,
        )

    async def store(
        self,
        field: str,
        files: Sequence[UploadFile],
    ) -> list[UploadedFile]:
        """
        Validate and write the files sent under one field.

        Args:
            field: Multipart field name (selects the policy and directory)
            files: Files received for that field

        Returns:
            Metadata for every stored file, in request order

        Raises:
            TooManyFilesError: More than `max_files` files
            UnsupportedFileTypeError: A file's type isn't allowed for the field
            FileTooLargeError: A file exceeds `max_file_size`
        """
        # Browsers send an empty part when no file was chosen
        files = [f for f in files if f.filename]
        if len(files) > self._max_files:
            raise TooManyFilesError(self._max_files, len(files))

        policy = policy_for(field)
        for upload in files:
            if not policy.accepts(upload.content_type):
                raise UnsupportedFileTypeError(
                    policy.rejection_message,
                    upload.filename,
                    upload.content_type,
                )

        stored: list[UploadedFile] = []
        try:
            for upload in files:
                stored.append(await self._write(field, policy, upload))
        except Exception:
            self.discard(stored)
            raise

        if stored:
            logger.info("Stored %d file(s) for field '%s'", len(stored), field)
        return stored

    def discard(self, files: Sequence[UploadedFile]) -> None:
        """Delete stored files, e.g. when the request they belong to failed."""
        for stored in files:
            path = Path(stored.path)
            if path.exists():
                path.unlink()
                logger.info("Deleted upload %s", path)

    def file_url(self, directory: str, filename: str) -> str:
        return f"{self._base_url}/uploads/{directory}/{filename}"

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _write(
        self,
        field: str,
        policy: FieldPolicy,
        upload: UploadFile,
    ) -> UploadedFile:
        target_dir = self._upload_dir / policy.directory
        target_dir.mkdir(parents=True, exist_ok=True)

        filename = generate_filename(field, upload.filename)
        path = target_dir / filename

        size = 0
        try:
            with path.open("wb") as out:
                while chunk := await upload.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self._max_file_size:
                        raise FileTooLargeError(upload.filename, self._max_file_size)
                    out.write(chunk)
        except Exception:
            path.unlink(missing_ok=True)
            raise

        return UploadedFile(
            original_name=upload.filename,
            filename=filename,
            path=str(path),
            size=size,
            mimetype=upload.content_type or "application/octet-stream",
            url=self.file_url(policy.directory, filename),
        )


def generate_filename(field: str, original_name: str) -> str:
    """Build `<field>-<epoch ms>-<random><extension>` for a stored file."""
    prefix = re.sub(r"[^A-Za-z0-9_-]", "", field) or "file"
    suffix = Path(original_name).suffix
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"
