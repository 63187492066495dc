"""
Upload module exceptions.

All of them surface as 400 responses.
"""

from typing import Optional

from shared.exceptions import ValidationError


class UploadError(ValidationError):
    """Base exception for rejected uploads."""

    pass


class FileTooLargeError(UploadError):
    """Raised when a single file exceeds the size limit."""

    def __init__(self, filename: str, max_size: int):
        super().__init__(
            f"File {filename} is too large. Maximum size is {max_size // (1024 * 1024)}MB.",
            code="FILE_TOO_LARGE",
            details={"filename": filename, "max_size": max_size},
        )


class TooManyFilesError(UploadError):
    """Raised when a request carries more files than allowed."""

    def __init__(self, max_files: int, received: int):
        super().__init__(
            f"Too many files. Maximum is {max_files} files.",
            code="TOO_MANY_FILES",
            details={"max_files": max_files, "received": received},
        )


class UnsupportedFileTypeError(UploadError):
    """Raised when a file's MIME type isn't allowed for its field."""

    def __init__(self, message: str, filename: str, mimetype: Optional[str]):
        super().__init__(
            message,
            code="UNSUPPORTED_FILE_TYPE",
            details={"filename": filename, "mimetype": mimetype},
        )
