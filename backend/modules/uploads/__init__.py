"""
Uploads module.

Validates and stores multipart files (avatars, portfolio images, license
documents, project files) by field name.
"""

from .models import UploadedFile, FieldPolicy, FIELD_POLICIES, policy_for
from .exceptions import (
    UploadError,
    FileTooLargeError,
    TooManyFilesError,
    UnsupportedFileTypeError,
)

__all__ = [
    "UploadedFile",
    "FieldPolicy",
    "FIELD_POLICIES",
    "policy_for",
    "UploadError",
    "FileTooLargeError",
    "TooManyFilesError",
    "UnsupportedFileTypeError",
]
