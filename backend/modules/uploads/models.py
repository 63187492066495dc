"""
Upload module data models.
"""

from dataclasses import dataclass
from typing import Optional

from shared.models import APIModel


class UploadedFile(APIModel):
    """Metadata for a file accepted and written by the upload gate."""

    original_name: str
    filename: str
    path: str
    size: int
    mimetype: str
    url: str


@dataclass(frozen=True)
class FieldPolicy:
    """
    What a multipart field accepts and where its files go.

    `allowed_types` of None means any MIME type is accepted; `image_only`
    accepts any `image/*` type.
    """

    directory: str
    allowed_types: Optional[frozenset[str]] = None
    image_only: bool = False
    rejection_message: str = "Invalid file type"

    def accepts(self, mimetype: Optional[str]) -> bool:
        mimetype = (mimetype or "").lower()
        if self.image_only:
            return mimetype.startswith("image/")
        if self.allowed_types is None:
            return True
        return mimetype in self.allowed_types


DOCUMENT_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "image/jpeg",
    "image/png",
    "image/gif",
})

FIELD_POLICIES: dict[str, FieldPolicy] = {
    "avatar": FieldPolicy(
        directory="avatars",
        image_only=True,
        rejection_message="Avatar must be an image file",
    ),
    "portfolio": FieldPolicy(
        directory="portfolio",
        image_only=True,
        rejection_message="Portfolio files must be images",
    ),
    "documents": FieldPolicy(
        directory="documents",
        allowed_types=DOCUMENT_TYPES,
        rejection_message="Invalid document format",
    ),
    "project": FieldPolicy(directory="projects"),
}

GENERAL_POLICY = FieldPolicy(directory="general")


def policy_for(field: str) -> FieldPolicy:
    """Policy for a field name; unknown fields are unrestricted."""
    return FIELD_POLICIES.get(field, GENERAL_POLICY)
