"""Upload validation for documents sent to the extraction source."""

import time
import uuid
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Dict, List, Optional

from legaldocs.schemas.extraction import FileCategory

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

SUPPORTED_FILE_TYPES: Dict[FileCategory, Dict[str, object]] = {
    FileCategory.PDF: {
        "mime_types": ["application/pdf"],
        "extensions": [".pdf"],
        "name": "PDF Document",
    },
    FileCategory.WORD: {
        "mime_types": [
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/msword",
        ],
        "extensions": [".docx", ".doc"],
        "name": "Word Document",
    },
    FileCategory.IMAGE: {
        "mime_types": ["image/png", "image/jpeg", "image/jpg", "image/webp", "image/tiff"],
        "extensions": [".png", ".jpg", ".jpeg", ".webp", ".tiff"],
        "name": "Image (OCR)",
    },
    FileCategory.TEXT: {
        "mime_types": ["text/plain", "text/rtf"],
        "extensions": [".txt", ".rtf"],
        "name": "Text File",
    },
}

ALL_MIME_TYPES: List[str] = [
    mime for spec in SUPPORTED_FILE_TYPES.values() for mime in spec["mime_types"]
]
ALL_EXTENSIONS: List[str] = [
    ext for spec in SUPPORTED_FILE_TYPES.values() for ext in spec["extensions"]
]


@dataclass(frozen=True)
class FileValidationResult:
    valid: bool
    error: Optional[str] = None


def validate_file(
    file_name: str,
    content_type: Optional[str],
    size: int,
    max_size: int = MAX_FILE_SIZE,
) -> FileValidationResult:
    """Validate a file before upload.

    Checks run in order: size, MIME type, extension. The first failure wins.

    Args:
        file_name: Original file name
        content_type: MIME type reported by the client
        size: File size in bytes
        max_size: Largest accepted size in bytes

    Returns:
        FileValidationResult: valid flag and the error message when invalid
    """
    if size > max_size:
        return FileValidationResult(
            valid=False,
            error=f"File size exceeds {max_size // (1024 * 1024)}MB limit",
        )

    if content_type not in ALL_MIME_TYPES:
        return FileValidationResult(
            valid=False,
            error=f"Unsupported file type: {content_type}. Supported: PDF, Word, Images, Text",
        )

    extension = PurePosixPath(file_name or "").suffix.lower()
    if extension not in ALL_EXTENSIONS:
        return FileValidationResult(
            valid=False,
            error=f"Unsupported file extension: {extension or '(none)'}",
        )

    return FileValidationResult(valid=True)


def get_file_category(mime_type: Optional[str]) -> Optional[FileCategory]:
    """Get the file category for a MIME type, None when unsupported."""
    for category, spec in SUPPORTED_FILE_TYPES.items():
        if mime_type in spec["mime_types"]:
            return category
    return None


def format_file_size(size: int) -> str:
    """Format a byte count for display (B, KB or MB)."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def generate_upload_id() -> str:
    """Generate a unique upload id."""
    return f"upload_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"
