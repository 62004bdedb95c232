from dataclasses import dataclass
from typing import BinaryIO


@dataclass(frozen=True)
class AvatarUpload:
    """An uploaded image, independent of the web framework that received it."""
    filename: str
    stream: BinaryIO
    content_type: str | None = None
    field_name: str = 'avatar'


@dataclass(frozen=True)
class StoredFile:
    """Metadata of a file written to avatar storage."""
    field_name: str
    original_name: str
    file_name: str
    mime_type: str | None
    destination: str
    relative_path: str
    size: int
