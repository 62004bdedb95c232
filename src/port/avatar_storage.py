from typing import Protocol

from domain.model.avatar import AvatarUpload, StoredFile


class AvatarStorage(Protocol):
    """Protocol for persisting uploaded avatars per entity."""
    def check(self, upload: AvatarUpload) -> None:
        """Raise ValidationError if the upload can never be stored."""
        ...

    def store(self, entity_id: str, upload: AvatarUpload) -> StoredFile: ...

    def store_many(self, entity_id: str, uploads: list[AvatarUpload]) -> list[StoredFile]: ...

    def remove_file(self, relative_path: str) -> None: ...

    def remove_directory(self, entity_id: str) -> None: ...
