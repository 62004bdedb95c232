"""Local filesystem implementation of AvatarStorage.

Layout: {root}/{collection}/{entity_id}/{uuid}{ext}. The path stored on the
record is relative to root, e.g. users/3f2c.../9a1b....jpg.
"""

import shutil
import uuid
from logging import getLogger
from pathlib import Path

from domain.model.avatar import AvatarUpload, StoredFile
from domain.model.errors import FieldError, ValidationError

logger = getLogger(__name__)

ALLOWED_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.gif'}
MAX_AVATAR_BYTES = 5 * 1024 * 1024
CHUNK_SIZE = 64 * 1024


def is_allowed_filename(filename: str | None) -> bool:
    """True if filename carries an allowed image extension (case-insensitive)."""
    if not filename:
        return False
    return Path(filename).suffix.lower() in ALLOWED_EXTENSIONS


class LocalAvatarStorage:
    def __init__(
        self,
        root: Path | str,
        collection: str = 'users',
        max_bytes: int = MAX_AVATAR_BYTES,
    ):
        self.root = Path(root)
        self.collection = collection
        self.max_bytes = max_bytes

    # ── helpers ──────────────────────────────────────────────

    def _entity_dir(self, entity_id: str) -> Path:
        # ids become directory names; refuse anything that could escape the root
        if not entity_id or Path(entity_id).name != entity_id or entity_id in ('.', '..'):
            raise ValidationError(
                "Invalid entity id for storage",
                [FieldError('id', 'must be a plain identifier')],
            )
        return self.root / self.collection / entity_id

    def _resolve_inside_root(self, relative_path: str) -> Path | None:
        root = self.root.resolve()
        target = (root / relative_path).resolve()
        if target == root or root not in target.parents:
            return None
        return target

    # ── write operations ─────────────────────────────────────

    def check(self, upload: AvatarUpload) -> None:
        if not is_allowed_filename(upload.filename):
            allowed = ', '.join(sorted(ext.lstrip('.') for ext in ALLOWED_EXTENSIONS))
            raise ValidationError(
                "This file type is not allowed",
                [FieldError(upload.field_name, f"file extension must be one of: {allowed}")],
            )

    def store(self, entity_id: str, upload: AvatarUpload) -> StoredFile:
        """Write one upload under the entity's directory.

        Raises:
            ValidationError: extension not allowed, or upload larger than max_bytes
        """
        self.check(upload)

        dest_dir = self._entity_dir(entity_id)
        dest_dir.mkdir(parents=True, exist_ok=True)

        file_name = uuid.uuid4().hex + Path(upload.filename).suffix
        file_path = dest_dir / file_name

        size = 0
        try:
            with open(file_path, 'wb') as out:
                while chunk := upload.stream.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise ValidationError(
                            "Uploaded file is too large",
                            [FieldError(upload.field_name, f"must not exceed {self.max_bytes} bytes")],
                        )
                    out.write(chunk)
        except BaseException:
            file_path.unlink(missing_ok=True)
            raise

        relative_path = f"{self.collection}/{entity_id}/{file_name}"
        logger.info("Avatar stored", extra={"entityId": entity_id, "path": relative_path, "size": size})

        return StoredFile(
            field_name=upload.field_name,
            original_name=upload.filename,
            file_name=file_name,
            mime_type=upload.content_type,
            destination=str(dest_dir),
            relative_path=relative_path,
            size=size,
        )

    def store_many(self, entity_id: str, uploads: list[AvatarUpload]) -> list[StoredFile]:
        for upload in uploads:
            self.check(upload)
        return [self.store(entity_id, upload) for upload in uploads]

    # ── delete operations ────────────────────────────────────

    def remove_file(self, relative_path: str) -> None:
        """Delete one stored file. Missing files and paths outside root are ignored."""
        target = self._resolve_inside_root(relative_path)
        if target is None:
            logger.warning("Refusing to remove path outside storage root", extra={"path": relative_path})
            return
        target.unlink(missing_ok=True)
        logger.debug("Avatar removed", extra={"path": relative_path})

    def remove_directory(self, entity_id: str) -> None:
        """Delete the entity's directory and everything in it."""
        dir_path = self._entity_dir(entity_id)
        if dir_path.exists():
            shutil.rmtree(dir_path)
            logger.info("Avatar directory removed", extra={"entityId": entity_id})
