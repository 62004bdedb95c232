"""User service — business logic for user records and their avatars.

Pure business logic with no HTTP dependencies.
Raises domain errors that the API layer maps to HTTP status codes.
"""

from logging import getLogger

import bcrypt

from domain.model.avatar import AvatarUpload
from domain.model.errors import NotFoundError
from domain.model.lifecycle import DeleteMode
from domain.model.listing import EntityKind, ListOptions
from domain.model.user import User
from port.avatar_storage import AvatarStorage
from port.user_repository import UserRepository
from services.lifecycle_service import apply_delete_mode
from services.uniqueness import ensure_unique

logger = getLogger(__name__)

BCRYPT_ROUNDS = 12
USER_NOT_FOUND = "This user does not exist"
EMAIL_TAKEN = "This email address was registered already"


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def list_users(
    repo: UserRepository,
    search: str | None = None,
    sort_by: str | None = None,
    limit: int | None = None,
) -> list[User]:
    options = ListOptions.create(EntityKind.USER, search=search, sort_by=sort_by, limit=limit)
    return repo.find_many(options)


def get_user(repo: UserRepository, user_id: str) -> User:
    user = repo.get_by_id(user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return user


def create_user(
    repo: UserRepository,
    storage: AvatarStorage,
    name: str,
    email: str,
    password: str,
    avatar: AvatarUpload,
) -> User:
    """Create a user and store their avatar.

    The record is created first (the avatar directory is keyed by its id),
    then the file is written, then the record is pointed at the file. If the
    file cannot be written the record is erased again.

    Raises:
        ValidationError: avatar type not allowed or too large
        ConflictError: email already registered
    """
    storage.check(avatar)
    ensure_unique(repo, 'email', email, message=EMAIL_TAKEN)

    user = repo.create(name=name, email=email, password_hash=hash_password(password))
    try:
        stored = storage.store(user.id, avatar)
    except Exception:
        repo.erase(user.id)
        storage.remove_directory(user.id)
        logger.warning("User creation rolled back", extra={"userId": user.id})
        raise

    updated = repo.update(user.id, {'avatar': stored.relative_path})
    if updated is None:
        raise NotFoundError(USER_NOT_FOUND)

    logger.info("User created", extra={"userId": user.id, "avatar": stored.relative_path})
    return updated


def update_user(
    repo: UserRepository,
    storage: AvatarStorage,
    user_id: str,
    name: str | None = None,
    email: str | None = None,
    password: str | None = None,
    avatar: AvatarUpload | None = None,
) -> User:
    """Apply a partial update; updated_at is refreshed even if nothing else changes.

    A new avatar is written before the record is updated; the previous file
    is deleted only after the record points at the new one.

    Raises:
        NotFoundError: user does not exist
        ConflictError: email belongs to another user
        ValidationError: avatar type not allowed or too large
    """
    user = get_user(repo, user_id)

    changes: dict = {}
    if name:
        changes['name'] = name
    if email:
        ensure_unique(repo, 'email', email, excluding_id=user_id, message=EMAIL_TAKEN)
        changes['email'] = email
    if password:
        changes['password_hash'] = hash_password(password)
    if avatar is not None:
        storage.check(avatar)
        changes['avatar'] = storage.store(user_id, avatar).relative_path

    updated = repo.update(user_id, changes)
    if updated is None:
        raise NotFoundError(USER_NOT_FOUND)

    if avatar is not None and user.avatar and user.avatar != updated.avatar:
        storage.remove_file(user.avatar)

    logger.info("User updated", extra={"userId": user_id, "fields": sorted(changes)})
    return updated


def delete_user(
    repo: UserRepository,
    storage: AvatarStorage,
    user_id: str,
    mode: str | DeleteMode,
) -> User | None:
    """trash / restore / erase a user. Erasing also removes the avatar directory."""
    return apply_delete_mode(
        repo,
        user_id,
        mode,
        on_erase=storage.remove_directory,
        not_found_message=USER_NOT_FOUND,
    )
