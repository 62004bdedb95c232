from typing import Protocol

from domain.model.listing import ListOptions
from domain.model.user import User
from port.record_repository import RecordRepository


class UserRepository(RecordRepository, Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, name: str, email: str, password_hash: str) -> User:
        """Create a new user and return it with store-assigned id and timestamps."""
        ...

    def get_by_id(self, user_id: str) -> User | None: ...

    def find_many(self, options: ListOptions) -> list[User]:
        """List users matching the options. Trashed users are not filtered out."""
        ...
