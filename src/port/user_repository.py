"""Port for user (credential store) data access."""

from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations raise StorageError when the backing store fails and
    InvalidIdError for malformed identifiers.
    """

    def create(self, user: User) -> User:
        """Persist a new user. Raises DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by (normalized) email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_many(self, user_ids: list[str]) -> dict[str, User]:
        """Fetch several users at once, keyed by ID. Unknown IDs are omitted."""
        ...

    def update(self, user_id: str, changes: dict) -> User | None:
        """Apply a sparse update; a None value clears the field.

        Returns the updated User or None if it does not exist.
        Raises DuplicateError if the new email is taken.
        """
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Returns True if deleted, False if not found."""
        ...
