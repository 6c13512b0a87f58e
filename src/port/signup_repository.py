"""Port for opportunity signup data access."""

from typing import Protocol

from domain.model.signup import Signup


class SignupRepository(Protocol):
    """Protocol for user/opportunity signups.

    Uniqueness of (user_id, opportunity_id) is enforced by the store itself;
    create() raises DuplicateError when it is violated.
    """

    def create(self, signup: Signup) -> Signup:
        """Insert a signup. Raises DuplicateError for an existing pair."""
        ...

    def find_existing(self, user_id: str, opportunity_id: str) -> Signup | None:
        """Find the signup for a (user, opportunity) pair."""
        ...

    def find_by_user(self, user_id: str) -> list[Signup]:
        """All signups of one user, newest first."""
        ...
