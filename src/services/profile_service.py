"""Profile service: read, update and delete the caller's own account."""

from domain.model.errors import DuplicateError, InvalidIdError, NotFoundError
from domain.model.user import (
    PROFILE_FIELDS,
    REQUIRED_PROFILE_FIELDS,
    User,
    clean_profile_fields,
)
from port.user_repository import UserRepository

USER_NOT_FOUND = "User not found."
EMAIL_IN_USE = "This email is already in use by another account."


def get_profile(repo: UserRepository, user_id: str) -> User:
    try:
        user = repo.get_by_id(user_id)
    except InvalidIdError:
        user = None
    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return user


def build_profile_changes(fields: dict) -> dict:
    """Turn the fields a client explicitly sent into a sparse update.

    - fields that were not sent are skipped
    - empty/falsy values are skipped, never written
    - an explicit None clears an optional field; None for a required
      field is skipped
    """
    changes = {}
    for key, value in fields.items():
        if key not in PROFILE_FIELDS:
            continue
        if value is None:
            if key not in REQUIRED_PROFILE_FIELDS:
                changes[key] = None
        elif value:
            changes[key] = value
    return changes


def update_profile(repo: UserRepository, user_id: str, fields: dict) -> User:
    """Apply a partial profile update for ``user_id``.

    Args:
        fields: only the fields present in the request, keyed by attribute name

    Raises:
        ValidationError: updated values break schema rules
        InvalidIdError: ``user_id`` is malformed
        DuplicateError: new email belongs to another account
        NotFoundError: the user no longer exists
    """
    changes = clean_profile_fields(build_profile_changes(fields))

    email = changes.get('email')
    if email:
        existing = repo.get_by_email(email)
        if existing and existing.id != user_id:
            raise DuplicateError(EMAIL_IN_USE)

    try:
        user = repo.update(user_id, changes)
    except DuplicateError:
        raise DuplicateError(EMAIL_IN_USE)

    if not user:
        raise NotFoundError(USER_NOT_FOUND)
    return user


def delete_account(repo: UserRepository, user_id: str) -> None:
    """Delete the account. Donations and signups that reference it are left in place."""
    try:
        deleted = repo.delete(user_id)
    except InvalidIdError:
        deleted = False
    if not deleted:
        raise NotFoundError(USER_NOT_FOUND)
