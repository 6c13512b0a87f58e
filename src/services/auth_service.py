"""Auth service: registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

from datetime import datetime

import bcrypt

from domain.model.errors import DuplicateError, InvalidCredentialsError, ValidationError
from domain.model.identifiers import new_id
from domain.model.user import User, clean_profile_fields, normalize_email, validate_password
from port.user_repository import UserRepository

BCRYPT_ROUNDS = 10

# bcrypt only reads the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72

MISSING_REGISTRATION_FIELDS = "Please enter all required fields: first name, last name, email, and password."
MISSING_LOGIN_FIELDS = "Please enter both email and password."
EMAIL_TAKEN = "An account with this email already exists."
INVALID_CREDENTIALS = "Invalid credentials."


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def _hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))


def register(
    repo: UserRepository,
    first_name: str | None,
    last_name: str | None,
    email: str | None,
    password: str | None,
    phone: str | None = None,
    date_of_birth: datetime | None = None,
    gender: str | None = None,
    country: str | None = None,
    city: str | None = None,
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """Register a new user.

    Optional fields default to an empty string (date of birth to None) when
    not supplied.

    Returns the created User domain object.

    Raises:
        ValidationError: required field missing, or schema rules violated
            (``details`` set in the latter case)
        DuplicateError: email already registered (case-insensitive)
    """
    if not (first_name and last_name and email and password):
        raise ValidationError(MISSING_REGISTRATION_FIELDS)

    if repo.get_by_email(normalize_email(email)):
        raise DuplicateError(EMAIL_TAKEN)

    fields = clean_profile_fields({
        'first_name': first_name,
        'last_name': last_name,
        'email': email,
        'phone': phone or '',
        'date_of_birth': date_of_birth or None,
        'gender': gender or '',
        'country': country or '',
        'city': city or '',
    })
    validate_password(password)

    user = User(id=new_id(), password_hash=_hash_password(password, rounds), **fields)
    try:
        return repo.create(user)
    except DuplicateError:
        # lost a race with a concurrent registration; the unique index caught it
        raise DuplicateError(EMAIL_TAKEN)


def authenticate(repo: UserRepository, email: str | None, password: str | None) -> User:
    """Authenticate a user by email and password.

    Returns the authenticated User domain object.
    Doesn't reveal whether the email exists.

    Raises:
        ValidationError: email or password missing
        InvalidCredentialsError: no such user or wrong password
    """
    if not email or not password:
        raise ValidationError(MISSING_LOGIN_FIELDS)

    user = repo.get_by_email(normalize_email(email))
    if not user or not user.password_hash or not _verify_password(password, user.password_hash):
        raise InvalidCredentialsError(INVALID_CREDENTIALS)
    return user
