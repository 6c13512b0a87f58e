import re
from dataclasses import dataclass
from datetime import datetime

from domain.model.errors import ValidationError

GENDERS = ('Male', 'Female', 'Non-binary', 'Prefer not to say', '')
EMAIL_PATTERN = re.compile(r'^\w+([\.-]?\w+)*@\w+([\.-]?\w+)*(\.\w{2,3})+$')
MIN_PASSWORD_LENGTH = 6
MIN_PHONE_LENGTH = 10

# Fields a user may change on their own profile.
PROFILE_FIELDS = (
    'first_name', 'last_name', 'email', 'phone',
    'date_of_birth', 'gender', 'country', 'city',
)
REQUIRED_PROFILE_FIELDS = ('first_name', 'last_name', 'email')

_TRIMMED_FIELDS = ('first_name', 'last_name', 'email', 'phone', 'country', 'city')


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    first_name: str
    last_name: str
    email: str
    password_hash: str | None = None
    phone: str | None = ''
    date_of_birth: datetime | None = None
    gender: str | None = ''
    country: str | None = ''
    city: str | None = ''
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str | None:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name or self.last_name or None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_password(password: str) -> None:
    """Check the raw password before it is hashed."""
    if len(password) < MIN_PASSWORD_LENGTH:
        msg = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        raise ValidationError(f"User validation failed: password: {msg}", details={'password': msg})


def clean_profile_fields(fields: dict) -> dict:
    """Normalize and validate user profile fields.

    Only the keys present in ``fields`` are checked, so the same rules serve
    registration (all fields) and partial profile updates. Strings are
    trimmed and the email is lower-cased. A ``None`` value is passed through
    untouched for optional fields (it clears the stored value).

    Returns:
        A new dict with the cleaned values.

    Raises:
        ValidationError: one or more fields break the schema rules. ``details``
            holds one message per offending field.
    """
    cleaned = dict(fields)
    errors: dict[str, str] = {}

    for key in _TRIMMED_FIELDS:
        if isinstance(cleaned.get(key), str):
            cleaned[key] = cleaned[key].strip()

    for key, label in (('first_name', 'First name'), ('last_name', 'Last name'), ('email', 'Email')):
        if key in cleaned and not cleaned[key]:
            errors[key] = f"{label} is required"

    email = cleaned.get('email')
    if email:
        cleaned['email'] = email.lower()
        if not EMAIL_PATTERN.match(cleaned['email']):
            errors['email'] = "Please fill a valid email address"

    phone = cleaned.get('phone')
    if phone and len(phone) < MIN_PHONE_LENGTH:
        errors['phone'] = (
            f"{phone} is not a valid phone number, "
            f"it must be at least {MIN_PHONE_LENGTH} digits long!"
        )

    gender = cleaned.get('gender')
    if gender is not None and gender not in GENDERS:
        errors['gender'] = f"{gender} is not a valid gender"

    if errors:
        summary = ", ".join(f"{k}: {v}" for k, v in errors.items())
        raise ValidationError(f"User validation failed: {summary}", details=errors)

    return cleaned
