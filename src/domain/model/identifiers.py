"""Record identifiers.

Records are keyed by MongoDB ObjectIds and exchanged as 24-char hex strings.
"""

from bson import ObjectId

from domain.model.errors import InvalidIdError


def new_id() -> str:
    return str(ObjectId())


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value)


def require_valid_id(value: object, field: str = '_id') -> str:
    """Return ``value`` unchanged or raise InvalidIdError naming ``field``."""
    if not is_valid_id(value):
        raise InvalidIdError(field, value)
    return value
