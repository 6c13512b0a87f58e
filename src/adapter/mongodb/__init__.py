from bson import ObjectId

from domain.model.identifiers import require_valid_id

USERS_COLLECTION_NAME = 'users'
DONATIONS_COLLECTION_NAME = 'donations'
OPPORTUNITIES_COLLECTION_NAME = 'opportunities'
SIGNUPS_COLLECTION_NAME = 'userOpportunities'


def to_object_id(value: str, field: str = '_id') -> ObjectId:
    """Convert a hex id to ObjectId, raising InvalidIdError naming ``field``."""
    return ObjectId(require_valid_id(value, field))
