"""MongoDB index management.

Each MongoXxxRepository declares its indexes through ``create_index_safe``.
Collections may already hold indexes from an older deployment (Mongoose
builds ``email_1`` and friends automatically), so a conflicting index is
replaced instead of failing startup.
"""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)

# Index options whose mismatch makes MongoDB refuse create_index
_COMPARED_OPTIONS = ('unique', 'sparse')


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing a conflicting one if necessary.

    Conflicts handled:
    - same name, different keys
    - same keys, different name
    - same keys, different ``unique``/``sparse`` (e.g. a legacy non-unique
      email index that must become unique)
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise
        return _replace_conflicting(collection, keys, name, **kwargs)


def _options_differ(idx_info: dict, wanted: dict) -> bool:
    return any(bool(idx_info.get(opt)) != bool(wanted.get(opt)) for opt in _COMPARED_OPTIONS)


def _replace_conflicting(collection, keys: list, name: str, **kwargs) -> bool:
    keys_dict = dict(keys)

    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue

        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == keys_dict
        if not (same_name or same_keys):
            continue
        if same_name and same_keys and not _options_differ(idx_info, kwargs):
            continue

        logger.warning("Dropping conflicting index", extra={
            "collection": collection.name,
            "index": idx_name,
            "replacement": name,
        })
        collection.drop_index(idx_name)
        collection.create_index(keys, name=name, **kwargs)
        logger.info("Recreated index", extra={"collection": collection.name, "index": name})
        return True

    logger.error("Failed to resolve index conflict", extra={"collection": collection.name, "index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for all collections. Called at app startup."""
    from adapter.mongodb.donation_repository import MongoDonationRepository
    from adapter.mongodb.opportunity_repository import MongoOpportunityRepository
    from adapter.mongodb.signup_repository import MongoSignupRepository
    from adapter.mongodb.user_repository import MongoUserRepository

    results = [
        MongoUserRepository(db).ensure_indexes(),
        MongoDonationRepository(db).ensure_indexes(),
        MongoOpportunityRepository(db).ensure_indexes(),
        MongoSignupRepository(db).ensure_indexes(),
    ]
    return all(results)
