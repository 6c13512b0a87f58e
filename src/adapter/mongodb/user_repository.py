"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME, to_object_id
from domain.model.errors import DuplicateError, StorageError
from domain.model.identifiers import is_valid_id
from domain.model.user import User

logger = getLogger(__name__)

# domain attribute -> document field
_FIELD_MAP = {
    'first_name': 'firstName',
    'last_name': 'lastName',
    'email': 'email',
    'phone': 'phone',
    'date_of_birth': 'dateOfBirth',
    'gender': 'gender',
    'country': 'country',
    'city': 'city',
}


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('createdAt', -1)], 'idx_users_created_at')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=str(doc['_id']),
            first_name=doc.get('firstName', ''),
            last_name=doc.get('lastName', ''),
            email=doc['email'],
            password_hash=doc.get('password'),
            phone=doc.get('phone'),
            date_of_birth=doc.get('dateOfBirth'),
            gender=doc.get('gender'),
            country=doc.get('country'),
            city=doc.get('city'),
            created_at=doc.get('createdAt'),
            updated_at=doc.get('updatedAt'),
        )

    def create(self, user: User) -> User:
        """Insert a new user document and return the stored User."""
        now = datetime.now(timezone.utc)
        doc = {
            '_id': to_object_id(user.id),
            'password': user.password_hash,
            'createdAt': now,
            'updatedAt': now,
        }
        for attr, key in _FIELD_MAP.items():
            value = getattr(user, attr)
            if value is not None:
                doc[key] = value

        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("User creation failed: email already exists", extra={"userId": user.id})
            raise DuplicateError("Email already registered")
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"userId": user.id, "error": str(e)})
            raise StorageError("Failed to create user") from e

        logger.info("User created", extra={"userId": user.id})
        return self._to_domain(doc)

    def get_by_email(self, email: str) -> User | None:
        try:
            doc = self.collection.find_one({'email': email})
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            raise StorageError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def get_by_id(self, user_id: str) -> User | None:
        oid = to_object_id(user_id)
        try:
            doc = self.collection.find_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to get user") from e
        return self._to_domain(doc) if doc else None

    def get_many(self, user_ids: list[str]) -> dict[str, User]:
        oids = [to_object_id(uid) for uid in set(user_ids) if is_valid_id(uid)]
        if not oids:
            return {}
        try:
            docs = self.collection.find({'_id': {'$in': oids}})
            users = [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to get users", extra={"count": len(oids), "error": str(e)})
            raise StorageError("Failed to get users") from e
        return {u.id: u for u in users}

    def update(self, user_id: str, changes: dict) -> User | None:
        """Apply a sparse update. None values are $unset, the rest $set."""
        oid = to_object_id(user_id)
        to_set = {'updatedAt': datetime.now(timezone.utc)}
        to_unset = {}
        for attr, value in changes.items():
            key = _FIELD_MAP[attr]
            if value is None:
                to_unset[key] = ''
            else:
                to_set[key] = value

        update = {'$set': to_set}
        if to_unset:
            update['$unset'] = to_unset

        try:
            doc = self.collection.find_one_and_update(
                {'_id': oid}, update, return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            logger.warning("User update failed: email already exists", extra={"userId": user_id})
            raise DuplicateError("Email already registered")
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to update user") from e

        if doc:
            logger.info("User updated", extra={"userId": user_id, "fields": sorted(changes)})
        return self._to_domain(doc) if doc else None

    def delete(self, user_id: str) -> bool:
        oid = to_object_id(user_id)
        try:
            result = self.collection.delete_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to delete user") from e
        return result.deleted_count > 0
