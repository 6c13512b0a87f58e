"""MongoDB implementation of SignupRepository."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import SIGNUPS_COLLECTION_NAME, to_object_id
from domain.model.errors import DuplicateError, StorageError
from domain.model.signup import Signup

logger = getLogger(__name__)


class MongoSignupRepository:
    def __init__(self, db: Database):
        self.collection = db[SIGNUPS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for userOpportunities collection.

        The compound unique index is what actually guarantees one signup per
        (user, opportunity); the service-level pre-check can race.
        """
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(
                self.collection,
                [('user', 1), ('opportunity', 1)],
                'idx_signups_user_opportunity',
                unique=True,
            )
            return True
        except Exception as e:
            logger.error("Failed to create userOpportunities indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Signup:
        return Signup(
            id=str(doc['_id']),
            user_id=str(doc['user']),
            opportunity_id=str(doc['opportunity']),
            signed_up_at=doc.get('signedUpAt'),
        )

    def create(self, signup: Signup) -> Signup:
        doc = {
            '_id': to_object_id(signup.id),
            'user': to_object_id(signup.user_id, 'user'),
            'opportunity': to_object_id(signup.opportunity_id, 'opportunityId'),
            'signedUpAt': signup.signed_up_at,
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            logger.warning("Duplicate signup rejected by unique index", extra=signup.identity)
            raise DuplicateError("Already signed up for this opportunity")
        except PyMongoError as e:
            logger.error("Failed to create signup", extra={**signup.identity, "error": str(e)})
            raise StorageError("Failed to create signup") from e

        logger.info("Signup created", extra={"signupId": signup.id, **signup.identity})
        return self._to_domain(doc)

    def find_existing(self, user_id: str, opportunity_id: str) -> Signup | None:
        query = {
            'user': to_object_id(user_id, 'user'),
            'opportunity': to_object_id(opportunity_id, 'opportunityId'),
        }
        try:
            doc = self.collection.find_one(query)
        except PyMongoError as e:
            logger.error("Failed to find signup", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to find signup") from e
        return self._to_domain(doc) if doc else None

    def find_by_user(self, user_id: str) -> list[Signup]:
        oid = to_object_id(user_id, 'user')
        try:
            docs = self.collection.find({'user': oid}).sort('signedUpAt', -1)
            return [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list signups", extra={"userId": user_id, "error": str(e)})
            raise StorageError("Failed to list signups") from e
