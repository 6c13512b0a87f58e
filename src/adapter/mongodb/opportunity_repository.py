"""MongoDB implementation of OpportunityRepository (read-only)."""

from logging import getLogger

from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import OPPORTUNITIES_COLLECTION_NAME, to_object_id
from domain.model.errors import StorageError
from domain.model.identifiers import is_valid_id
from domain.model.opportunity import Opportunity

logger = getLogger(__name__)


class MongoOpportunityRepository:
    def __init__(self, db: Database):
        self.collection = db[OPPORTUNITIES_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('dateCreated', -1)], 'idx_opportunities_date_created')
            return True
        except Exception as e:
            logger.error("Failed to create opportunities indexes", extra={"error": str(e)})
            return False

    def _to_domain(self, doc: dict) -> Opportunity:
        return Opportunity(
            id=str(doc['_id']),
            title=doc.get('title', ''),
            description=doc.get('description'),
            location=doc.get('location'),
            duration=doc.get('duration'),
            volunteers_needed=doc.get('volunteersNeeded'),
            date_created=doc.get('dateCreated'),
        )

    def find_all(self) -> list[Opportunity]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find().sort('dateCreated', -1)]
        except PyMongoError as e:
            logger.error("Failed to list opportunities", extra={"error": str(e)})
            raise StorageError("Failed to list opportunities") from e

    def get_by_id(self, opportunity_id: str) -> Opportunity | None:
        oid = to_object_id(opportunity_id, 'opportunityId')
        try:
            doc = self.collection.find_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to get opportunity", extra={"opportunityId": opportunity_id, "error": str(e)})
            raise StorageError("Failed to get opportunity") from e
        return self._to_domain(doc) if doc else None

    def get_many(self, opportunity_ids: list[str]) -> dict[str, Opportunity]:
        oids = [to_object_id(oid) for oid in set(opportunity_ids) if is_valid_id(oid)]
        if not oids:
            return {}
        try:
            found = [self._to_domain(doc) for doc in self.collection.find({'_id': {'$in': oids}})]
        except PyMongoError as e:
            logger.error("Failed to get opportunities", extra={"count": len(oids), "error": str(e)})
            raise StorageError("Failed to get opportunities") from e
        return {o.id: o for o in found}
