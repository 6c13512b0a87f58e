"""MongoDB implementation of DonationRepository."""

from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError

from adapter.mongodb import DONATIONS_COLLECTION_NAME, to_object_id
from domain.model.donation import DEFAULT_CURRENCY, Donation, DonationStatus
from domain.model.errors import StorageError

logger = getLogger(__name__)

_FIELD_MAP = {
    'amount': 'amount',
    'currency': 'currency',
    'payment_intent_id': 'paymentIntentId',
    'status': 'status',
}


class MongoDonationRepository:
    def __init__(self, db: Database):
        self.collection = db[DONATIONS_COLLECTION_NAME]

    # ── indexes ────────────────────────────────────────────────

    def ensure_indexes(self) -> bool:
        """Create indexes for donations collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('donatedAt', -1)], 'idx_donations_donated_at')
            create_index_safe(self.collection, [('user', 1)], 'idx_donations_user', sparse=True)
            return True
        except Exception as e:
            logger.error("Failed to create donations indexes", extra={"error": str(e)})
            return False

    # ── mapping ───────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> Donation:
        user = doc.get('user')
        return Donation(
            id=str(doc['_id']),
            amount=doc['amount'],
            currency=doc.get('currency') or DEFAULT_CURRENCY,
            user_id=str(user) if user else None,
            payment_intent_id=doc.get('paymentIntentId'),
            status=DonationStatus(doc.get('status', DonationStatus.COMPLETED.value)),
            donated_at=doc.get('donatedAt'),
        )

    # ── CRUD ──────────────────────────────────────────────────

    def save(self, donation: Donation) -> Donation:
        doc = {
            '_id': to_object_id(donation.id),
            'user': to_object_id(donation.user_id, 'user') if donation.user_id else None,
            'amount': donation.amount,
            'currency': donation.currency,
            'paymentIntentId': donation.payment_intent_id,
            'status': donation.status.value,
            'donatedAt': donation.donated_at,
        }
        try:
            self.collection.insert_one(doc)
        except PyMongoError as e:
            logger.error("Failed to save donation", extra={"userId": donation.user_id, "error": str(e)})
            raise StorageError("Failed to save donation") from e

        logger.info("Donation saved", extra={"donationId": donation.id, "userId": donation.user_id})
        return self._to_domain(doc)

    def get_by_id(self, donation_id: str) -> Donation | None:
        oid = to_object_id(donation_id)
        try:
            doc = self.collection.find_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to get donation", extra={"donationId": donation_id, "error": str(e)})
            raise StorageError("Failed to get donation") from e
        return self._to_domain(doc) if doc else None

    def find_all(self) -> list[Donation]:
        try:
            return [self._to_domain(doc) for doc in self.collection.find().sort('donatedAt', -1)]
        except PyMongoError as e:
            logger.error("Failed to list donations", extra={"error": str(e)})
            raise StorageError("Failed to list donations") from e

    def update(self, donation_id: str, changes: dict) -> Donation | None:
        oid = to_object_id(donation_id)
        to_set = {}
        for attr, value in changes.items():
            to_set[_FIELD_MAP[attr]] = value.value if isinstance(value, DonationStatus) else value

        try:
            if to_set:
                doc = self.collection.find_one_and_update(
                    {'_id': oid}, {'$set': to_set}, return_document=ReturnDocument.AFTER,
                )
            else:
                doc = self.collection.find_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to update donation", extra={"donationId": donation_id, "error": str(e)})
            raise StorageError("Failed to update donation") from e
        return self._to_domain(doc) if doc else None

    def delete(self, donation_id: str) -> bool:
        oid = to_object_id(donation_id)
        try:
            result = self.collection.delete_one({'_id': oid})
        except PyMongoError as e:
            logger.error("Failed to delete donation", extra={"donationId": donation_id, "error": str(e)})
            raise StorageError("Failed to delete donation") from e
        return result.deleted_count > 0
