"""Tests for MongoDonationRepository and MongoOpportunityRepository mapping."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from bson import ObjectId
from pymongo.errors import PyMongoError

from adapter.mongodb.donation_repository import MongoDonationRepository
from adapter.mongodb.opportunity_repository import MongoOpportunityRepository
from domain.model.donation import Donation, DonationStatus
from domain.model.errors import InvalidIdError, StorageError


def _mock_db(collection):
    db = MagicMock()
    db.__getitem__.return_value = collection
    return db


class TestMongoDonationRepository(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.repo = MongoDonationRepository(_mock_db(self.collection))

    def test_save_anonymous(self):
        donation = Donation.create(amount=5, currency='USD')

        saved = self.repo.save(donation)

        doc = self.collection.insert_one.call_args[0][0]
        self.assertIsNone(doc['user'])
        self.assertEqual(doc['status'], 'completed')
        self.assertIsNone(saved.user_id)

    def test_save_with_owner(self):
        owner = ObjectId()

        self.repo.save(Donation.create(amount=5, user_id=str(owner), payment_intent_id='pi_1'))

        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['user'], owner)
        self.assertEqual(doc['paymentIntentId'], 'pi_1')

    def test_legacy_document_defaults(self):
        oid = ObjectId()
        self.collection.find_one.return_value = {
            '_id': oid, 'amount': 20, 'donatedAt': datetime(2024, 1, 1, tzinfo=timezone.utc),
        }

        donation = self.repo.get_by_id(str(oid))

        self.assertEqual(donation.currency, 'USD')
        self.assertEqual(donation.status, DonationStatus.COMPLETED)
        self.assertIsNone(donation.user_id)

    def test_update_writes_status_value(self):
        oid = ObjectId()
        self.collection.find_one_and_update.return_value = {'_id': oid, 'amount': 20, 'status': 'failed'}

        updated = self.repo.update(str(oid), {'status': DonationStatus.FAILED, 'payment_intent_id': 'pi_2'})

        update = self.collection.find_one_and_update.call_args[0][1]
        self.assertEqual(update, {'$set': {'status': 'failed', 'paymentIntentId': 'pi_2'}})
        self.assertEqual(updated.status, DonationStatus.FAILED)

    def test_empty_update_reads_current(self):
        oid = ObjectId()
        self.collection.find_one.return_value = {'_id': oid, 'amount': 20}

        self.assertEqual(self.repo.update(str(oid), {}).amount, 20)
        self.collection.find_one_and_update.assert_not_called()

    def test_malformed_id(self):
        with self.assertRaises(InvalidIdError):
            self.repo.delete('x')

    def test_list_failure(self):
        self.collection.find.side_effect = PyMongoError("down")

        with self.assertRaises(StorageError):
            self.repo.find_all()


class TestMongoOpportunityRepository(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        self.repo = MongoOpportunityRepository(_mock_db(self.collection))

    def test_maps_document(self):
        oid = ObjectId()
        self.collection.find.return_value.sort.return_value = [{
            '_id': oid, 'title': 'Food bank', 'volunteersNeeded': 3, 'duration': '2 hours',
        }]

        [opportunity] = self.repo.find_all()

        self.assertEqual(opportunity.id, str(oid))
        self.assertEqual(opportunity.volunteers_needed, 3)
        self.collection.find.return_value.sort.assert_called_once_with('dateCreated', -1)

    def test_get_by_id_malformed_names_field(self):
        with self.assertRaises(InvalidIdError) as ctx:
            self.repo.get_by_id('abc')

        self.assertEqual(ctx.exception.field, 'opportunityId')


if __name__ == '__main__':
    unittest.main()
