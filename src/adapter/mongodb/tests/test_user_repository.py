"""Tests for MongoUserRepository against a mocked collection."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb import USERS_COLLECTION_NAME
from adapter.mongodb.user_repository import MongoUserRepository
from domain.model.errors import DuplicateError, InvalidIdError, StorageError
from domain.model.user import User


def _doc(oid: ObjectId, **overrides) -> dict:
    doc = {
        '_id': oid,
        'firstName': 'Ada',
        'lastName': 'Lovelace',
        'email': 'ada@example.com',
        'password': '$2b$10$hash',
        'phone': '0123456789',
        'createdAt': datetime(2024, 1, 1, tzinfo=timezone.utc),
        'updatedAt': datetime(2024, 1, 1, tzinfo=timezone.utc),
    }
    doc.update(overrides)
    return doc


class MongoUserRepositoryTestCase(unittest.TestCase):

    def setUp(self):
        self.collection = MagicMock()
        db = MagicMock()
        db.__getitem__.return_value = self.collection
        self.repo = MongoUserRepository(db)
        db.__getitem__.assert_called_with(USERS_COLLECTION_NAME)
        self.oid = ObjectId()


class TestCreate(MongoUserRepositoryTestCase):

    def _user(self):
        return User(id=str(self.oid), first_name='Ada', last_name='Lovelace',
                    email='ada@example.com', password_hash='$2b$10$hash', date_of_birth=None)

    def test_inserts_camel_case_document(self):
        user = self.repo.create(self._user())

        doc = self.collection.insert_one.call_args[0][0]
        self.assertEqual(doc['_id'], self.oid)
        self.assertEqual(doc['firstName'], 'Ada')
        self.assertEqual(doc['password'], '$2b$10$hash')
        self.assertNotIn('dateOfBirth', doc)
        self.assertIn('createdAt', doc)
        self.assertEqual(user.id, str(self.oid))
        self.assertEqual(user.password_hash, '$2b$10$hash')

    def test_duplicate_key(self):
        self.collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")

        with self.assertRaises(DuplicateError):
            self.repo.create(self._user())

    def test_failure_logs_identify_user_by_id_not_email(self):
        for error in (DuplicateKeyError("E11000"), PyMongoError("network")):
            with self.subTest(error=type(error).__name__):
                self.collection.insert_one.side_effect = error

                with self.assertLogs('adapter.mongodb.user_repository', level='WARNING') as logs:
                    with self.assertRaises((DuplicateError, StorageError)):
                        self.repo.create(self._user())

                record = logs.records[-1]
                self.assertEqual(record.userId, str(self.oid))
                self.assertFalse(hasattr(record, 'email'))

    def test_other_failures(self):
        self.collection.insert_one.side_effect = PyMongoError("network")

        with self.assertRaises(StorageError):
            self.repo.create(self._user())


class TestRead(MongoUserRepositoryTestCase):

    def test_get_by_email(self):
        self.collection.find_one.return_value = _doc(self.oid)

        user = self.repo.get_by_email('ada@example.com')

        self.collection.find_one.assert_called_once_with({'email': 'ada@example.com'})
        self.assertEqual(user.full_name, 'Ada Lovelace')
        self.assertEqual(user.phone, '0123456789')

    def test_get_by_id_not_found(self):
        self.collection.find_one.return_value = None

        self.assertIsNone(self.repo.get_by_id(str(self.oid)))
        self.collection.find_one.assert_called_once_with({'_id': self.oid})

    def test_get_by_id_malformed(self):
        with self.assertRaises(InvalidIdError) as ctx:
            self.repo.get_by_id('123')

        self.assertEqual(ctx.exception.field, '_id')
        self.collection.find_one.assert_not_called()

    def test_get_many_ignores_malformed_ids(self):
        self.collection.find.return_value = [_doc(self.oid)]

        users = self.repo.get_many([str(self.oid), 'bad'])

        self.assertEqual(list(users), [str(self.oid)])
        self.collection.find.assert_called_once_with({'_id': {'$in': [self.oid]}})

    def test_get_many_empty(self):
        self.assertEqual(self.repo.get_many(['bad']), {})
        self.collection.find.assert_not_called()

    def test_read_failure(self):
        self.collection.find_one.side_effect = PyMongoError("timeout")

        with self.assertRaises(StorageError):
            self.repo.get_by_email('ada@example.com')


class TestUpdate(MongoUserRepositoryTestCase):

    def test_sets_values_and_unsets_none(self):
        self.collection.find_one_and_update.return_value = _doc(self.oid, city='Paris')

        user = self.repo.update(str(self.oid), {'city': 'Paris', 'phone': None, 'date_of_birth': None})

        query, update = self.collection.find_one_and_update.call_args[0]
        self.assertEqual(query, {'_id': self.oid})
        self.assertEqual(update['$set']['city'], 'Paris')
        self.assertIn('updatedAt', update['$set'])
        self.assertEqual(update['$unset'], {'phone': '', 'dateOfBirth': ''})
        self.assertEqual(
            self.collection.find_one_and_update.call_args[1]['return_document'], ReturnDocument.AFTER,
        )
        self.assertEqual(user.city, 'Paris')

    def test_no_unset_when_nothing_cleared(self):
        self.collection.find_one_and_update.return_value = _doc(self.oid)

        self.repo.update(str(self.oid), {'first_name': 'Ada'})

        update = self.collection.find_one_and_update.call_args[0][1]
        self.assertNotIn('$unset', update)

    def test_missing_user(self):
        self.collection.find_one_and_update.return_value = None

        self.assertIsNone(self.repo.update(str(self.oid), {'city': 'Paris'}))

    def test_duplicate_email(self):
        self.collection.find_one_and_update.side_effect = DuplicateKeyError("E11000")

        with self.assertRaises(DuplicateError):
            self.repo.update(str(self.oid), {'email': 'taken@example.com'})


class TestDelete(MongoUserRepositoryTestCase):

    def test_deleted(self):
        self.collection.delete_one.return_value.deleted_count = 1

        self.assertTrue(self.repo.delete(str(self.oid)))
        self.collection.delete_one.assert_called_once_with({'_id': self.oid})

    def test_nothing_deleted(self):
        self.collection.delete_one.return_value.deleted_count = 0

        self.assertFalse(self.repo.delete(str(self.oid)))


class TestEnsureIndexes(MongoUserRepositoryTestCase):

    def test_unique_email_index(self):
        self.assertTrue(self.repo.ensure_indexes())

        self.collection.create_index.assert_any_call([('email', 1)], name='idx_users_email', unique=True)

    def test_failure_is_reported(self):
        self.collection.create_index.side_effect = PyMongoError("not authorized")

        self.assertFalse(self.repo.ensure_indexes())


if __name__ == '__main__':
    unittest.main()
