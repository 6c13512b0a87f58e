"""Unit tests for the in-memory repositories: they must honour the same
uniqueness and id rules as the MongoDB adapters."""

import unittest

from adapter.fake.signup_repository import FakeSignupRepository
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, InvalidIdError
from domain.model.identifiers import new_id
from domain.model.signup import Signup
from domain.model.user import User


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = self.repo.create(User(id=new_id(), first_name='A', last_name='B', email='a@b.com'))

    def test_create_sets_timestamps(self):
        self.assertIsNotNone(self.user.created_at)
        self.assertEqual(self.user.created_at, self.user.updated_at)

    def test_email_is_unique(self):
        with self.assertRaises(DuplicateError):
            self.repo.create(User(id=new_id(), first_name='C', last_name='D', email='a@b.com'))

    def test_update_to_taken_email(self):
        other = self.repo.create(User(id=new_id(), first_name='C', last_name='D', email='c@d.com'))

        with self.assertRaises(DuplicateError):
            self.repo.update(other.id, {'email': 'a@b.com'})

    def test_update_clears_with_none(self):
        updated = self.repo.update(self.user.id, {'city': None})

        self.assertIsNone(updated.city)
        self.assertGreaterEqual(updated.updated_at, self.user.updated_at)

    def test_malformed_id(self):
        with self.assertRaises(InvalidIdError):
            self.repo.get_by_id('abc')

    def test_get_many_skips_unknown(self):
        self.assertEqual(list(self.repo.get_many([self.user.id, new_id()])), [self.user.id])


class TestFakeSignupRepository(unittest.TestCase):

    def test_pair_is_unique(self):
        repo = FakeSignupRepository()
        user_id, opportunity_id = new_id(), new_id()
        repo.create(Signup.create(user_id, opportunity_id))

        with self.assertRaises(DuplicateError):
            repo.create(Signup.create(user_id, opportunity_id))
        repo.create(Signup.create(new_id(), opportunity_id))

        self.assertEqual(len(repo.store), 2)


if __name__ == '__main__':
    unittest.main()
