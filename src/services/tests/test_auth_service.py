"""Tests for auth_service: registration and authentication."""

import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

import bcrypt

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, InvalidCredentialsError, ValidationError
from services import auth_service
from services.auth_service import (
    EMAIL_TAKEN,
    INVALID_CREDENTIALS,
    MISSING_LOGIN_FIELDS,
    MISSING_REGISTRATION_FIELDS,
    authenticate,
    register,
)

ROUNDS = 4


def _register(repo, **overrides):
    fields = dict(first_name="Ada", last_name="Lovelace", email="ada@example.com", password="secret1")
    fields.update(overrides)
    return register(repo, rounds=ROUNDS, **fields)


class TestRegister(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_creates_user_with_hashed_password(self):
        user = _register(self.repo)

        self.assertIn(user.id, self.repo.store)
        self.assertNotEqual(user.password_hash, "secret1")
        self.assertTrue(bcrypt.checkpw(b"secret1", user.password_hash.encode()))
        self.assertEqual(user.phone, "")
        self.assertEqual(user.gender, "")
        self.assertIsNone(user.date_of_birth)

    def test_cost_factor_is_encoded_in_hash(self):
        self.assertTrue(_register(self.repo).password_hash.startswith("$2b$04$"))
        self.assertTrue(auth_service._hash_password("pw").startswith("$2b$10$"))

    def test_email_is_trimmed_and_lowercased(self):
        user = _register(self.repo, email="  Ada@Example.COM ")

        self.assertEqual(user.email, "ada@example.com")

    def test_optional_fields_are_kept(self):
        dob = datetime(1990, 1, 2, tzinfo=timezone.utc)

        user = _register(self.repo, phone="0123456789", gender="Female", country="UK", city="London",
                         date_of_birth=dob)

        self.assertEqual((user.phone, user.gender, user.country, user.city), ("0123456789", "Female", "UK", "London"))
        self.assertEqual(user.date_of_birth, dob)

    def test_missing_required_fields(self):
        for missing in ("first_name", "last_name", "email", "password"):
            with self.subTest(missing=missing):
                with self.assertRaises(ValidationError) as ctx:
                    _register(self.repo, **{missing: ""})
                self.assertEqual(ctx.exception.message, MISSING_REGISTRATION_FIELDS)
                self.assertIsNone(ctx.exception.details)
        self.assertEqual(self.repo.store, {})

    def test_duplicate_email_any_case(self):
        _register(self.repo)

        with self.assertRaises(DuplicateError) as ctx:
            _register(self.repo, email="ADA@example.com")

        self.assertEqual(str(ctx.exception), EMAIL_TAKEN)
        self.assertEqual(len(self.repo.store), 1)

    def test_store_level_duplicate_keeps_message(self):
        repo = MagicMock()
        repo.get_by_email.return_value = None
        repo.create.side_effect = DuplicateError("E11000 duplicate key")

        with self.assertRaises(DuplicateError) as ctx:
            _register(repo)

        self.assertEqual(str(ctx.exception), EMAIL_TAKEN)

    def test_schema_violations_are_reported_per_field(self):
        with self.assertRaises(ValidationError) as ctx:
            _register(self.repo, email="not-an-email", phone="123", gender="Robot")

        details = ctx.exception.details
        self.assertEqual(set(details), {"email", "phone", "gender"})
        self.assertTrue(ctx.exception.message.startswith("User validation failed: "))

    def test_short_password(self):
        with self.assertRaises(ValidationError) as ctx:
            _register(self.repo, password="12345")

        self.assertIn("password", ctx.exception.details)
        self.assertEqual(self.repo.store, {})


class TestAuthenticate(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = _register(self.repo)

    def test_long_passwords_compare_on_first_72_bytes(self):
        password = "\u00e9" * 50  # 100 bytes in UTF-8
        user = _register(self.repo, email="long@example.com", password=password)

        self.assertEqual(authenticate(self.repo, "long@example.com", password).id, user.id)
        with self.assertRaises(InvalidCredentialsError):
            authenticate(self.repo, "long@example.com", "z" * 80)

    def test_valid_credentials(self):
        self.assertEqual(authenticate(self.repo, "ada@example.com", "secret1").id, self.user.id)

    def test_email_case_is_ignored(self):
        self.assertEqual(authenticate(self.repo, " ADA@example.com", "secret1").id, self.user.id)

    def test_wrong_password_and_unknown_email_look_the_same(self):
        for email, password in (("ada@example.com", "wrong!"), ("nobody@example.com", "secret1")):
            with self.subTest(email=email):
                with self.assertRaises(InvalidCredentialsError) as ctx:
                    authenticate(self.repo, email, password)
                self.assertEqual(str(ctx.exception), INVALID_CREDENTIALS)

    def test_missing_fields(self):
        for email, password in (("", "secret1"), ("ada@example.com", None)):
            with self.subTest(email=email, password=password):
                with self.assertRaises(ValidationError) as ctx:
                    authenticate(self.repo, email, password)
                self.assertEqual(ctx.exception.message, MISSING_LOGIN_FIELDS)


if __name__ == '__main__':
    unittest.main()
