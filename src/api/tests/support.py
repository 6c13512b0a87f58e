"""Shared fixtures for route tests: in-memory repositories and test tokens."""

import unittest

from fastapi.testclient import TestClient

from adapter.fake.donation_repository import FakeDonationRepository
from adapter.fake.opportunity_repository import FakeOpportunityRepository
from adapter.fake.signup_repository import FakeSignupRepository
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import (
    get_donation_repo,
    get_opportunity_repo,
    get_signup_repo,
    get_user_repo,
)
from api.main import app
from services.token_service import TokenService
from utils.config import Settings, get_settings

TEST_SECRET = "test-secret"


class RouteTestCase(unittest.TestCase):
    """Wires the app to fake repositories and a known signing secret."""

    settings = Settings(jwt_secret=TEST_SECRET, bcrypt_rounds=4)

    def setUp(self):
        self.client = TestClient(app)
        self.users = FakeUserRepository()
        self.donations = FakeDonationRepository()
        self.opportunities = FakeOpportunityRepository()
        self.signups = FakeSignupRepository()
        self.tokens = TokenService(TEST_SECRET)

        app.dependency_overrides[get_settings] = lambda: self.settings
        app.dependency_overrides[get_user_repo] = lambda: self.users
        app.dependency_overrides[get_donation_repo] = lambda: self.donations
        app.dependency_overrides[get_opportunity_repo] = lambda: self.opportunities
        app.dependency_overrides[get_signup_repo] = lambda: self.signups

    def tearDown(self):
        app.dependency_overrides.clear()

    def auth_headers(self, user_id: str) -> dict:
        return {"x-auth-token": self.tokens.issue(user_id)}

    def register(self, email: str = "a@b.com", password: str = "secret1", **extra) -> dict:
        body = {"firstName": "A", "lastName": "B", "email": email, "password": password, **extra}
        response = self.client.post("/api/auth/register", json=body)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()
