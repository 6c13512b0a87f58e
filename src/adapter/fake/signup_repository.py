"""In-memory implementation of SignupRepository for testing.

Mirrors the compound unique index: create() rejects a second signup for the
same (user_id, opportunity_id) pair regardless of any earlier check.
"""

from domain.model.errors import DuplicateError
from domain.model.identifiers import require_valid_id
from domain.model.signup import Signup


class FakeSignupRepository:
    def __init__(self):
        self.store: dict[str, Signup] = {}

    def create(self, signup: Signup) -> Signup:
        require_valid_id(signup.user_id, 'user')
        require_valid_id(signup.opportunity_id, 'opportunityId')
        if any(s.identity == signup.identity for s in self.store.values()):
            raise DuplicateError("Already signed up for this opportunity")
        self.store[signup.id] = signup
        return signup

    def find_existing(self, user_id: str, opportunity_id: str) -> Signup | None:
        for signup in self.store.values():
            if signup.user_id == user_id and signup.opportunity_id == opportunity_id:
                return signup
        return None

    def find_by_user(self, user_id: str) -> list[Signup]:
        require_valid_id(user_id, 'user')
        mine = [s for s in self.store.values() if s.user_id == user_id]
        return sorted(mine, key=lambda s: s.signed_up_at, reverse=True)
