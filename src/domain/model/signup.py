"""Volunteer signup (user <-> opportunity join record)."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from domain.model.identifiers import new_id
from domain.model.opportunity import Opportunity


@dataclass
class Signup:
    """A user's signup for an opportunity. Unique per (user_id, opportunity_id)."""

    IDENTITY_FIELDS = ('user_id', 'opportunity_id')

    id: str
    user_id: str
    opportunity_id: str
    signed_up_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    opportunity: Opportunity | None = None

    @staticmethod
    def create(user_id: str, opportunity_id: str) -> 'Signup':
        return Signup(
            id=new_id(),
            user_id=user_id,
            opportunity_id=opportunity_id,
            signed_up_at=datetime.now(timezone.utc),
        )

    @property
    def identity(self) -> dict:
        """Business identity: fields that define uniqueness."""
        return {f: getattr(self, f) for f in self.IDENTITY_FIELDS}
