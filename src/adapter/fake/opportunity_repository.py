"""In-memory implementation of OpportunityRepository for testing."""

from datetime import datetime, timezone

from domain.model.identifiers import new_id, require_valid_id
from domain.model.opportunity import Opportunity


class FakeOpportunityRepository:
    def __init__(self):
        self.store: dict[str, Opportunity] = {}

    def add(self, title: str, **kwargs) -> Opportunity:
        """Test helper: opportunities are written by an external system in production."""
        kwargs.setdefault('date_created', datetime.now(timezone.utc))
        opportunity = Opportunity(id=kwargs.pop('id', None) or new_id(), title=title, **kwargs)
        self.store[opportunity.id] = opportunity
        return opportunity

    def find_all(self) -> list[Opportunity]:
        return sorted(self.store.values(), key=lambda o: o.date_created, reverse=True)

    def get_by_id(self, opportunity_id: str) -> Opportunity | None:
        require_valid_id(opportunity_id, 'opportunityId')
        return self.store.get(opportunity_id)

    def get_many(self, opportunity_ids: list[str]) -> dict[str, Opportunity]:
        return {oid: self.store[oid] for oid in opportunity_ids if oid in self.store}
