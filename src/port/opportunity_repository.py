"""Port for volunteer opportunity data access (read-only)."""

from typing import Protocol

from domain.model.opportunity import Opportunity


class OpportunityRepository(Protocol):

    def find_all(self) -> list[Opportunity]:
        """All opportunities, sorted by date_created descending."""
        ...

    def get_by_id(self, opportunity_id: str) -> Opportunity | None:
        """Get one opportunity. Raises InvalidIdError for malformed IDs."""
        ...

    def get_many(self, opportunity_ids: list[str]) -> dict[str, Opportunity]:
        """Fetch several opportunities at once, keyed by ID."""
        ...
