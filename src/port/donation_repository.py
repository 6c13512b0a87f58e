"""Port for donation data access."""

from typing import Protocol

from domain.model.donation import Donation


class DonationRepository(Protocol):
    """Protocol for donation CRUD."""

    def save(self, donation: Donation) -> Donation:
        """Insert a new donation and return it."""
        ...

    def get_by_id(self, donation_id: str) -> Donation | None:
        """Get a donation by ID. Raises InvalidIdError for malformed IDs."""
        ...

    def find_all(self) -> list[Donation]:
        """All donations, sorted by donated_at descending."""
        ...

    def update(self, donation_id: str, changes: dict) -> Donation | None:
        """Set the given fields. Returns the updated Donation or None if not found."""
        ...

    def delete(self, donation_id: str) -> bool:
        """Delete a donation. Returns True if deleted, False if not found."""
        ...
