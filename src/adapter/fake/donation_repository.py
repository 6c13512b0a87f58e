"""In-memory implementation of DonationRepository for testing."""

import dataclasses

from domain.model.donation import Donation
from domain.model.identifiers import require_valid_id


class FakeDonationRepository:
    def __init__(self):
        self.store: dict[str, Donation] = {}

    def save(self, donation: Donation) -> Donation:
        require_valid_id(donation.id)
        self.store[donation.id] = donation
        return donation

    def get_by_id(self, donation_id: str) -> Donation | None:
        require_valid_id(donation_id)
        return self.store.get(donation_id)

    def find_all(self) -> list[Donation]:
        return sorted(self.store.values(), key=lambda d: d.donated_at, reverse=True)

    def update(self, donation_id: str, changes: dict) -> Donation | None:
        require_valid_id(donation_id)
        donation = self.store.get(donation_id)
        if not donation:
            return None
        updated = dataclasses.replace(donation, **changes)
        self.store[donation_id] = updated
        return updated

    def delete(self, donation_id: str) -> bool:
        require_valid_id(donation_id)
        return self.store.pop(donation_id, None) is not None
