"""Donation service: CRUD rules for donation records.

Ownership of a donation is not re-checked on update/delete unless the caller
passes ``enforce_ownership=True`` (driven by the ENFORCE_DONATION_OWNERSHIP
setting).
"""

from domain.model.donation import (
    Donation,
    DonorSummary,
    parse_status,
    validate_amount,
    validate_currency,
)
from domain.model.errors import InvalidIdError, NotFoundError
from domain.model.user import User
from port.donation_repository import DonationRepository
from port.user_repository import UserRepository

DONATION_NOT_FOUND = "Donation not found"


def _donor_summary(user: User) -> DonorSummary:
    return DonorSummary(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        email=user.email,
    )


def _attach_donors(donations: list[Donation], users: UserRepository) -> list[Donation]:
    owner_ids = [d.user_id for d in donations if d.user_id]
    owners = users.get_many(owner_ids) if owner_ids else {}
    for donation in donations:
        owner = owners.get(donation.user_id) if donation.user_id else None
        donation.donor = _donor_summary(owner) if owner else None
    return donations


def _load(donations: DonationRepository, donation_id: str) -> Donation:
    try:
        donation = donations.get_by_id(donation_id)
    except InvalidIdError:
        donation = None
    if not donation:
        raise NotFoundError(DONATION_NOT_FOUND)
    return donation


def list_donations(donations: DonationRepository, users: UserRepository) -> list[Donation]:
    """All donations, newest first, with owner display fields."""
    return _attach_donors(donations.find_all(), users)


def get_donation(donations: DonationRepository, users: UserRepository, donation_id: str) -> Donation:
    """One donation with owner display fields. Malformed ids are reported as not found."""
    return _attach_donors([_load(donations, donation_id)], users)[0]


def create_donation(
    donations: DonationRepository,
    user_id: str,
    amount: float,
    currency: str,
    payment_intent_id: str | None = None,
    status: str | None = None,
) -> Donation:
    donation = Donation.create(
        amount=amount,
        currency=currency,
        user_id=user_id,
        payment_intent_id=payment_intent_id,
        status=status,
    )
    return donations.save(donation)


def build_donation_changes(fields: dict) -> dict:
    """Validate update fields; falsy values are skipped like omitted ones."""
    changes = {}
    if fields.get('amount'):
        changes['amount'] = validate_amount(fields['amount'])
    if fields.get('currency'):
        changes['currency'] = validate_currency(fields['currency'])
    if fields.get('payment_intent_id'):
        changes['payment_intent_id'] = fields['payment_intent_id']
    if fields.get('status'):
        changes['status'] = parse_status(fields['status'])
    return changes


def update_donation(
    donations: DonationRepository,
    donation_id: str,
    user_id: str,
    fields: dict,
    enforce_ownership: bool = False,
) -> Donation:
    """Update a donation.

    Raises:
        ValidationError: amount below minimum, empty currency, unknown status
        NotFoundError: missing or malformed id
        PermissionDeniedError: caller is not the owner (only when enforced)
    """
    changes = build_donation_changes(fields)
    donation = _load(donations, donation_id)
    if enforce_ownership:
        donation.check_ownership(user_id)

    updated = donations.update(donation_id, changes)
    if not updated:
        raise NotFoundError(DONATION_NOT_FOUND)
    return updated


def delete_donation(
    donations: DonationRepository,
    donation_id: str,
    user_id: str,
    enforce_ownership: bool = False,
) -> None:
    donation = _load(donations, donation_id)
    if enforce_ownership:
        donation.check_ownership(user_id)

    if not donations.delete(donation_id):
        raise NotFoundError(DONATION_NOT_FOUND)
