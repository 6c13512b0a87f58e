"""Donation domain models."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from domain.model.errors import PermissionDeniedError, ValidationError
from domain.model.identifiers import new_id

DEFAULT_CURRENCY = 'USD'
MIN_AMOUNT = 1


class DonationStatus(str, Enum):
    """Payment state of a donation."""
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass(frozen=True)
class DonorSummary:
    """Display fields of the user who made a donation."""
    id: str
    first_name: str | None = None
    last_name: str | None = None
    full_name: str | None = None
    email: str | None = None


def validate_amount(amount: float) -> float:
    if not math.isfinite(amount) or amount < MIN_AMOUNT:
        raise ValidationError(
            "Donation amount must be at least $1.",
            details={'amount': "Donation amount must be at least $1."},
        )
    return amount


def parse_status(value: 'str | DonationStatus') -> DonationStatus:
    try:
        return DonationStatus(value)
    except ValueError:
        raise ValidationError("Invalid status", details={'status': f"{value} is not a valid status"})


def validate_currency(currency: str) -> str:
    currency = currency.strip() if currency else ''
    if not currency:
        raise ValidationError("Currency is required", details={'currency': "Currency is required"})
    return currency


@dataclass
class Donation:
    """A single donation. ``user_id`` is None for anonymous donations."""
    id: str
    amount: float
    currency: str = DEFAULT_CURRENCY
    user_id: str | None = None
    payment_intent_id: str | None = None
    status: DonationStatus = DonationStatus.COMPLETED
    donated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    donor: DonorSummary | None = None

    @staticmethod
    def create(
        amount: float,
        currency: str = DEFAULT_CURRENCY,
        user_id: str | None = None,
        payment_intent_id: str | None = None,
        status: 'str | DonationStatus | None' = None,
    ) -> 'Donation':
        """Factory method: validates schema rules and assigns a fresh id."""
        return Donation(
            id=new_id(),
            amount=validate_amount(amount),
            currency=validate_currency(currency),
            user_id=user_id,
            payment_intent_id=payment_intent_id or None,
            status=parse_status(status) if status else DonationStatus.COMPLETED,
            donated_at=datetime.now(timezone.utc),
        )

    def check_ownership(self, user_id: str) -> None:
        """Verify ownership. Raises PermissionDeniedError on mismatch."""
        if self.user_id != user_id:
            raise PermissionDeniedError("User not authorized")
