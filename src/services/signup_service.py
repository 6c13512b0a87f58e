"""Signup service: volunteer signups for opportunities.

The existence check before insert is only there to give a friendly error.
Two concurrent requests can both pass it; the store's unique
(user, opportunity) index then rejects the second insert, which is reported
with the same message.
"""

from domain.model.errors import DuplicateError, NotFoundError, ValidationError
from domain.model.signup import Signup
from port.opportunity_repository import OpportunityRepository
from port.signup_repository import SignupRepository

OPPORTUNITY_ID_REQUIRED = "Opportunity ID is required"
OPPORTUNITY_NOT_FOUND = "Volunteer opportunity not found"
ALREADY_SIGNED_UP = "You have already signed up for this opportunity"


def sign_up(
    signups: SignupRepository,
    opportunities: OpportunityRepository,
    user_id: str,
    opportunity_id: str | None,
) -> Signup:
    """Sign ``user_id`` up for an opportunity.

    Raises:
        ValidationError: no opportunity id given
        InvalidIdError: malformed opportunity id
        NotFoundError: opportunity does not exist
        DuplicateError: already signed up
    """
    if not opportunity_id:
        raise ValidationError(OPPORTUNITY_ID_REQUIRED)

    if not opportunities.get_by_id(opportunity_id):
        raise NotFoundError(OPPORTUNITY_NOT_FOUND)

    if signups.find_existing(user_id, opportunity_id):
        raise DuplicateError(ALREADY_SIGNED_UP)

    try:
        return signups.create(Signup.create(user_id=user_id, opportunity_id=opportunity_id))
    except DuplicateError:
        raise DuplicateError(ALREADY_SIGNED_UP)


def list_signups(
    signups: SignupRepository,
    opportunities: OpportunityRepository,
    user_id: str,
) -> list[Signup]:
    """The user's signups with their opportunity attached (None if it was removed)."""
    mine = signups.find_by_user(user_id)
    linked = opportunities.get_many([s.opportunity_id for s in mine])
    for signup in mine:
        signup.opportunity = linked.get(signup.opportunity_id)
    return mine
