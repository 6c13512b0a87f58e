"""Opportunity signup routes.

Endpoints:
- POST /api/user-opportunities: sign the caller up for an opportunity
- GET /api/user-opportunities/me: the caller's signups
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_opportunity_repo, get_signup_repo
from api.models import (
    OpportunitySummary,
    SignupCreatedResponse,
    SignupDetailResponse,
    SignupRequest,
    SignupResponse,
)
from api.security import Identity, get_current_identity
from domain.model.errors import (
    DuplicateError,
    InvalidIdError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from domain.model.opportunity import Opportunity
from port.opportunity_repository import OpportunityRepository
from port.signup_repository import SignupRepository
from services import signup_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user-opportunities", tags=["user-opportunities"])


def _summary(opportunity: Opportunity | None) -> OpportunitySummary | None:
    if opportunity is None:
        return None
    return OpportunitySummary(
        id=opportunity.id,
        title=opportunity.title,
        description=opportunity.description,
        location=opportunity.location,
        duration=opportunity.duration,
        volunteers_needed=opportunity.volunteers_needed,
    )


@router.post("", response_model=SignupCreatedResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: SignupRequest,
    identity: Identity = Depends(get_current_identity),
    signups: SignupRepository = Depends(get_signup_repo),
    opportunities: OpportunityRepository = Depends(get_opportunity_repo),
):
    """Sign the caller up for a volunteer opportunity (once per opportunity)."""
    try:
        signup = signup_service.sign_up(signups, opportunities, identity.id, request.opportunity_id)
    except InvalidIdError as e:
        detail = "Invalid Opportunity ID format" if e.field == 'opportunityId' else e.message
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    except (ValidationError, DuplicateError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server Error")

    logger.info("Signed up for opportunity", extra={
        "userId": identity.id,
        "opportunityId": signup.opportunity_id,
    })

    return SignupCreatedResponse(
        msg="Successfully signed up for the opportunity",
        user_opportunity=SignupResponse(
            id=signup.id,
            user=signup.user_id,
            opportunity=signup.opportunity_id,
            signed_up_at=signup.signed_up_at,
        ),
    )


@router.get("/me", response_model=list[SignupDetailResponse])
def list_my_signups(
    identity: Identity = Depends(get_current_identity),
    signups: SignupRepository = Depends(get_signup_repo),
    opportunities: OpportunityRepository = Depends(get_opportunity_repo),
):
    """Get every opportunity the caller has signed up for."""
    try:
        mine = signup_service.list_signups(signups, opportunities, identity.id)
    except InvalidIdError:
        # a token subject that is not an ObjectId cannot own any signup
        mine = []
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server Error")

    return [
        SignupDetailResponse(
            id=s.id,
            user=s.user_id,
            opportunity=_summary(s.opportunity),
            signed_up_at=s.signed_up_at,
        )
        for s in mine
    ]
