"""Donation routes.

Endpoints:
- GET /api/donations: all donations, newest first
- GET /api/donations/{id}: one donation
- POST /api/donations: create a donation for the caller
- PUT /api/donations/{id}: update a donation
- DELETE /api/donations/{id}: delete a donation
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_donation_repo, get_user_repo
from api.models import (
    DonationCreateRequest,
    DonationResponse,
    DonationUpdateRequest,
    DonorResponse,
    MessageResponse,
)
from api.security import Identity, get_current_identity
from domain.model.donation import Donation
from domain.model.errors import (
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)
from port.donation_repository import DonationRepository
from port.user_repository import UserRepository
from services import donation_service
from utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/donations", tags=["donations"])

SERVER_ERROR = "Server Error"


def _to_response(donation: Donation) -> DonationResponse:
    d = donation.donor
    return DonationResponse(
        id=donation.id,
        user_id=donation.user_id,
        user=DonorResponse(
            id=d.id,
            first_name=d.first_name,
            last_name=d.last_name,
            full_name=d.full_name,
            email=d.email,
        ) if d else None,
        amount=donation.amount,
        currency=donation.currency,
        payment_intent_id=donation.payment_intent_id,
        status=donation.status.value,
        donated_at=donation.donated_at,
    )


@router.get("", response_model=list[DonationResponse])
def list_donations(
    donations: DonationRepository = Depends(get_donation_repo),
    users: UserRepository = Depends(get_user_repo),
):
    """Get all donations with donor display fields, most recent first."""
    try:
        result = donation_service.list_donations(donations, users)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)
    return [_to_response(d) for d in result]


@router.get("/{donation_id}", response_model=DonationResponse)
def get_donation(
    donation_id: str,
    donations: DonationRepository = Depends(get_donation_repo),
    users: UserRepository = Depends(get_user_repo),
):
    """Get a donation by ID. A malformed ID is reported as 404."""
    try:
        donation = donation_service.get_donation(donations, users, donation_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)
    return _to_response(donation)


@router.post("", response_model=DonationResponse)
def create_donation(
    request: DonationCreateRequest,
    identity: Identity = Depends(get_current_identity),
    donations: DonationRepository = Depends(get_donation_repo),
):
    """Create a donation owned by the caller."""
    try:
        donation = donation_service.create_donation(
            donations,
            user_id=identity.id,
            amount=request.amount,
            currency=request.currency,
            payment_intent_id=request.payment_intent_id,
            status=request.status,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)

    logger.info("Donation created", extra={
        "donationId": donation.id,
        "userId": identity.id,
        "amount": donation.amount,
        "currency": donation.currency,
    })
    return _to_response(donation)


@router.put("/{donation_id}", response_model=DonationResponse)
def update_donation(
    donation_id: str,
    request: DonationUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    donations: DonationRepository = Depends(get_donation_repo),
    settings: Settings = Depends(get_settings),
):
    """Update a donation. Only non-empty fields are written."""
    try:
        donation = donation_service.update_donation(
            donations,
            donation_id,
            user_id=identity.id,
            fields=request.model_dump(),
            enforce_ownership=settings.enforce_donation_ownership,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)

    logger.info("Donation updated", extra={"donationId": donation_id, "userId": identity.id})
    return _to_response(donation)


@router.delete("/{donation_id}", response_model=MessageResponse)
def delete_donation(
    donation_id: str,
    identity: Identity = Depends(get_current_identity),
    donations: DonationRepository = Depends(get_donation_repo),
    settings: Settings = Depends(get_settings),
):
    """Delete a donation."""
    try:
        donation_service.delete_donation(
            donations,
            donation_id,
            user_id=identity.id,
            enforce_ownership=settings.enforce_donation_ownership,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR)

    logger.info("Donation deleted", extra={"donationId": donation_id, "userId": identity.id})
    return MessageResponse(msg="Donation removed")
