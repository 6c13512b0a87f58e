"""Profile routes: the authenticated caller's own account.

- GET /api/profile/me
- PUT /api/profile/me
- DELETE /api/profile/me
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import MessageResponse, ProfileUpdateRequest, ProfileUpdateResponse, UserResponse
from api.security import Identity, get_current_identity
from domain.model.errors import (
    DuplicateError,
    InvalidIdError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from domain.model.user import User
from port.user_repository import UserRepository
from services import profile_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])


def _to_response(user: User) -> UserResponse:
    """Convert domain User to API UserResponse (no password hash)."""
    return UserResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        full_name=user.full_name,
        email=user.email,
        phone=user.phone,
        date_of_birth=user.date_of_birth,
        gender=user.gender,
        country=user.country,
        city=user.city,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.get("/me", response_model=UserResponse)
def get_my_profile(
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get the current user's profile."""
    try:
        user = profile_service.get_profile(repo, identity.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error occurred while fetching profile.",
        )
    return _to_response(user)


@router.put("/me", response_model=ProfileUpdateResponse)
def update_my_profile(
    request: ProfileUpdateRequest,
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update the current user's profile.

    Only fields present in the body are considered; empty values are
    ignored and explicit nulls clear optional fields.
    """
    sent = {name: getattr(request, name) for name in request.model_fields_set}

    try:
        user = profile_service.update_profile(repo, identity.id, sent)
    except InvalidIdError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except (ValidationError, DuplicateError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error occurred while updating profile.",
        )

    logger.info("Profile updated", extra={"userId": identity.id, "fields": sorted(sent)})

    return ProfileUpdateResponse(message="Profile updated successfully.", user=_to_response(user))


@router.delete("/me", response_model=MessageResponse)
def delete_my_account(
    identity: Identity = Depends(get_current_identity),
    repo: UserRepository = Depends(get_user_repo),
):
    """Delete the current user's account. Donations and signups are kept."""
    try:
        profile_service.delete_account(repo, identity.id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error occurred while deleting account.",
        )

    logger.info("Account deleted", extra={"userId": identity.id})

    return MessageResponse(msg="Your account has been successfully deleted.")
