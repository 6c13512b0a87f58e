"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_token_service, get_user_repo
from api.errors import validation_error_detail
from api.models import LoginRequest, LoginResponse, LoginUser, RegisterRequest, RegisterResponse
from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    ServerConfigError,
    StorageError,
    ValidationError,
)
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenService
from utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
):
    """Register a new user.

    Raises:
        HTTPException: 400 if fields are missing, invalid, or the email is
            already registered; 500 on storage failure
    """
    try:
        user = auth_service.register(
            repo,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            password=request.password,
            phone=request.phone,
            date_of_birth=request.date_of_birth or None,
            gender=request.gender,
            country=request.country,
            city=request.city,
            rounds=settings.bcrypt_rounds,
        )
    except ValidationError as e:
        logger.info("Registration rejected", extra={"reason": e.message})
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=validation_error_detail(e))
    except DuplicateError as e:
        logger.info("Registration rejected: email already exists")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Server error occurred during registration."},
        )

    logger.info("User registered", extra={"userId": user.id})

    return RegisterResponse(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        message="Registration successful. Please log in.",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Login user and return a token valid for one hour.

    Raises:
        HTTPException: 400 if fields are missing or credentials are invalid,
            500 if the signing secret is not configured or storage fails
    """
    try:
        user = auth_service.authenticate(repo, request.email, request.password)
        token = tokens.issue(user.id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except InvalidCredentialsError as e:
        # Same answer for unknown email and wrong password
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ServerConfigError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Server configuration error: JWT secret missing."},
        )
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Server error occurred during login."},
        )

    logger.info("User logged in", extra={"userId": user.id})

    return LoginResponse(
        token=token,
        user=LoginUser(id=user.id, first_name=user.first_name, email=user.email),
        message="Login successful!",
    )
