"""Auth gate: resolves the caller's identity from the ``x-auth-token`` header."""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader

from api.dependencies import get_token_service
from domain.model.errors import InvalidTokenError
from services.token_service import TokenService

logger = logging.getLogger(__name__)

AUTH_HEADER_NAME = "x-auth-token"

auth_header = APIKeyHeader(name=AUTH_HEADER_NAME, auto_error=False)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller. Only the id is known; the user record is not loaded."""
    id: str


def get_current_identity(
    token: Optional[str] = Security(auth_header),
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """Verify the request token. Raises 401 if it is missing or invalid."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )

    try:
        user_id = tokens.verify(token)
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token is not valid",
        )

    return Identity(id=user_id)
