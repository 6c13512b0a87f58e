"""Token service: issues and verifies signed, time-limited bearer tokens.

Tokens are stateless JWTs carrying the user id (``sub``), issue time and
expiry. There is no revocation list; validity is signature + expiry only.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import InvalidTokenError, ServerConfigError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=1)


class TokenService:
    def __init__(
        self,
        secret: str | None,
        algorithm: str = DEFAULT_ALGORITHM,
        ttl: timedelta = DEFAULT_TTL,
    ):
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        """Create a token for ``user_id`` expiring ``ttl`` after ``now``.

        Raises:
            ServerConfigError: no signing secret is configured
        """
        if not self._secret:
            logger.critical("JWT_SECRET environment variable is not defined")
            raise ServerConfigError("JWT secret missing")

        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify signature and expiry, returning the user id.

        Raises:
            InvalidTokenError: bad signature, malformed, expired, no subject,
                or no secret to verify against
        """
        if not self._secret:
            raise InvalidTokenError("No signing secret configured")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"Token verification failed: {e}")
            raise InvalidTokenError(str(e)) from e

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise InvalidTokenError("Token has no subject")
        return user_id
