"""
Signed authentication tokens.

Tokens are compact JWS strings (header.payload.signature) produced with PyJWT.
The payload only carries the user id; it is signed, not encrypted, and has no
expiry.
"""

import jwt
import structlog

logger = structlog.get_logger(__name__)

DEFAULT_ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Raised when a token cannot be verified or does not carry a user id."""


class TokenService:
    """Issues and verifies user tokens signed with a shared secret."""

    def __init__(self, secret: str, algorithm: str = DEFAULT_ALGORITHM):
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm

    def issue(self, user_id: int) -> str:
        """
        Issue a signed token for a user.

        Args:
            user_id: Identifier of the user the token vouches for

        Returns:
            Compact signed token
        """
        return jwt.encode({"user_id": user_id}, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> int:
        """
        Verify a token and return the user id it carries.

        Raises:
            InvalidTokenError: If the signature or algorithm does not match,
                or the payload is malformed
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            logger.debug("Token verification failed", error=str(e))
            raise InvalidTokenError(str(e)) from e

        user_id = payload.get("user_id")
        # bool is a subclass of int
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Token payload does not contain an integer user_id")
        return user_id
