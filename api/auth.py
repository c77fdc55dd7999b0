"""
Token authentication for the mutating book endpoints.
"""

import re
from typing import Optional

import structlog
from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from api.dependencies import get_token_service, get_user_store
from api.errors import AuthenticationError
from api.tokens import InvalidTokenError, TokenService
from storage.database import UserStore
from storage.models import User
from utilities.logger import mask_token

logger = structlog.get_logger(__name__)

# Security scheme; parsing is done here so both "Token" and "Bearer" work
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description='Either `Token token="<token>"` or `Bearer <token>`',
)

_TOKEN_PARAM = re.compile(r'^\s*token\s*=\s*"?([^",;]*)"?', re.IGNORECASE)


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the signed token out of an Authorization header value.

    Accepts ``Token token="<token>"`` (quotes optional, extra options
    ignored), ``Token <token>`` and ``Bearer <token>``.

    Returns:
        The token, or None if the header is missing or uses another scheme
    """
    if not authorization:
        return None

    scheme, _, credentials = authorization.strip().partition(" ")
    credentials = credentials.strip()
    scheme = scheme.lower()

    if scheme == "bearer":
        return credentials or None

    if scheme != "token" or not credentials:
        return None

    match = _TOKEN_PARAM.match(credentials)
    if match:
        return match.group(1).strip() or None
    if "=" in credentials:
        return None
    return credentials


async def authenticate_user(
    authorization: Optional[str] = Security(authorization_header),
    token_service: TokenService = Depends(get_token_service),
    user_store: UserStore = Depends(get_user_store),
) -> User:
    """
    Resolve the user behind the request's token.

    Raises:
        AuthenticationError: If the token is missing or invalid, or the user
            it names does not exist. The reason is logged, never returned.
    """
    token = extract_token(authorization)
    if token is None:
        logger.warning("Authentication failed", reason="missing_token")
        raise AuthenticationError("missing_token")

    try:
        user_id = token_service.decode(token)
    except InvalidTokenError as e:
        logger.warning("Authentication failed", reason="invalid_token", token=mask_token(token), error=str(e))
        raise AuthenticationError("invalid_token") from e

    user = await user_store.get(user_id)
    if user is None:
        logger.warning("Authentication failed", reason="unknown_user", user_id=user_id)
        raise AuthenticationError("unknown_user")

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return user
