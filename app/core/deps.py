"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context
from the bearer token. Failures raise UnauthorizedError (401).
"""

from typing import NamedTuple, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.core.exceptions import UnauthorizedError
from app.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>); a missing header
# is not an error here, the dependencies below decide
security = HTTPBearer(auto_error=False)


class TokenUser(NamedTuple):
    """Identity carried by a validated token."""
    username: str
    is_admin: bool


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenUser:
    """
    Extract and validate the current user from the JWT.

    Raises:
        UnauthorizedError: If there is no token or it is invalid/expired
    """
    if not credentials:
        raise UnauthorizedError()

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError()

    username = payload.get("sub")
    if username is None:
        raise UnauthorizedError()

    return TokenUser(username=username, is_admin=bool(payload.get("is_admin", False)))


async def get_admin_user(
    user: TokenUser = Depends(get_current_user),
) -> TokenUser:
    """
    Require an admin token.

    Raises:
        UnauthorizedError: If the user is not an admin
    """
    if not user.is_admin:
        raise UnauthorizedError()
    return user


async def get_admin_or_self_user(
    username: str,
    user: TokenUser = Depends(get_current_user),
) -> TokenUser:
    """
    Require an admin token or a token for the `username` path parameter.

    Raises:
        UnauthorizedError: If the user is neither
    """
    if not user.is_admin and user.username != username:
        raise UnauthorizedError()
    return user
