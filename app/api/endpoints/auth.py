"""
Authentication endpoints.

- POST /token: Exchange username/password for a JWT
- POST /register: Create a (non-admin) account and receive a JWT
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import create_token_for_user
from app.crud import user as user_crud
from app.schemas.user import TokenRequest, TokenResponse, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: TokenRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate and return a JWT.

    Wrong password and unknown username both answer 401.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"Issued token for {user['username']}")
    return TokenResponse(token=create_token_for_user(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account and return a JWT for immediate use.

    The account is never an admin; admins are created through POST /users.
    """
    user = user_crud.register(db, request)
    return TokenResponse(token=create_token_for_user(user))
