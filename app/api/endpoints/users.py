"""
User endpoints.

Admins manage every account; a regular user can read, update and delete
only their own, and apply to jobs as themselves.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import TokenUser, get_admin_or_self_user, get_admin_user
from app.core.exceptions import UnauthorizedError
from app.core.security import create_token_for_user
from app.crud import user as user_crud
from app.schemas.user import UserCreateRequest, UserUpdateRequest

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, dependencies=[Depends(get_admin_user)])
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Add a user. Not the registration endpoint: this is for admins, and the
    new user may be an admin.

    Returns {user: {username, firstName, lastName, email, isAdmin}, token}

    Authorization required: admin
    """
    user = user_crud.register(db, request)
    token = create_token_for_user(user)
    return {"user": user, "token": token}


@router.get("/", dependencies=[Depends(get_admin_user)])
def list_users(db: Session = Depends(get_db)):
    """
    List all users with the ids of the jobs they applied to.

    Authorization required: admin
    """
    users = user_crud.find_all(db)
    return {"users": users}


@router.get("/{username}", dependencies=[Depends(get_admin_or_self_user)])
def get_user(username: str, db: Session = Depends(get_db)):
    """
    Returns {user: {username, firstName, lastName, email, isAdmin, jobsApplied}}

    Authorization required: admin or same user
    """
    user = user_crud.get(db, username)
    return {"user": user}


@router.patch("/{username}")
def update_user(
    username: str,
    request: UserUpdateRequest,
    current_user: TokenUser = Depends(get_admin_or_self_user),
    db: Session = Depends(get_db)
):
    """
    Partially update a user: {firstName, lastName, password, email, isAdmin}.

    Only admins may change isAdmin.

    Authorization required: admin or same user
    """
    # No user column is nullable, so an explicit null means "leave it alone"
    data = request.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)

    if "isAdmin" in data and not current_user.is_admin:
        logger.warning(f"{current_user.username} tried to change isAdmin on {username}")
        raise UnauthorizedError()

    user = user_crud.update(db, username, data)
    return {"user": user}


@router.delete("/{username}", dependencies=[Depends(get_admin_or_self_user)])
def delete_user(username: str, db: Session = Depends(get_db)):
    """
    Delete a user.

    Authorization required: admin or same user
    """
    user_crud.remove(db, username)
    return {"deleted": username}


@router.post("/{username}/jobs/{job_id}", status_code=201, dependencies=[Depends(get_admin_or_self_user)])
def apply_for_job(username: str, job_id: int, db: Session = Depends(get_db)):
    """
    Apply to a job.

    Returns {applied: job_id}

    Authorization required: admin or same user
    """
    application = user_crud.apply_for_job(db, username, job_id)
    return {"applied": application["jobId"]}
