"""
CRUD operations for users and their job applications.

Passwords go in hashed and never come back out: every record returned
here is {username, firstName, lastName, email, isAdmin[, jobsApplied]}.
"""

import logging
from collections import defaultdict
from typing import List

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    DuplicateEntityError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)
from app.core.security import dummy_verify, get_password_hash, verify_password
from app.core.sql import sql_for_partial_update
from app.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)

UPDATABLE_FIELDS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "isAdmin": "is_admin",
    "password": "password",
}


def _to_record(row) -> dict:
    user = dict(row)
    user.pop("password", None)
    # SQLite hands booleans back as 0/1
    user["isAdmin"] = bool(user["isAdmin"])
    return user


def authenticate(db: Session, username: str, password: str) -> dict:
    """
    Check a username/password pair.

    Returns:
        The user record (without password)

    Raises:
        UnauthorizedError: If the user doesn't exist or the password is wrong;
            both cases get the same message
    """
    row = db.execute(
        text(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()

    if row is None:
        dummy_verify()
    elif verify_password(password, row["password"]):
        return _to_record(row)

    logger.info(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Session, user_data: UserRegisterRequest) -> dict:
    """
    Register a user.

    Accepts UserRegisterRequest or UserCreateRequest (the latter may set
    is_admin).

    Returns:
        {username, firstName, lastName, email, isAdmin}

    Raises:
        DuplicateEntityError: If the username is taken
    """
    duplicate_check = db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": user_data.username},
    ).first()
    if duplicate_check:
        raise DuplicateEntityError(f"Duplicate username: {user_data.username}")

    try:
        row = db.execute(
            text(
                f"""INSERT INTO users
                    (username, password, first_name, last_name, email, is_admin)
                    VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
                    RETURNING {USER_COLUMNS}"""
            ),
            {
                "username": user_data.username,
                "password": get_password_hash(user_data.password),
                "first_name": user_data.first_name,
                "last_name": user_data.last_name,
                "email": user_data.email,
                "is_admin": getattr(user_data, "is_admin", False),
            },
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntityError(f"Duplicate username: {user_data.username}")

    logger.info(f"Registered user {user_data.username}")
    return _to_record(row)


def find_all(db: Session) -> List[dict]:
    """
    List every user with the ids of the jobs they applied to.

    Returns:
        [{username, firstName, lastName, email, isAdmin, jobsApplied}, ...]
        ordered by username; jobsApplied is ordered by job id.
    """
    users = db.execute(
        text(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    ).mappings().all()
    applications = db.execute(
        text("SELECT username, job_id FROM applications ORDER BY username, job_id")
    ).all()

    jobs_by_user = defaultdict(list)
    for username, job_id in applications:
        jobs_by_user[username].append(job_id)

    result = []
    for row in users:
        user = _to_record(row)
        user["jobsApplied"] = jobs_by_user.get(user["username"], [])
        result.append(user)
    return result


def get(db: Session, username: str) -> dict:
    """
    Get a user and the ids of the jobs they applied to.

    Raises:
        NotFoundError: If no such user
    """
    rows = db.execute(
        text(
            """SELECT u.username,
                      u.first_name AS "firstName",
                      u.last_name AS "lastName",
                      u.email,
                      u.is_admin AS "isAdmin",
                      a.job_id AS "jobId"
               FROM users u LEFT JOIN applications a ON u.username = a.username
               WHERE u.username = :username
               ORDER BY a.job_id"""
        ),
        {"username": username},
    ).mappings().all()

    if not rows:
        raise NotFoundError(f"No user: {username}")

    user = _to_record({key: rows[0][key] for key in ("username", "firstName", "lastName", "email", "isAdmin")})
    # No applications still yields one joined row with a NULL job id
    user["jobsApplied"] = [row["jobId"] for row in rows if row["jobId"] is not None]
    return user


def update(db: Session, username: str, data: dict) -> dict:
    """
    Partially update a user.

    Data can include: {firstName, lastName, password, email, isAdmin}

    WARNING: this can set a new password or make a user an admin. Callers
    must have checked the requester is allowed to do that.

    Raises:
        InvalidInputError: If data is empty or names a field that can't change
        NotFoundError: If no such user
    """
    unknown = sorted(set(data) - set(UPDATABLE_FIELDS))
    if unknown:
        raise InvalidInputError(f"Cannot update user field(s): {', '.join(unknown)}")

    data = dict(data)
    if data.get("password") is not None:
        data["password"] = get_password_hash(data["password"])

    partial = sql_for_partial_update(data, UPDATABLE_FIELDS)
    try:
        row = db.execute(
            text(
                f"""UPDATE users
                    SET {partial.set_cols}
                    WHERE username = :username
                    RETURNING {USER_COLUMNS}"""
            ),
            {**partial.params, "username": username},
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"Invalid data for user: {username}")

    if not row:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Updated user {username}: {', '.join(data)}")
    return _to_record(row)


def remove(db: Session, username: str) -> None:
    """
    Delete a user; their applications go with them.

    Raises:
        NotFoundError: If no such user
    """
    row = db.execute(
        text("DELETE FROM users WHERE username = :username RETURNING username"),
        {"username": username},
    ).first()
    db.commit()

    if not row:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Deleted user {username}")


def apply_for_job(db: Session, username: str, job_id: int) -> dict:
    """
    Record that a user applied to a job.

    Returns:
        {username, jobId}

    Raises:
        NotFoundError: If the user or the job doesn't exist
        DuplicateEntityError: If the user already applied to this job
    """
    user = db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": username},
    ).first()
    if not user:
        raise NotFoundError(f"No user: {username}")

    job = db.execute(
        text("SELECT id FROM jobs WHERE id = :id"),
        {"id": job_id},
    ).first()
    if not job:
        raise NotFoundError(f"No job id: {job_id}")

    existing = db.execute(
        text("SELECT job_id FROM applications WHERE username = :username AND job_id = :job_id"),
        {"username": username, "job_id": job_id},
    ).first()
    if existing:
        raise DuplicateEntityError(f"{username} already applied to job {job_id}")

    try:
        row = db.execute(
            text(
                """INSERT INTO applications (username, job_id)
                   VALUES (:username, :job_id)
                   RETURNING username, job_id AS "jobId"
                """
            ),
            {"username": username, "job_id": job_id},
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntityError(f"{username} already applied to job {job_id}")

    logger.info(f"User {username} applied to job {job_id}")
    return dict(row)
