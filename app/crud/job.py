"""
CRUD operations for jobs.

Encapsulates all database access for jobs, providing a clean interface
for the API layer.
"""

import logging
from decimal import Decimal
from typing import Any, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError
from app.core.sql import WhereClause, like_contains, sql_for_partial_update, sql_for_where
from app.schemas.job import JobCreateRequest, JobSearchQuery

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# id and companyHandle are fixed once a job exists
UPDATABLE_FIELDS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}


def format_equity(value: Any) -> Optional[str]:
    """Equity is exposed as a decimal string ("0", "0.05") or None."""
    if value is None:
        return None
    if isinstance(value, float):
        value = Decimal(str(value))
    return str(value)


def _equity_param(value: Any) -> Optional[str]:
    # Bound as text so every driver accepts it; the column is NUMERIC
    return None if value is None else str(value)


def _to_record(row) -> dict:
    job = dict(row)
    job["equity"] = format_equity(job["equity"])
    return job


def build_filters(criteria: Optional[JobSearchQuery]) -> WhereClause:
    """Translate search criteria into a WHERE clause."""
    if criteria is None:
        return sql_for_where([])

    conditions = []
    if criteria.title:
        conditions.append(("LOWER(title)", "LIKE", like_contains(criteria.title.lower())))
    if criteria.min_salary is not None:
        conditions.append(("salary", ">=", criteria.min_salary))
    if criteria.has_equity:
        conditions.append(("equity", ">", 0))

    return sql_for_where(conditions)


def create(db: Session, job_data: JobCreateRequest) -> dict:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        InvalidInputError: If company_handle doesn't reference a company
    """
    try:
        row = db.execute(
            text(
                f"""INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES (:title, :salary, :equity, :company_handle)
                    RETURNING {JOB_COLUMNS}"""
            ),
            {
                "title": job_data.title,
                "salary": job_data.salary,
                "equity": _equity_param(job_data.equity),
                "company_handle": job_data.company_handle,
            },
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"No company: {job_data.company_handle}")

    logger.info(f"Created job {row['id']}: {row['title']} ({row['companyHandle']})")
    return _to_record(row)


def find_all(db: Session, criteria: Optional[JobSearchQuery] = None) -> List[dict]:
    """
    List jobs matching the optional criteria, ordered by id.

    Filters:
        title: case-insensitive substring
        min_salary: salary at least this much
        has_equity: only jobs with non-zero equity when True
    """
    where = build_filters(criteria)
    rows = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs {where.sql} ORDER BY id"),
        where.params,
    ).mappings().all()
    return [_to_record(row) for row in rows]


def get(db: Session, job_id: int) -> dict:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no such job
    """
    row = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = :id"),
        {"id": job_id},
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No job id: {job_id}")

    return _to_record(row)


def update(db: Session, job_id: int, data: dict) -> dict:
    """
    Partially update a job's title, salary and/or equity.

    Raises:
        InvalidInputError: If data is empty or tries to change id/companyHandle
        NotFoundError: If no such job
    """
    unknown = sorted(set(data) - set(UPDATABLE_FIELDS))
    if unknown:
        raise InvalidInputError(f"Cannot update job field(s): {', '.join(unknown)}")

    data = dict(data)
    if "equity" in data:
        data["equity"] = _equity_param(data["equity"])

    partial = sql_for_partial_update(data, UPDATABLE_FIELDS)
    try:
        row = db.execute(
            text(
                f"""UPDATE jobs
                    SET {partial.set_cols}
                    WHERE id = :id
                    RETURNING {JOB_COLUMNS}"""
            ),
            {**partial.params, "id": job_id},
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InvalidInputError(f"Invalid data for job: {job_id}")

    if not row:
        raise NotFoundError(f"No job id: {job_id}")

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return _to_record(row)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no such job
    """
    row = db.execute(
        text("DELETE FROM jobs WHERE id = :id RETURNING id"),
        {"id": job_id},
    ).first()
    db.commit()

    if not row:
        raise NotFoundError(f"No job id: {job_id}")

    logger.info(f"Deleted job {job_id}")
