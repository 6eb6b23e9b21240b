"""
CRUD operations for companies.

Queries are written as SQL text with bound parameters; results come back
as plain dicts keyed the way the API presents them (numEmployees, logoUrl).
"""

import logging
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateEntityError, InvalidInputError, NotFoundError
from app.core.sql import WhereClause, like_contains, sql_for_partial_update, sql_for_where
from app.crud.job import format_equity
from app.schemas.company import CompanyCreateRequest, CompanySearchQuery

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

# Fields a partial update may touch, mapped to their columns
UPDATABLE_FIELDS = {
    "name": "name",
    "description": "description",
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

# NOT NULL columns among UPDATABLE_FIELDS
REQUIRED_FIELDS = ("name", "description")


def build_filters(criteria: Optional[CompanySearchQuery]) -> WhereClause:
    """
    Translate search criteria into a WHERE clause.

    Raises:
        InvalidInputError: If min_employees is greater than max_employees
    """
    if criteria is None:
        return sql_for_where([])

    if (
        criteria.min_employees is not None
        and criteria.max_employees is not None
        and criteria.min_employees > criteria.max_employees
    ):
        raise InvalidInputError("Min Employees cannot be greater than Max Employees")

    conditions = []
    if criteria.name:
        conditions.append(("LOWER(name)", "LIKE", like_contains(criteria.name.lower())))
    if criteria.min_employees is not None:
        conditions.append(("num_employees", ">=", criteria.min_employees))
    if criteria.max_employees is not None:
        conditions.append(("num_employees", "<=", criteria.max_employees))

    return sql_for_where(conditions)


def create(db: Session, company_data: CompanyCreateRequest) -> dict:
    """
    Create a company.

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        DuplicateEntityError: If the handle (or name) is already taken
    """
    duplicate_check = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": company_data.handle},
    ).first()
    if duplicate_check:
        raise DuplicateEntityError(f"Duplicate company: {company_data.handle}")

    try:
        row = db.execute(
            text(
                f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                    VALUES (:handle, :name, :description, :num_employees, :logo_url)
                    RETURNING {COMPANY_COLUMNS}"""
            ),
            {
                "handle": company_data.handle,
                "name": company_data.name,
                "description": company_data.description,
                "num_employees": company_data.num_employees,
                "logo_url": company_data.logo_url,
            },
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateEntityError(f"Duplicate company: {company_data.handle}")

    logger.info(f"Created company {company_data.handle}")
    return dict(row)


def find_all(db: Session, criteria: Optional[CompanySearchQuery] = None) -> List[dict]:
    """
    List companies matching the optional criteria, ordered by name.

    Returns:
        [{handle, name, description, numEmployees, logoUrl}, ...]
    """
    where = build_filters(criteria)
    rows = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies {where.sql} ORDER BY name"),
        where.params,
    ).mappings().all()
    return [dict(row) for row in rows]


def get(db: Session, handle: str) -> dict:
    """
    Get a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If no such company
    """
    rows = db.execute(
        text(
            """SELECT c.handle,
                      c.name,
                      c.description,
                      c.num_employees AS "numEmployees",
                      c.logo_url AS "logoUrl",
                      j.id,
                      j.title,
                      j.salary,
                      j.equity
               FROM companies c LEFT JOIN jobs j ON c.handle = j.company_handle
               WHERE c.handle = :handle
               ORDER BY j.id"""
        ),
        {"handle": handle},
    ).mappings().all()

    if not rows:
        raise NotFoundError(f"No company: {handle}")

    first = rows[0]
    company = {key: first[key] for key in ("handle", "name", "description", "numEmployees", "logoUrl")}
    # A company without jobs still yields one joined row with a NULL job id
    company["jobs"] = [
        {
            "id": row["id"],
            "title": row["title"],
            "salary": row["salary"],
            "equity": format_equity(row["equity"]),
        }
        for row in rows
        if row["id"] is not None
    ]
    return company


def update(db: Session, handle: str, data: dict) -> dict:
    """
    Partially update a company.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        InvalidInputError: If data is empty, names a field that can't change
            or clears name/description
        DuplicateEntityError: If the new name belongs to another company
        NotFoundError: If no such company
    """
    unknown = sorted(set(data) - set(UPDATABLE_FIELDS))
    if unknown:
        raise InvalidInputError(f"Cannot update company field(s): {', '.join(unknown)}")

    cleared = sorted(key for key in REQUIRED_FIELDS if key in data and data[key] is None)
    if cleared:
        raise InvalidInputError(f"Company field(s) cannot be null: {', '.join(cleared)}")

    partial = sql_for_partial_update(data, UPDATABLE_FIELDS)
    try:
        row = db.execute(
            text(
                f"""UPDATE companies
                    SET {partial.set_cols}
                    WHERE handle = :handle
                    RETURNING {COMPANY_COLUMNS}"""
            ),
            {**partial.params, "handle": handle},
        ).mappings().first()
        db.commit()
    except IntegrityError:
        db.rollback()
        if data.get("name") is not None:
            raise DuplicateEntityError(f"Duplicate company name: {data['name']}")
        raise InvalidInputError(f"Invalid data for company: {handle}")

    if not row:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return dict(row)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company; its jobs go with it.

    Raises:
        NotFoundError: If no such company
    """
    row = db.execute(
        text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
        {"handle": handle},
    ).first()
    db.commit()

    if not row:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
