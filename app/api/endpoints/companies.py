from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import company as company_crud
from app.schemas.company import CompanyCreateRequest, CompanySearchQuery, CompanyUpdateRequest

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=201, dependencies=[Depends(get_admin_user)])
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a company.

    Returns {company: {handle, name, description, numEmployees, logoUrl}}

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    return {"company": company}


@router.get("/")
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Args:
        name: Case-insensitive match anywhere in the name
        minEmployees: At least this many employees
        maxEmployees: At most this many employees (400 if below minEmployees)
    """
    criteria = CompanySearchQuery(
        name=name,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    companies = company_crud.find_all(db, criteria)
    return {"companies": companies}


@router.get("/{handle}")
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company with its jobs.

    Returns {company: {handle, name, description, numEmployees, logoUrl, jobs}}
    where jobs is [{id, title, salary, equity}, ...]
    """
    company = company_crud.get(db, handle)
    return {"company": company}


@router.patch("/{handle}", dependencies=[Depends(get_admin_user)])
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partially update a company: {name, description, numEmployees, logoUrl}.

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, data)
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(get_admin_user)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
