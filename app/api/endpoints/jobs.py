from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.crud import job as job_crud
from app.schemas.job import JobCreateRequest, JobSearchQuery, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("/", status_code=201, dependencies=[Depends(get_admin_user)])
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db)
):
    """
    Create a job posting under an existing company.

    Returns {job: {id, title, salary, equity, companyHandle}}

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    return {"job": job}


@router.get("/")
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Args:
        title: Case-insensitive match anywhere in the title
        minSalary: Salary at least this much
        hasEquity: When true, only jobs offering non-zero equity
    """
    criteria = JobSearchQuery(title=title, min_salary=min_salary, has_equity=has_equity)
    jobs = job_crud.find_all(db, criteria)
    return {"jobs": jobs}


@router.get("/{job_id}")
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    job = job_crud.get(db, job_id)
    return {"job": job}


@router.patch("/{job_id}", dependencies=[Depends(get_admin_user)])
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Partially update a job: {title, salary, equity}.

    Sending id or companyHandle is a validation error.

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    job = job_crud.update(db, job_id, data)
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(get_admin_user)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
