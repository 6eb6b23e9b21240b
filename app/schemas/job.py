from pydantic import Field
from typing import Optional
from decimal import Decimal

from app.schemas.common import CamelModel


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(CamelModel):
    """
    Partial update of a job.

    id and companyHandle are not fields here, so sending either is a
    validation error.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)


class JobSearchQuery(CamelModel):
    """Optional filters for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None
