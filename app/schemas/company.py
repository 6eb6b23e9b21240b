"""
Pydantic schemas for company requests.
"""

from pydantic import Field, field_validator
from typing import Optional

from app.schemas.common import CamelModel


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(CamelModel):
    """Partial update; handle cannot be changed"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    @field_validator('name', 'description')
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """name and description may be left out but not cleared."""
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class CompanySearchQuery(CamelModel):
    """Optional filters for listing companies"""
    name: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)
