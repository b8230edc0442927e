"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
JSON field names are camelCase (the frontend contract), Python attributes
are snake_case.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    job_seeker = "Job Seeker"
    employer = "Employer"


# ============================================================
# BASE
# ============================================================

class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class DocumentModel(CamelModel):
    """A stored document; `_id` is exposed as a string."""
    id: str = Field(..., alias="_id")


# ============================================================
# USER SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=30)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6, max_length=32)
    role: UserRole


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    role: UserRole


class UserOut(DocumentModel):
    name: str
    email: str
    phone: str
    role: UserRole
    created_at: Optional[datetime] = None


class UserResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    user: UserOut


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=2000)
    category: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    fixed_salary: Optional[int] = Field(None, ge=0)
    salary_from: Optional[int] = Field(None, ge=0)
    salary_to: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def check_salary(self):
        has_range = self.salary_from is not None and self.salary_to is not None
        if self.fixed_salary is None and not has_range:
            raise ValueError("Please either provide fixed salary or ranged salary.")
        if self.fixed_salary is not None and (self.salary_from is not None or self.salary_to is not None):
            raise ValueError("Cannot Enter Fixed and Ranged Salary together.")
        if has_range and self.salary_from > self.salary_to:
            raise ValueError("salaryFrom cannot be greater than salaryTo.")
        return self


class JobUpdate(CamelModel):
    """Partial update; only fields sent by the client are applied."""
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    category: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    fixed_salary: Optional[int] = Field(None, ge=0)
    salary_from: Optional[int] = Field(None, ge=0)
    salary_to: Optional[int] = Field(None, ge=0)
    expired: Optional[bool] = None

    @model_validator(mode="after")
    def check_salary(self):
        if self.fixed_salary is not None and (self.salary_from is not None or self.salary_to is not None):
            raise ValueError("Cannot Enter Fixed and Ranged Salary together.")
        if (self.salary_from is None) != (self.salary_to is None):
            raise ValueError("Please provide both salaryFrom and salaryTo.")
        if self.salary_from is not None and self.salary_from > self.salary_to:
            raise ValueError("salaryFrom cannot be greater than salaryTo.")
        return self


class JobOut(DocumentModel):
    title: str
    description: str
    category: str
    country: str
    city: str
    location: str
    fixed_salary: Optional[int] = None
    salary_from: Optional[int] = None
    salary_to: Optional[int] = None
    expired: bool = False
    job_posted_on: Optional[datetime] = None
    posted_by: str


class JobResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    job: JobOut


class JobListResponse(CamelModel):
    success: bool = True
    jobs: List[JobOut]


class MyJobsResponse(CamelModel):
    success: bool = True
    my_jobs: List[JobOut]


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ResumeOut(BaseModel):
    public_id: str
    url: str


class RoleRef(BaseModel):
    user: str
    role: UserRole


class ApplicationOut(DocumentModel):
    name: str
    email: str
    cover_letter: str
    phone: str
    address: str
    resume: ResumeOut
    job_id: str
    applicant_id: RoleRef = Field(..., alias="applicantID")
    employer_id: RoleRef = Field(..., alias="employerID")
    created_at: Optional[datetime] = None


class ApplicationResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    application: ApplicationOut


class ApplicationListResponse(CamelModel):
    success: bool = True
    applications: List[ApplicationOut]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str
    success: bool = True


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
