"""
Pydantic schemas for resume endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict

GENDER_PATTERN = "^(Male|Female|Other|Prefer not to say)$"
WORK_TYPE_PATTERN = "^(full|part|contract)$"
JOINING_PATTERN = "^(immediate|specific)$"
TRAINING_PATTERN = "^(yes|no|try)$"
BUSINESS_TYPE_PATTERN = "^(any|new|old)$"


class ResumeFields(BaseModel):
    """Optional profile fields shared by create, update and response."""
    phone: Optional[str] = Field(None, description="Contact phone number")
    user_location: Optional[str] = Field(None, description="Current address / locality")
    city: Optional[str] = Field(None, description="City")
    user_state: Optional[str] = Field(None, description="State")
    pin_code: Optional[str] = Field(None, description="Postal code")
    preferred_location: Optional[str] = Field(None, description="Preferred work location")
    age_range: Optional[str] = Field(None, description="Age bracket, e.g. 25-30")
    gender: Optional[str] = Field(None, description="Gender", pattern=GENDER_PATTERN)
    profession: Optional[str] = Field(None, description="Profession, e.g. Head Chef")
    job_role: Optional[str] = Field(None, description="Desired job role")
    experience_years: Optional[int] = Field(None, ge=0, le=80, description="Years of experience")
    experiences: Optional[str] = Field(None, description="Work history")
    education: Optional[str] = Field(None, description="Education")
    cuisines: Optional[str] = Field(None, description="Comma-separated cuisines")
    languages: Optional[str] = Field(None, description="Languages spoken")
    certifications: Optional[str] = Field(None, description="Certifications")
    current_ctc: Optional[str] = Field(None, description="Current cost-to-company")
    expected_ctc: Optional[str] = Field(None, description="Expected cost-to-company")
    notice_period: Optional[str] = Field(None, description="Notice period")
    training: Optional[str] = Field(None, description="Willing to train", pattern=TRAINING_PATTERN)
    joining: Optional[str] = Field(None, description="Joining availability", pattern=JOINING_PATTERN)
    work_type: Optional[str] = Field(None, description="Work type", pattern=WORK_TYPE_PATTERN)
    business_type: Optional[str] = Field(None, description="Business type", pattern=BUSINESS_TYPE_PATTERN)
    linkedin_profile: Optional[str] = Field(None, description="LinkedIn profile URL")
    portfolio_website: Optional[str] = Field(None, description="Portfolio URL")
    bio: Optional[str] = Field(None, description="Short bio")
    passport: Optional[str] = Field(None, description="Passport availability")
    photo: Optional[str] = Field(None, description="Photo URL")


class ResumeCreate(ResumeFields):
    """Schema for creating a resume."""
    user_id: int = Field(..., description="Owner user ID")
    name: str = Field(..., description="Candidate name", min_length=1, max_length=255)
    email: str = Field(..., description="Contact email", min_length=3)


class ResumeUpdate(ResumeFields):
    """Schema for updating a resume. Only provided fields are changed."""
    name: Optional[str] = Field(None, description="Candidate name", min_length=1, max_length=255)
    email: Optional[str] = Field(None, description="Contact email", min_length=3)
    verified: Optional[bool] = Field(None, description="Admin verification marker")


class ResumeResponse(ResumeFields):
    """Schema for resume response."""
    id: int = Field(..., description="Resume ID")
    user_id: int = Field(..., description="Owner user ID")
    name: str = Field(..., description="Candidate name")
    email: str = Field(..., description="Contact email (masked for basic viewers)")
    verified: bool = Field(False, description="Verified by an admin")
    resume_file: Optional[str] = Field(None, description="Signed URL of the uploaded PDF")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 7,
                "user_id": 3,
                "name": "Amit Sharma",
                "email": "am**@example.com",
                "phone": "98******10",
                "city": "Pune",
                "profession": "Head Chef",
                "experience_years": 5,
                "verified": False,
                "resume_file": None,
                "created_at": "2026-01-15T10:30:00Z",
                "updated_at": "2026-01-15T10:30:00Z"
            }
        }


class PaginationInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total matching resumes")
    total_pages: int = Field(..., alias="totalPages", description="Number of pages")
    has_more: bool = Field(..., alias="hasMore", description="True when a later page exists")


class ResumeEnvelope(BaseModel):
    success: bool = True
    data: Optional[ResumeResponse] = None
    message: Optional[str] = None


class ResumeListResponse(BaseModel):
    """List payload; ``pagination`` is present only in paginated mode."""
    success: bool = True
    data: List[ResumeResponse] = Field(default_factory=list)
    pagination: Optional[PaginationInfo] = None
    message: Optional[str] = None


class ResumeVerificationUpdate(BaseModel):
    verified: bool = Field(..., description="New verification state")


class FileUploadResponse(BaseModel):
    success: bool = True
    url: str = Field(..., description="Signed URL of the stored PDF")
    path: str = Field(..., description="Object key inside the resume bucket")
    message: Optional[str] = None


class FileDownloadResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    url: str = Field(..., description="Short-lived signed download URL")
    expires_in: int = Field(..., alias="expiresIn", description="URL lifetime in seconds")
