"""
Pydantic schemas for user endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, EmailStr


class UserResponse(BaseModel):
    """Schema for user response."""
    id: int = Field(..., description="User ID")
    external_id: str = Field(..., description="Identity provider user ID")
    name: str = Field(..., description="Display name")
    email: str = Field(..., description="Email address")
    role: str = Field(..., description="basic | pro | admin")
    chef: str = Field(..., description="yes | no")
    photo: Optional[str] = Field(None, description="Profile photo URL")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Account last update timestamp")

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "external_id": "user_2abc",
                "name": "Amit Kumar",
                "email": "amit@example.com",
                "role": "basic",
                "chef": "yes",
                "photo": None,
                "created_at": "2026-01-15T10:30:00Z",
                "updated_at": "2026-01-15T10:30:00Z"
            }
        }


class UserEnvelope(BaseModel):
    success: bool = True
    data: UserResponse
    message: Optional[str] = None


class UserListEnvelope(BaseModel):
    success: bool = True
    data: List[UserResponse]
    message: Optional[str] = None


class UserSync(BaseModel):
    """Profile fields sent by the frontend on sign-in."""
    name: Optional[str] = Field(None, description="Display name", max_length=255)
    email: EmailStr = Field(..., description="Primary email address")
    photo: Optional[str] = Field(None, description="Profile photo URL")


class UserProfileUpdate(BaseModel):
    """Self-service profile edits."""
    name: Optional[str] = Field(None, description="Display name", min_length=1, max_length=255)
    photo: Optional[str] = Field(None, description="Profile photo URL")
