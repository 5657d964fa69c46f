"""
Pydantic schemas for announcement endpoints.
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

TYPE_PATTERN = "^(info|warning|promo|success|error|new|update)$"
STATUS_PATTERN = "^(active|scheduled|expired|draft)$"


class AnnouncementBase(BaseModel):
    tag: Optional[str] = Field(None, description="Short badge text")
    icon: Optional[str] = Field(None, description="Icon name")
    link_url: Optional[str] = Field(None, description="Call-to-action URL")
    link_text: Optional[str] = Field(None, description="Call-to-action label")
    end_date: Optional[datetime] = Field(None, description="Expiry; null never expires")
    bg_color: Optional[str] = Field(None, description="Background color")
    text_color: Optional[str] = Field(None, description="Text color")


class AnnouncementCreate(AnnouncementBase):
    """Schema for creating an announcement."""
    type: str = Field(..., description="Banner type", pattern=TYPE_PATTERN)
    title: str = Field(..., description="Headline", min_length=1, max_length=255)
    message: str = Field(..., description="Markdown body", min_length=1)
    status: str = Field("draft", description="Lifecycle status", pattern=STATUS_PATTERN)
    priority: int = Field(5, ge=1, le=10, description="Higher wins")
    start_date: Optional[datetime] = Field(None, description="Start of display window; defaults to now")
    dismissible: bool = Field(True, description="Viewer may dismiss the banner")
    themed: bool = Field(False, description="Use theme colors instead of custom ones")


class AnnouncementUpdate(AnnouncementBase):
    """Schema for updating an announcement. Only provided fields are changed."""
    type: Optional[str] = Field(None, description="Banner type", pattern=TYPE_PATTERN)
    title: Optional[str] = Field(None, description="Headline", min_length=1, max_length=255)
    message: Optional[str] = Field(None, description="Markdown body", min_length=1)
    status: Optional[str] = Field(None, description="Lifecycle status", pattern=STATUS_PATTERN)
    priority: Optional[int] = Field(None, ge=1, le=10, description="Higher wins")
    start_date: Optional[datetime] = Field(None, description="Start of display window")
    dismissible: Optional[bool] = Field(None, description="Viewer may dismiss the banner")
    themed: Optional[bool] = Field(None, description="Use theme colors")


class AnnouncementResponse(AnnouncementBase):
    id: int
    type: str
    title: str
    message: str
    status: str
    priority: int
    start_date: datetime
    dismissible: bool
    themed: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AnnouncementEnvelope(BaseModel):
    success: bool = True
    data: Optional[AnnouncementResponse] = None
    message: Optional[str] = None


class AnnouncementListEnvelope(BaseModel):
    success: bool = True
    data: List[AnnouncementResponse] = Field(default_factory=list)
    message: Optional[str] = None
