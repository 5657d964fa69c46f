"""
Pydantic schemas for admin endpoints.

Request bodies keep the camelCase keys the admin dashboard sends.
"""
from typing import Dict, List
from pydantic import BaseModel, Field, ConfigDict

from chefdhundo.schemas.resume import ResumeResponse


class RoleUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    target_user_id: int = Field(..., alias="targetUserId", description="User to update")
    new_role: str = Field(..., alias="newRole", description="basic | pro | admin")


class ChefStatusUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", description="User to update")
    chef: str = Field(..., description="yes | no")


class ProfessionCount(BaseModel):
    profession: str
    count: int


class AdminStats(BaseModel):
    total_users: int
    users_by_role: Dict[str, int]
    total_chefs: int
    total_resumes: int
    verified_resumes: int
    top_professions: List[ProfessionCount]
    latest_resumes: List[ResumeResponse]


class AdminStatsEnvelope(BaseModel):
    success: bool = True
    data: AdminStats
