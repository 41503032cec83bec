# File: cms_backend/schemas/project.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class ProjectBase(BaseModel):
    name: str
    areas: Optional[str] = None
    detail: Optional[str] = None


class ProjectRead(ProjectBase):
    id: int
    images: List[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectPagination(BaseModel):
    page: int
    pageSize: int
    total: int
    totalPages: int


class ProjectListResponse(BaseModel):
    data: List[ProjectRead]
    pagination: ProjectPagination
