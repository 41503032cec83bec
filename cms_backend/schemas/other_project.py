# File: cms_backend/schemas/other_project.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class OtherProjectRead(BaseModel):
    id: int
    name: str
    main_image: Optional[str] = None
    short_intro: Optional[str] = None
    detail: Optional[str] = None
    is_featured: bool = False
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class OtherProjectPage(BaseModel):
    data: List[OtherProjectRead]
    total: int
    page: int
    totalPages: int
