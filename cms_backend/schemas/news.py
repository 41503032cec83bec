# File: cms_backend/schemas/news.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class NewsRead(BaseModel):
    id: int
    title: str
    image: Optional[str] = None
    short_intro: Optional[str] = None
    content: Optional[str] = None
    is_featured: bool = False
    type: str = "news"
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class NewsPage(BaseModel):
    data: List[NewsRead]
    total: int
    page: int
    totalPages: int
