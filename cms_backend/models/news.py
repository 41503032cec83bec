# File: cms_backend/models/news.py

from sqlalchemy import Boolean, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from cms_backend.models.base import Base, TimestampMixin

DEFAULT_NEWS_TYPE = "news"


class News(TimestampMixin, Base):
    __tablename__ = "news"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    short_intro: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    # Free-text category
    type: Mapped[str] = mapped_column(
        String(100), nullable=False, default=DEFAULT_NEWS_TYPE, server_default=DEFAULT_NEWS_TYPE
    )
