# File: cms_backend/models/other_project.py

from sqlalchemy import Boolean, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from cms_backend.models.base import Base, TimestampMixin


class OtherProject(TimestampMixin, Base):
    __tablename__ = "other_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    main_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    short_intro: Mapped[str | None] = mapped_column(Text, nullable=True)
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
