# File: cms_backend/models/project.py

"""
Project model.

``areas`` holds a single area id stored as text; ``images`` is the ordered
list of uploaded filenames, appended to on every update.
"""

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from cms_backend.models.base import Base, TimestampMixin


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    areas: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    detail: Mapped[str | None] = mapped_column(Text, nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
