# File: cms_backend/models/area.py

"""
Area model.

Areas form a tree through ``parent_id``. They are maintained outside this
service and only read here to expand an area filter to its descendants.
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from cms_backend.models.base import Base


class Area(Base):
    __tablename__ = "areas"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("areas.id"), nullable=True, index=True
    )
