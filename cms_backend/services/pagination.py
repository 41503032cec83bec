# File: cms_backend/services/pagination.py

import math
from dataclasses import dataclass
from typing import Any, List

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


@dataclass
class Page:
    items: List[Any]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total / self.size)


def count_rows(db: Session, stmt: Select) -> int:
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    return db.scalar(count_stmt) or 0


def paginate(db: Session, stmt: Select, page: int, size: int) -> Page:
    """
    Run ``stmt`` for one page. ``page`` is 1-based.
    """
    total = count_rows(db, stmt)
    offset = (page - 1) * size
    items = list(db.scalars(stmt.limit(size).offset(offset)).all())
    return Page(items=items, total=total, page=page, size=size)
