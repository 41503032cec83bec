# File: cms_backend/services/project_service.py

"""
Project persistence.

These functions only talk to the database. Files are written and removed
by the caller through ``ImageStore``.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from cms_backend.models.project import Project
from cms_backend.services.area_service import resolve_area_ids
from cms_backend.services.pagination import Page, paginate


def list_projects(
    db: Session,
    *,
    page: int,
    page_size: int,
    area: Optional[str] = None,
    area_strategy: str = "sql",
) -> Page:
    stmt = select(Project).order_by(Project.created_at.desc(), Project.id.desc())
    if area:
        area_ids = resolve_area_ids(db, area, area_strategy)
        if not area_ids:
            return Page(items=[], total=0, page=page, size=page_size)
        stmt = stmt.where(Project.areas.in_(sorted(area_ids)))
    return paginate(db, stmt, page, page_size)


def get_project(db: Session, project_id: int) -> Optional[Project]:
    return db.get(Project, project_id)


def create_project(
    db: Session,
    *,
    name: str,
    areas: Optional[str],
    detail: Optional[str],
    images: List[str],
) -> Project:
    project = Project(name=name, areas=areas, detail=detail, images=list(images))
    db.add(project)
    db.commit()
    db.refresh(project)
    return project


def update_project(
    db: Session,
    project: Project,
    *,
    name: Optional[str],
    areas: Optional[str],
    detail: Optional[str],
    new_images: List[str],
) -> Project:
    """
    Merge supplied fields over ``project``; ``new_images`` are appended.
    """
    if name:
        project.name = name
    if areas is not None:
        project.areas = areas
    if detail is not None:
        project.detail = detail
    # Assign a new list so the JSON column is flagged dirty
    project.images = [*(project.images or []), *new_images]
    project.updated_at = func.now()
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project: Project) -> List[str]:
    """Delete the row and return the image filenames it referenced."""
    images = list(project.images or [])
    db.delete(project)
    db.commit()
    return images
