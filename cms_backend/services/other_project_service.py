# File: cms_backend/services/other_project_service.py

from typing import List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from cms_backend.models.other_project import OtherProject
from cms_backend.services.pagination import Page, paginate


def _filtered(is_featured: Optional[bool]) -> Select:
    stmt = select(OtherProject)
    if is_featured is not None:
        stmt = stmt.where(OtherProject.is_featured == is_featured)
    return stmt.order_by(OtherProject.created_at.desc(), OtherProject.id.desc())


def list_all(db: Session, *, is_featured: Optional[bool] = None) -> List[OtherProject]:
    return list(db.scalars(_filtered(is_featured)).all())


def list_page(
    db: Session,
    *,
    page: int,
    limit: int,
    is_featured: Optional[bool] = None,
) -> Page:
    return paginate(db, _filtered(is_featured), page, limit)


def get_other_project(db: Session, other_project_id: int) -> Optional[OtherProject]:
    return db.get(OtherProject, other_project_id)


def create_other_project(
    db: Session,
    *,
    name: str,
    main_image: Optional[str],
    short_intro: Optional[str],
    detail: Optional[str],
    is_featured: bool,
) -> OtherProject:
    item = OtherProject(
        name=name,
        main_image=main_image,
        short_intro=short_intro,
        detail=detail,
        is_featured=is_featured,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_other_project(
    db: Session,
    item: OtherProject,
    *,
    name: Optional[str],
    short_intro: Optional[str],
    detail: Optional[str],
    is_featured: Optional[bool],
    main_image: Optional[str],
) -> OtherProject:
    """
    Coalesce supplied fields over ``item``.

    ``main_image`` is written as given; the caller decides whether it is
    the existing name or a freshly uploaded one.
    """
    if name:
        item.name = name
    if short_intro is not None:
        item.short_intro = short_intro
    if detail is not None:
        item.detail = detail
    if is_featured is not None:
        item.is_featured = is_featured
    item.main_image = main_image
    item.updated_at = func.now()
    db.commit()
    db.refresh(item)
    return item


def delete_other_project(db: Session, item: OtherProject) -> Optional[str]:
    main_image = item.main_image
    db.delete(item)
    db.commit()
    return main_image
