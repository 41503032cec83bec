# File: cms_backend/api/v1/routes_other_projects.py

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.datastructures import FormData

from cms_backend.api.deps import get_app_settings, get_db, get_image_store
from cms_backend.api.forms import form_files, form_text, get_form
from cms_backend.core.config import Settings
from cms_backend.core.errors import BadRequestError, NotFoundError
from cms_backend.core.params import parse_boolish_flag, parse_int, parse_positive_int
from cms_backend.schemas.common import MessageResponse
from cms_backend.schemas.other_project import OtherProjectPage, OtherProjectRead
from cms_backend.services import other_project_service
from cms_backend.services.upload_service import (
    WEB_IMAGE_EXTENSIONS,
    ImageStore,
    UploadPolicy,
    check_field_sizes,
    stage_uploads,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["other-projects"])


def upload_policy(settings: Settings) -> UploadPolicy:
    return UploadPolicy(
        field="main_image",
        allowed_extensions=WEB_IMAGE_EXTENSIONS,
        max_file_size=settings.max_image_size,
        max_files=1,
        max_field_size=settings.max_field_size,
    )


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get(
    "",
    response_model=Union[OtherProjectPage, List[OtherProjectRead]],
    summary="List other projects",
)
def list_other_projects(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None, description="Page size; omit for the full list"),
    is_featured: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Without a positive ``limit`` the full list is returned as a plain array.
    With one, a page envelope ``{data, total, page, totalPages}`` is returned.
    """
    page_num = parse_positive_int(page, 1)
    limit_num = parse_int(limit) or 0
    featured = None if is_featured is None else parse_boolish_flag(is_featured)

    try:
        if limit_num > 0:
            result = other_project_service.list_page(
                db, page=page_num, limit=limit_num, is_featured=featured
            )
            return OtherProjectPage(
                data=[OtherProjectRead.model_validate(p) for p in result.items],
                total=result.total,
                page=result.page,
                totalPages=result.total_pages,
            )
        return other_project_service.list_all(db, is_featured=featured)
    except SQLAlchemyError:
        logger.exception("Error fetching other projects")
        raise _server_error("Failed to fetch other projects")


@router.get("/{other_project_id}", response_model=OtherProjectRead, summary="Get an other project")
def get_other_project(other_project_id: int, db: Session = Depends(get_db)):
    try:
        item = other_project_service.get_other_project(db, other_project_id)
    except SQLAlchemyError:
        logger.exception("Error fetching other project %s", other_project_id)
        raise _server_error("Failed to fetch other project")
    if item is None:
        raise NotFoundError("Other project not found")
    return item


@router.post(
    "",
    response_model=OtherProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an other project",
)
def create_other_project(
    form: FormData = Depends(get_form),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    store: ImageStore = Depends(get_image_store),
):
    """Form fields: ``name`` (required), ``short_intro``, ``detail``, ``is_featured``, ``main_image``."""
    name = form_text(form, "name")
    short_intro = form_text(form, "short_intro")
    detail = form_text(form, "detail")
    is_featured = form_text(form, "is_featured")
    main_image = form_files(form, "main_image")

    policy = upload_policy(settings)
    check_field_sizes(policy, name=name, short_intro=short_intro, detail=detail)
    staged = stage_uploads(main_image, policy)
    if not name:
        raise BadRequestError("Name is required")

    try:
        filename = store.save(staged[0]) if staged else None
        item = other_project_service.create_other_project(
            db,
            name=name,
            main_image=filename,
            short_intro=short_intro,
            detail=detail,
            is_featured=parse_boolish_flag(is_featured),
        )
    except (SQLAlchemyError, OSError):
        logger.exception("Error creating other project")
        raise _server_error("Failed to create other project")
    return item


@router.put("/{other_project_id}", response_model=OtherProjectRead, summary="Update an other project")
def update_other_project(
    other_project_id: int,
    form: FormData = Depends(get_form),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    store: ImageStore = Depends(get_image_store),
):
    """
    Fields left out keep their stored value. A new ``main_image`` replaces
    the old one, whose file is removed from the upload directory.
    """
    name = form_text(form, "name")
    short_intro = form_text(form, "short_intro")
    detail = form_text(form, "detail")
    is_featured = form_text(form, "is_featured")
    main_image = form_files(form, "main_image")

    policy = upload_policy(settings)
    check_field_sizes(policy, name=name, short_intro=short_intro, detail=detail)
    staged = stage_uploads(main_image, policy)

    try:
        item = other_project_service.get_other_project(db, other_project_id)
        if item is None:
            raise NotFoundError("Other project not found")

        old_image = item.main_image
        new_image = store.save(staged[0]) if staged else old_image
        item = other_project_service.update_other_project(
            db,
            item,
            name=name,
            short_intro=short_intro,
            detail=detail,
            is_featured=None if is_featured is None else parse_boolish_flag(is_featured),
            main_image=new_image,
        )
    except (SQLAlchemyError, OSError):
        logger.exception("Error updating other project %s", other_project_id)
        raise _server_error("Failed to update other project")

    if staged and old_image:
        store.delete(old_image)
    return item


@router.delete("/{other_project_id}", response_model=MessageResponse, summary="Delete an other project")
def delete_other_project(
    other_project_id: int,
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    try:
        item = other_project_service.get_other_project(db, other_project_id)
        if item is None:
            raise NotFoundError("Other project not found")
        main_image = other_project_service.delete_other_project(db, item)
    except SQLAlchemyError:
        logger.exception("Error deleting other project %s", other_project_id)
        raise _server_error("Failed to delete other project")

    store.delete(main_image)
    return MessageResponse(message="Other project deleted successfully")
