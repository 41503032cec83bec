# File: cms_backend/api/v1/routes_projects.py

"""
Project endpoints.

Projects carry a list of images; new uploads on update are appended to it
and every file is removed when the project is deleted.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.datastructures import FormData

from cms_backend.api.deps import get_app_settings, get_db, get_image_store
from cms_backend.api.forms import form_files, form_text, get_form
from cms_backend.core.config import Settings
from cms_backend.core.errors import BadRequestError, NotFoundError
from cms_backend.core.params import parse_positive_int
from cms_backend.schemas.common import MessageResponse
from cms_backend.schemas.project import ProjectListResponse, ProjectPagination, ProjectRead
from cms_backend.services import project_service
from cms_backend.services.upload_service import (
    BASE_IMAGE_EXTENSIONS,
    ImageStore,
    UploadPolicy,
    check_field_sizes,
    stage_uploads,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["projects"])

DEFAULT_PAGE_SIZE = 10


def upload_policy(settings: Settings) -> UploadPolicy:
    return UploadPolicy(
        field="images",
        allowed_extensions=BASE_IMAGE_EXTENSIONS,
        max_file_size=settings.max_image_size,
        max_files=settings.max_project_images,
        max_field_size=settings.max_field_size,
    )


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=ProjectListResponse, summary="List projects")
def list_projects(
    areas: Optional[str] = Query(None, description="Area id; its sub-areas are included"),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    page_num = parse_positive_int(page, 1)
    size_num = parse_positive_int(page_size, DEFAULT_PAGE_SIZE)
    try:
        result = project_service.list_projects(
            db,
            page=page_num,
            page_size=size_num,
            area=areas,
            area_strategy=settings.area_resolver,
        )
    except SQLAlchemyError:
        logger.exception("Error fetching projects")
        raise _server_error("Failed to fetch projects")

    return ProjectListResponse(
        data=[ProjectRead.model_validate(p) for p in result.items],
        pagination=ProjectPagination(
            page=result.page,
            pageSize=result.size,
            total=result.total,
            totalPages=result.total_pages,
        ),
    )


@router.get("/{project_id}", response_model=ProjectRead, summary="Get a project")
def get_project(project_id: int, db: Session = Depends(get_db)):
    try:
        project = project_service.get_project(db, project_id)
    except SQLAlchemyError:
        logger.exception("Error fetching project %s", project_id)
        raise _server_error("Failed to fetch project")
    if project is None:
        raise NotFoundError("Project not found")
    return project


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
)
def create_project(
    form: FormData = Depends(get_form),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    store: ImageStore = Depends(get_image_store),
):
    """Form fields: ``name`` (required), ``areas``, ``detail``, repeatable ``images``."""
    name = form_text(form, "name")
    areas = form_text(form, "areas")
    detail = form_text(form, "detail")
    images = form_files(form, "images")

    policy = upload_policy(settings)
    check_field_sizes(policy, name=name, areas=areas, detail=detail)
    staged = stage_uploads(images, policy)
    if not name:
        raise BadRequestError("Name is required")

    try:
        filenames = store.save_all(staged)
        project = project_service.create_project(
            db, name=name, areas=areas, detail=detail, images=filenames
        )
    except (SQLAlchemyError, OSError):
        logger.exception("Error creating project")
        raise _server_error("Failed to create project")

    logger.info("Created project %s with %d image(s)", project.id, len(filenames))
    return project


@router.put("/{project_id}", response_model=ProjectRead, summary="Update a project")
def update_project(
    project_id: int,
    form: FormData = Depends(get_form),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    store: ImageStore = Depends(get_image_store),
):
    name = form_text(form, "name")
    areas = form_text(form, "areas")
    detail = form_text(form, "detail")
    images = form_files(form, "images")

    policy = upload_policy(settings)
    check_field_sizes(policy, name=name, areas=areas, detail=detail)
    staged = stage_uploads(images, policy)

    try:
        project = project_service.get_project(db, project_id)
        if project is None:
            raise NotFoundError("Project not found")
        new_images = store.save_all(staged)
        project = project_service.update_project(
            db, project, name=name, areas=areas, detail=detail, new_images=new_images
        )
    except (SQLAlchemyError, OSError):
        logger.exception("Error updating project %s", project_id)
        raise _server_error("Failed to update project")
    return project


@router.delete("/{project_id}", response_model=MessageResponse, summary="Delete a project")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    try:
        project = project_service.get_project(db, project_id)
        if project is None:
            raise NotFoundError("Project not found")
        images = project_service.delete_project(db, project)
    except SQLAlchemyError:
        logger.exception("Error deleting project %s", project_id)
        raise _server_error("Failed to delete project")

    store.delete_all(images)
    return MessageResponse(message="Project deleted successfully")
