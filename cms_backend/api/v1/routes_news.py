# File: cms_backend/api/v1/routes_news.py

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
from cms_backend.schemas.news import NewsPage, NewsRead
from cms_backend.services import news_service
from cms_backend.services.upload_service import (
    WEB_IMAGE_EXTENSIONS,
    ImageStore,
    UploadPolicy,
    check_field_sizes,
    stage_uploads,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["news"])


def upload_policy(settings: Settings) -> UploadPolicy:
    return UploadPolicy(
        field="image",
        allowed_extensions=WEB_IMAGE_EXTENSIONS,
        max_file_size=settings.news_max_image_size,
        max_files=1,
        max_field_size=settings.max_field_size,
    )


def _server_error(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


@router.get("", response_model=Union[NewsPage, List[NewsRead]], summary="List news")
def list_news(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    is_featured: Optional[str] = Query(None),
    news_type: Optional[str] = Query(None, alias="type"),
    db: Session = Depends(get_db),
):
    page_num = parse_positive_int(page, 1)
    limit_num = parse_int(limit) or 0
    featured = None if is_featured is None else parse_boolish_flag(is_featured)

    try:
        if limit_num > 0:
            result = news_service.list_page(
                db, page=page_num, limit=limit_num, is_featured=featured, news_type=news_type
            )
            return NewsPage(
                data=[NewsRead.model_validate(n) for n in result.items],
                total=result.total,
                page=result.page,
                totalPages=result.total_pages,
            )
        return news_service.list_all(db, is_featured=featured, news_type=news_type)
    except SQLAlchemyError:
        logger.exception("Error fetching news")
        raise _server_error("Failed to fetch news")


@router.get("/{news_id}", response_model=NewsRead, summary="Get a news item")
def get_news(news_id: int, db: Session = Depends(get_db)):
    try:
        item = news_service.get_news(db, news_id)
    except SQLAlchemyError:
        logger.exception("Error fetching news %s", news_id)
        raise _server_error("Failed to fetch news")
    if item is None:
        raise NotFoundError("News not found")
    return item


@router.post(
    "",
    response_model=NewsRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a news item",
)
def create_news(
    form: FormData = Depends(get_form),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    store: ImageStore = Depends(get_image_store),
):
    """Form fields: ``title`` (required), ``content``, ``short_intro``, ``is_featured``, ``type``, ``image``."""
    title = form_text(form, "title")
    content = form_text(form, "content")
    short_intro = form_text(form, "short_intro")
    is_featured = form_text(form, "is_featured")
    news_type = form_text(form, "type")
    image = form_files(form, "image")

    policy = upload_policy(settings)
    check_field_sizes(
        policy, title=title, content=content, short_intro=short_intro, type=news_type
    )
    staged = stage_uploads(image, policy)
    if not title:
        raise BadRequestError("Title is required")

    try:
        filename = store.save(staged[0]) if staged else None
        item = news_service.create_news(
            db,
            title=title,
            content=content,
            image=filename,
            short_intro=short_intro,
            is_featured=parse_boolish_flag(is_featured),
            news_type=news_type,
        )
    except (SQLAlchemyError, OSError):
        logger.exception("Error creating news")
        raise _server_error("Failed to create news")
    return item


@router.put("/{news_id}", response_model=NewsRead, summary="Update a news item")
def update_news(
    news_id: int,
    form: FormData = Depends(get_form),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    store: ImageStore = Depends(get_image_store),
):
    title = form_text(form, "title")
    content = form_text(form, "content")
    short_intro = form_text(form, "short_intro")
    is_featured = form_text(form, "is_featured")
    news_type = form_text(form, "type")
    image = form_files(form, "image")

    policy = upload_policy(settings)
    check_field_sizes(
        policy, title=title, content=content, short_intro=short_intro, type=news_type
    )
    staged = stage_uploads(image, policy)

    try:
        item = news_service.get_news(db, news_id)
        if item is None:
            raise NotFoundError("News not found")

        old_image = item.image
        new_image = store.save(staged[0]) if staged else old_image
        item = news_service.update_news(
            db,
            item,
            title=title,
            content=content,
            short_intro=short_intro,
            is_featured=None if is_featured is None else parse_boolish_flag(is_featured),
            news_type=news_type,
            image=new_image,
        )
    except (SQLAlchemyError, OSError):
        logger.exception("Error updating news %s", news_id)
        raise _server_error("Failed to update news")

    if staged and old_image:
        store.delete(old_image)
    return item


@router.delete("/{news_id}", response_model=MessageResponse, summary="Delete a news item")
def delete_news(
    news_id: int,
    db: Session = Depends(get_db),
    store: ImageStore = Depends(get_image_store),
):
    try:
        item = news_service.get_news(db, news_id)
        if item is None:
            raise NotFoundError("News not found")
        image = news_service.delete_news(db, item)
    except SQLAlchemyError:
        logger.exception("Error deleting news %s", news_id)
        raise _server_error("Failed to delete news")

    store.delete(image)
    return MessageResponse(message="News deleted successfully")
