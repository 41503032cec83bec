# File: cms_backend/services/news_service.py

from typing import List, Optional

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from cms_backend.models.news import DEFAULT_NEWS_TYPE, News
from cms_backend.services.pagination import Page, paginate


def _filtered(is_featured: Optional[bool], news_type: Optional[str]) -> Select:
    stmt = select(News)
    if is_featured is not None:
        stmt = stmt.where(News.is_featured == is_featured)
    if news_type:
        stmt = stmt.where(News.type == news_type)
    return stmt.order_by(News.created_at.desc(), News.id.desc())


def list_all(
    db: Session,
    *,
    is_featured: Optional[bool] = None,
    news_type: Optional[str] = None,
) -> List[News]:
    return list(db.scalars(_filtered(is_featured, news_type)).all())


def list_page(
    db: Session,
    *,
    page: int,
    limit: int,
    is_featured: Optional[bool] = None,
    news_type: Optional[str] = None,
) -> Page:
    return paginate(db, _filtered(is_featured, news_type), page, limit)


def get_news(db: Session, news_id: int) -> Optional[News]:
    return db.get(News, news_id)


def create_news(
    db: Session,
    *,
    title: str,
    content: Optional[str],
    image: Optional[str],
    short_intro: Optional[str],
    is_featured: bool,
    news_type: Optional[str],
) -> News:
    item = News(
        title=title,
        content=content,
        image=image,
        short_intro=short_intro,
        is_featured=is_featured,
        type=news_type or DEFAULT_NEWS_TYPE,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_news(
    db: Session,
    item: News,
    *,
    title: Optional[str],
    content: Optional[str],
    short_intro: Optional[str],
    is_featured: Optional[bool],
    news_type: Optional[str],
    image: Optional[str],
) -> News:
    if title:
        item.title = title
    if content is not None:
        item.content = content
    if short_intro is not None:
        item.short_intro = short_intro
    if is_featured is not None:
        item.is_featured = is_featured
    item.type = news_type or item.type or DEFAULT_NEWS_TYPE
    item.image = image
    item.updated_at = func.now()
    db.commit()
    db.refresh(item)
    return item


def delete_news(db: Session, item: News) -> Optional[str]:
    image = item.image
    db.delete(item)
    db.commit()
    return image
