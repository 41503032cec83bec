from fastapi import APIRouter

from cms_backend.api.v1.routes_news import router as news_router
from cms_backend.api.v1.routes_other_projects import router as other_projects_router
from cms_backend.api.v1.routes_projects import router as projects_router


api_router = APIRouter()

api_router.include_router(projects_router, prefix="/projects")
api_router.include_router(other_projects_router, prefix="/other-projects")
api_router.include_router(news_router, prefix="/news")
