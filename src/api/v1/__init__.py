"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.lists import router as lists_router
from api.v1.routes.tasks import router as tasks_router
from api.v1.routes.views import router as views_router

router = APIRouter()
router.include_router(tasks_router)
router.include_router(lists_router)
router.include_router(views_router)
