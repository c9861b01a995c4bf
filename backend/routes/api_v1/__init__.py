"""API v1: meta endpoints."""

from fastapi import APIRouter

from .meta import router as meta_router

router = APIRouter(prefix="/api/v1", tags=["api_v1"])
router.include_router(meta_router)

api_v1_router = router
