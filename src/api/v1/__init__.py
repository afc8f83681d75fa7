"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.auth import router as auth_router
from api.v1.routes.comments import router as comments_router
from api.v1.routes.follows import router as follows_router
from api.v1.routes.posts import router as posts_router
from api.v1.routes.users import router as users_router

router = APIRouter()
router.include_router(auth_router)
router.include_router(users_router)
router.include_router(follows_router)
router.include_router(posts_router)
router.include_router(comments_router)
