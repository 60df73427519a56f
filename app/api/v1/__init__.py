"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, catalog, forms, health, proposals, templates, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(forms.router, prefix="/form-structure", tags=["form-structure"])
router.include_router(catalog.router, prefix="/services", tags=["services"])
router.include_router(proposals.router, prefix="/proposals", tags=["proposals"])
router.include_router(templates.router, prefix="/template", tags=["template"])
