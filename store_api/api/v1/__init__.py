"""API v1 routes."""

from fastapi import APIRouter

from store_api.api.v1 import admin, auth, health, products

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
