"""
Top-level router for version 1 of the API.

Aggregates the domain routers under one prefix.  Add new domains here.
"""

from fastapi import APIRouter

from .endpoints import admin, auth, catalog, health, orders, reviews

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(catalog.router, prefix="/services", tags=["services"])
router.include_router(orders.router, prefix="/orders", tags=["orders"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(health.router, prefix="/health", tags=["health"])
