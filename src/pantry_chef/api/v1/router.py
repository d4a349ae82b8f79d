"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under the configured ``api.v1_prefix``.
"""

from __future__ import annotations

from fastapi import APIRouter

from pantry_chef.api.v1.endpoints import generate, health, recipes, root


router = APIRouter()

router.include_router(root.router)
router.include_router(health.router)
router.include_router(generate.router)
router.include_router(recipes.router)
