"""
API route composition.

Provides a shared APIRouter instance for organizing route modules.
"""

from fastapi import APIRouter

from .plan import router as plan_router

# Shared router for all API routes
api_router = APIRouter()

api_router.include_router(plan_router, tags=["plan"])
