"""
Top-level router.

This router aggregates the domain routers.  Routes are served at the
site root without a version prefix because the HTML form posts to the
bare ``/customers`` path.
"""

from fastapi import APIRouter

from .endpoints import customers, index

router = APIRouter()

router.include_router(index.router, tags=["index"])
router.include_router(customers.router, tags=["customers"])
