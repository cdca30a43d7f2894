"""
API routes.
"""

from fastapi import APIRouter

from gadgetops.api.routes import auth, gadgets
from gadgetops.schemas.common import ErrorResponse

router = APIRouter(responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}})

router.include_router(auth.router, tags=["Auth"])
router.include_router(
    gadgets.router,
    prefix="/gadgets",
    tags=["Gadgets"],
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
