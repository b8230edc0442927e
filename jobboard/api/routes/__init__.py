"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from jobboard.api.routes.user_routes import router as user_router
from jobboard.api.routes.job_routes import router as job_router
from jobboard.api.routes.application_routes import router as application_router
from jobboard.schemas.schemas import ErrorResponse

# Documented error bodies, all produced by jobboard.core.errors
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing/invalid fields or role not allowed"},
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired auth cookie"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

# Main API router
api_router = APIRouter(responses=ERROR_RESPONSES)

# Include all sub-routers
api_router.include_router(user_router, responses={409: {"model": ErrorResponse, "description": "Email already registered"}})
api_router.include_router(job_router)
api_router.include_router(application_router)
