"""
Schemas module - Request/Response schemas for API endpoints.
"""

from jobboard.schemas.schemas import UserRole

__all__ = ["UserRole"]
