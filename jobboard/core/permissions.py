"""
Route permissions - which roles may call which protected route.

Every role-gated route declares `Depends(require_permission("<route name>"))`
and the check is made here, before the handler body runs, against the table
below. Routes that only need a logged-in user use get_current_user directly.
"""

from typing import Callable, Dict, FrozenSet

from fastapi import Depends

from jobboard.core.auth import get_current_user
from jobboard.core.errors import BadRequestError
from jobboard.schemas.schemas import UserRole

EMPLOYER = frozenset({UserRole.employer})
JOB_SEEKER = frozenset({UserRole.job_seeker})

ROUTE_PERMISSIONS: Dict[str, FrozenSet[UserRole]] = {
    "job:post": EMPLOYER,
    "job:getmyjobs": EMPLOYER,
    "job:update": EMPLOYER,
    "job:delete": EMPLOYER,
    "application:post": JOB_SEEKER,
    "application:employer:getall": EMPLOYER,
    "application:jobseeker:getall": JOB_SEEKER,
    "application:delete": JOB_SEEKER,
}


def is_allowed(route_name: str, role: str) -> bool:
    """True if `role` may call `route_name`. Unknown routes allow nobody."""
    allowed = ROUTE_PERMISSIONS.get(route_name, frozenset())
    return any(role == r.value for r in allowed)


def require_permission(route_name: str) -> Callable[..., dict]:
    """
    Dependency factory - authenticated user whose role may call `route_name`.

    Usage:
        @router.post("/post")
        def post_job(user: dict = Depends(require_permission("job:post"))):
            ...
    """
    if route_name not in ROUTE_PERMISSIONS:
        raise KeyError(f"No permission entry for route '{route_name}'")

    def dependency(user: dict = Depends(get_current_user)) -> dict:
        if not is_allowed(route_name, user["role"]):
            raise BadRequestError(f"{user['role']} not allowed to access this resource.")
        return user

    return dependency
