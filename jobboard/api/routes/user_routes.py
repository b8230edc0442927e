"""
User Routes

POST /users/register - Register and receive the auth cookie
POST /users/login - Login and receive the auth cookie
GET /users/logout - Clear the auth cookie
GET /users/getuser - Get current user info
"""

import logging

from fastapi import APIRouter, Depends, Response

from jobboard.core.auth import (
    clear_auth_cookie, get_app_settings, get_current_user, hash_password, issue_token, verify_password
)
from jobboard.core.config import Settings
from jobboard.core.errors import ConflictError, NotFoundError, UnauthorizedError
from jobboard.schemas.schemas import (
    LoginRequest, MessageResponse, RegisterRequest, UserResponse
)
from jobboard.services.mongo_service import UserService, get_user_service, serialize_doc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/register", response_model=UserResponse, response_model_exclude_none=True, status_code=201)
def register(
    request: RegisterRequest,
    response: Response,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register a new user account.

    The response sets the HTTP-only auth cookie, so the user is logged in.
    """
    if users.email_exists(request.email):
        raise ConflictError("Email already registered!")

    user = users.create(
        name=request.name,
        email=request.email,
        phone=request.phone,
        password_hash=hash_password(request.password),
        role=request.role.value,
    )
    issue_token(response, user, settings)
    logger.info("Registered %s as %s", user["_id"], user["role"])

    return {"success": True, "message": "User Registered!", "user": serialize_doc(user)}


@router.post("/login", response_model=UserResponse, response_model_exclude_none=True, status_code=201)
def login(
    request: LoginRequest,
    response: Response,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_app_settings),
):
    """Login with email, password and role; sets the auth cookie."""
    user = users.get_for_login(request.email, request.role.value)
    if not user:
        raise NotFoundError(f"User with provided email and {request.role.value} not found!")

    if not verify_password(request.password, user.pop("password")):
        raise UnauthorizedError("Invalid Email Or Password.")

    issue_token(response, user, settings)
    logger.info("User %s logged in", user["_id"])

    return {"success": True, "message": "User Logged In!", "user": serialize_doc(user)}


@router.get("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    user: dict = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
):
    """Clear the auth cookie."""
    clear_auth_cookie(response, settings)
    return MessageResponse(message="Logged Out Successfully.")


@router.get("/getuser", response_model=UserResponse, response_model_exclude_none=True)
def get_user(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return {"success": True, "user": serialize_doc(user)}
