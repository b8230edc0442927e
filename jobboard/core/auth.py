"""
Authentication Utility - JWT, cookies and password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- Auth cookie helpers
- FastAPI dependency for protected routes (token read from the cookie)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, Request, Response
from jose import JWTError, jwt

from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import UnauthorizedError
from jobboard.db.mongodb import MongoConnection, get_mongo
from jobboard.services.mongo_service import UserService

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and verify JWT token. Returns None on bad signature or expiry."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.cookie_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def issue_token(response: Response, user: dict, settings: Settings) -> str:
    """Sign a token for `user` and attach it to the response as the auth cookie."""
    token = create_access_token(data={"sub": str(user["_id"]), "role": user["role"]}, settings=settings)
    set_auth_cookie(response, token, settings)
    return token


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency - the Settings instance the app was built with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_current_user(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    mongo: MongoConnection = Depends(get_mongo),
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Reads the token from the auth cookie, verifies it and loads the user
    (without the password hash).

    Usage:
        @router.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    token = request.cookies.get(settings.cookie_name)
    if not token:
        raise UnauthorizedError("User Not Authorized")

    payload = decode_token(token, settings)
    if not payload or not payload.get("sub"):
        raise UnauthorizedError("Invalid or expired token")

    try:
        user_id = ObjectId(payload["sub"])
    except InvalidId:
        raise UnauthorizedError("Invalid or expired token")

    user = UserService(mongo).get_by_id(user_id)
    if not user:
        logger.info("Token subject %s no longer exists", user_id)
        raise UnauthorizedError("User Not Authorized")

    return user
