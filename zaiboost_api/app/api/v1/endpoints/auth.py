"""
Registration and login endpoints for API v1.

Both return the user's identity together with a bearer token that is
valid for ``TOKEN_EXPIRE_HOURS`` (72 by default).
"""

from fastapi import APIRouter, HTTPException, status

from zaiboost_api.app.core.security import create_access_token
from zaiboost_api.app.models import User
from zaiboost_api.app.schemas.user import AuthResponse, Credentials
from zaiboost_api.app.services.user_service import UserService

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    claims = {"id": user.id, "username": user.username, "role": user.role}
    return AuthResponse(**claims, token=create_access_token(claims))


@router.post("/register", response_model=AuthResponse)
async def register(credentials: Credentials) -> AuthResponse:
    """Create a customer account and sign it in."""
    user = await UserService.register(credentials.username, credentials.password)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: Credentials) -> AuthResponse:
    """Exchange a username and password for a token."""
    user = await UserService.authenticate(credentials.username, credentials.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    return _auth_response(user)
