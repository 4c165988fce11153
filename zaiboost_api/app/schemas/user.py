"""
Pydantic models for registration, login and the identity returned with
a token.
"""

from pydantic import BaseModel, Field

from ..models import Role


class Credentials(BaseModel):
    """Username and password sent to ``/auth/register`` and ``/auth/login``.

    Length rules are checked by ``UserService`` so that they produce the
    same error messages as other registration failures.
    """

    username: str = Field(..., min_length=1, examples=["traveler"])
    password: str = Field(..., min_length=1, examples=["paimon123"])


class UserRead(BaseModel):
    id: int
    username: str
    role: Role


class AuthResponse(UserRead):
    """Identity of the authenticated user together with a bearer token."""

    token: str
    token_type: str = "bearer"
