"""
Pydantic schemas for authentication endpoints.
"""
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from chatrelay.models.user import User, UserRole

# Older clients send "real"/"ai"
ROLE_ALIASES = {"real": UserRole.HUMAN, "ai": UserRole.AGENT}

__all__ = ["RegisterIn", "LoginIn", "UserOut", "user_to_dict"]


class RegisterIn(BaseModel):
    username: str
    password: str
    role: UserRole = UserRole.HUMAN
    profile: Optional[Any] = None

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value):
        if isinstance(value, str):
            return ROLE_ALIASES.get(value.lower(), value.lower())
        return value


class LoginIn(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    """
    User record as returned to clients. Never carries the password hash;
    sessionToken is only filled in by the login endpoint.
    """
    id: int
    username: str
    role: UserRole
    profile: Optional[Any] = None
    createdAt: str
    sessionToken: Optional[str] = None


def user_to_dict(u: User, include_token: bool = False) -> dict:
    return UserOut(
        id=u.id,
        username=u.username,
        role=u.role,
        profile=u.agent_profile,
        createdAt=u.created_at.isoformat(),
        sessionToken=u.session_token if include_token else None,
    ).model_dump(mode="json")
