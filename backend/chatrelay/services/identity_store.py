"""
Identity Store

Owns the User lifecycle: creation at registration, session token
rotation at login, and the lookups the relay needs.
"""
import logging
from typing import Any, List, Optional

from tortoise.exceptions import (
    ConfigurationError,
    DBConnectionError,
    IntegrityError,
    OperationalError,
)

from ..core.errors import StorageUnavailable, UsernameTaken
from ..core.security import new_session_token
from ..models.user import User, UserRole

logger = logging.getLogger("uvicorn.error")

# Tortoise raises these when the database cannot serve a query
STORAGE_ERRORS = (OperationalError, DBConnectionError, ConfigurationError)


class IdentityStore:
    """Tortoise-backed user repository"""

    async def find_by_username(self, username: str) -> Optional[User]:
        """Exact match on username; None when absent."""
        try:
            return await User.get_or_none(username=username)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def find_by_session_token(self, token: Optional[str]) -> Optional[User]:
        """Exact match against the live token field; None when absent or empty."""
        if not token:
            return None
        try:
            return await User.get_or_none(session_token=token)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def get(self, user_id: int) -> Optional[User]:
        try:
            return await User.get_or_none(id=user_id)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def create(
        self,
        username: str,
        password_hash: str,
        role: UserRole,
        profile: Optional[Any] = None,
    ) -> User:
        """
        Insert a new user.

        Raises:
            UsernameTaken: the username is already registered
            StorageUnavailable: the database failed
        """
        try:
            return await User.create(
                username=username,
                password_hash=password_hash,
                role=UserRole(role),
                agent_profile=profile,
                session_token=None,
            )
        except IntegrityError as e:
            raise UsernameTaken(username) from e
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def issue_session_token(self, user_id: int) -> str:
        """
        Generate a fresh token and make it the user's only live token.

        The previous token stops matching as soon as the update commits.
        Concurrent logins for one user are last-write-wins.
        """
        token = new_session_token()
        try:
            updated = await User.filter(id=user_id).update(session_token=token)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e
        if not updated:
            raise StorageUnavailable(f"user {user_id} disappeared during login")
        return token

    async def list_agents(self) -> List[User]:
        """Snapshot of every agent-role user, in id order."""
        try:
            return await User.filter(role=UserRole.AGENT).order_by("id")
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e
