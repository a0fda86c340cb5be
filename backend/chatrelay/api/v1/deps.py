# chatrelay/api/v1/deps.py
from fastapi import Depends, Header, HTTPException, status

from chatrelay.models.user import User
from chatrelay.services.generation_factory import get_generation_service
from chatrelay.services.identity_store import IdentityStore
from chatrelay.services.message_log import MessageLog
from chatrelay.services.relay import ConversationRelay
from chatrelay.services.responder_selector import ResponderSelector


def get_bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """
    Extract the session token from an "Authorization: Bearer xxx" header.
    Returns None when the header is missing or uses another scheme.
    """
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization.split(" ", 1)[1].strip()
        return token or None
    return None


def get_identity_store() -> IdentityStore:
    return IdentityStore()


def get_message_log() -> MessageLog:
    return MessageLog()


def get_relay(
    identity: IdentityStore = Depends(get_identity_store),
    messages: MessageLog = Depends(get_message_log),
) -> ConversationRelay:
    """
    FastAPI dependency building the conversation relay for one request.

    Tests replace it through app.dependency_overrides to plug in a stub
    generation service or a seeded selector.
    """
    return ConversationRelay(
        identity=identity,
        messages=messages,
        selector=ResponderSelector(),
        generator=get_generation_service(),
    )


async def get_current_user(
    token: str | None = Depends(get_bearer_token),
    identity: IdentityStore = Depends(get_identity_store),
) -> User:
    """
    FastAPI dependency resolving the caller from their session token.

    Raises:
        HTTPException (401): No bearer token (AUTH_REQUIRED)
        HTTPException (401): Token is not any user's live token (AUTH_INVALID_SESSION)
    """
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_REQUIRED")
    user = await identity.find_by_session_token(token)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="AUTH_INVALID_SESSION")
    return user
