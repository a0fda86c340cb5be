import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chatrelay.api.v1.deps import get_current_user, get_identity_store
from chatrelay.core.errors import StorageUnavailable, UsernameTaken
from chatrelay.core.security import hash_password, verify_password
from chatrelay.models.user import User
from chatrelay.schemas.auth import LoginIn, RegisterIn, user_to_dict
from chatrelay.services.identity_store import IdentityStore

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("uvicorn.error")


def _internal_error(exc: Exception) -> HTTPException:
    logger.error("[auth] storage failure: %s", exc)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="INTERNAL_ERROR")


@router.post("/register")
async def register(body: RegisterIn, identity: IdentityStore = Depends(get_identity_store)):
    """
    Register a new human or agent account.

    Args:
        body: Request body containing:
            - username: str (must be unique)
            - password: str (hashed before storage)
            - role: "human" | "agent" ("real" / "ai" accepted)
            - profile: optional persona data, only used for agents

    Returns:
        dict: {success, data, message}; data is the created user without
        credential fields. A taken username is a success=false answer.
    """
    try:
        if await identity.find_by_username(body.username):
            return {"success": False, "data": None, "message": "Username already exists"}
        u = await identity.create(
            username=body.username,
            password_hash=hash_password(body.password),
            role=body.role,
            profile=body.profile,
        )
    except UsernameTaken:
        # Lost a race with a concurrent registration of the same name
        return {"success": False, "data": None, "message": "Username already exists"}
    except StorageUnavailable as e:
        raise _internal_error(e)
    logger.info("[auth] registered %s (%s)", u, u.role.value)
    return {"success": True, "data": user_to_dict(u), "message": None}


@router.post("/login")
async def login(payload: LoginIn, identity: IdentityStore = Depends(get_identity_store)):
    """
    Verify credentials and issue a new session token.

    Every successful login replaces the previous token, so older tokens
    stop working immediately.

    Returns:
        dict: {success, data, message}; data is the user including sessionToken
    """
    try:
        user = await identity.find_by_username(payload.username)
        if user is None:
            return {"success": False, "data": None, "message": "User not found"}
        if not verify_password(payload.password, user.password_hash):
            return {"success": False, "data": None, "message": "Incorrect password"}
        user.session_token = await identity.issue_session_token(user.id)
    except StorageUnavailable as e:
        raise _internal_error(e)
    return {"success": True, "data": user_to_dict(user, include_token=True), "message": None}


@router.get("/me")
async def me(user: User = Depends(get_current_user)):
    """
    Return the user that owns the presented session token.

    Raises:
        HTTPException (401): Missing or stale token
    """
    return {"success": True, "data": user_to_dict(user), "message": None}
