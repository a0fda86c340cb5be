import logging

from fastapi import APIRouter, Depends, HTTPException, status

from chatrelay.api.v1.deps import get_bearer_token, get_relay
from chatrelay.core.errors import GatewayError, StorageUnavailable
from chatrelay.schemas.relay import RelayIn
from chatrelay.services.relay import ConversationRelay

router = APIRouter(tags=["conversation"])
logger = logging.getLogger("uvicorn.error")


@router.post("/conversation")
async def conversation(
    body: RelayIn,
    token: str | None = Depends(get_bearer_token),
    relay: ConversationRelay = Depends(get_relay),
):
    """
    Relay a human message to a randomly chosen agent and return its reply.

    The caller authenticates with "Authorization: Bearer <sessionToken>".
    A missing or stale token, an agent caller, and an empty agent pool are
    all success=false answers with a reason. Storage and generation
    failures are HTTP 500; the human message may already be stored by then.

    Returns:
        dict: {success, data, message}; data is the reply text on success
    """
    try:
        result = await relay.handle(token, body.text)
    except (StorageUnavailable, GatewayError):
        logger.exception("[conversation] relay failed")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="INTERNAL_ERROR")

    if not result.success:
        return {"success": False, "data": None, "message": result.message}
    return {"success": True, "data": result.reply, "message": None}
