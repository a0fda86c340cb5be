from fastapi import APIRouter, Depends, HTTPException, Query, status

from chatrelay.api.v1.deps import get_current_user, get_message_log
from chatrelay.core.errors import StorageUnavailable
from chatrelay.models.user import User
from chatrelay.schemas.relay import message_to_dict
from chatrelay.services.message_log import MessageLog

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("")
async def list_messages(
    user: User = Depends(get_current_user),
    messages: MessageLog = Depends(get_message_log),
    offset: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=200),
    everyone: bool = Query(False),
):
    """
    Page through the message log, newest first.

    By default only the caller's own messages are listed; everyone=true
    lists the whole log (agent replies included).

    Returns:
        dict: {success, data: {items, offset, limit, total}, message}
    """
    author_id = None if everyone else user.id
    try:
        total = await messages.count(author_id)
        rows = await messages.recent(author_id, offset=offset, limit=limit)
    except StorageUnavailable:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="INTERNAL_ERROR")
    items = [message_to_dict(m) for m in rows]
    return {"success": True, "data": {"items": items, "offset": offset, "limit": limit, "total": total}, "message": None}
