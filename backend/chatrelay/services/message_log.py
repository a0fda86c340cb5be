"""
Message Log

Append-only persistence of exchanged messages. Text is stored exactly as
given; validation policy belongs to the callers.
"""
from typing import List, Optional

from ..core.errors import StorageUnavailable
from ..models.message import Message
from .identity_store import STORAGE_ERRORS


class MessageLog:
    """Tortoise-backed append-only log"""

    async def append(self, author_id: Optional[int], text: str) -> Message:
        """
        Record one message.

        Args:
            author_id: Authoring user id (None only for system messages)
            text: Message text, stored unchanged (empty string allowed)

        Raises:
            StorageUnavailable: the database failed
        """
        try:
            return await Message.create(user_id=author_id, content=text, image_url=None)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def get(self, message_id: int) -> Optional[Message]:
        try:
            return await Message.get_or_none(id=message_id)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def recent(
        self,
        user_id: Optional[int] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> List[Message]:
        """Newest-first page of messages, optionally for one author."""
        query = Message.all() if user_id is None else Message.filter(user_id=user_id)
        try:
            return await query.order_by("-id").offset(offset).limit(limit)
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e

    async def count(self, user_id: Optional[int] = None) -> int:
        query = Message.all() if user_id is None else Message.filter(user_id=user_id)
        try:
            return await query.count()
        except STORAGE_ERRORS as e:
            raise StorageUnavailable(str(e)) from e
