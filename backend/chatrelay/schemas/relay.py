"""
Pydantic schemas for the conversation and message log endpoints.
"""
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from chatrelay.models.message import Message

__all__ = ["RelayIn", "MessageOut", "message_to_dict"]


class RelayIn(BaseModel):
    # "content" is the field name older clients use
    text: str = Field(validation_alias=AliasChoices("text", "content"))


class MessageOut(BaseModel):
    id: int
    userId: Optional[int] = None
    text: Optional[str] = None
    imageUrl: Optional[str] = None
    createdAt: str


def message_to_dict(m: Message) -> dict:
    return MessageOut(
        id=m.id,
        userId=m.user_id,
        text=m.content,
        imageUrl=m.image_url,
        createdAt=m.created_at.isoformat(),
    ).model_dump()
