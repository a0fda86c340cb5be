# chatrelay/models/message.py
from tortoise import fields, models


class Message(models.Model):
    """
    Append-only message log entry.

    user is nullable for non-attributable system messages; the relay always
    sets it. Rows are never updated or deleted.
    """
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField(
        "models.User",
        related_name="messages",
        null=True,
        on_delete=fields.SET_NULL,
    )
    content = fields.TextField(null=True)
    image_url = fields.CharField(max_length=1024, null=True)  # Reserved, not written by the relay
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "messages"
        ordering = ["id"]
