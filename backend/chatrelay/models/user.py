# chatrelay/models/user.py
"""
Database model for users.
A user is either a human (may start conversations) or an agent
(only replies, chosen by the relay).
"""
from enum import Enum
from tortoise import fields, models


class UserRole(str, Enum):
    HUMAN = "human"
    AGENT = "agent"


class User(models.Model):
    """
    User database model.

    Lifecycle:
    - Created at registration; username and role never change afterwards
    - Only session_token is updated, on every successful login
    - Never deleted

    Security:
    - Password is stored as an argon2 hash
    - session_token holds at most one live value; a new login overwrites it
    """
    id = fields.IntField(pk=True)  # Server-assigned, monotonic
    username = fields.CharField(max_length=256, unique=True, index=True)
    password_hash = fields.CharField(max_length=255)
    role = fields.CharEnumField(UserRole, max_length=16, default=UserRole.HUMAN)
    agent_profile = fields.JSONField(null=True)  # Free-form persona data, only used for agents
    created_at = fields.DatetimeField(auto_now_add=True)
    session_token = fields.CharField(max_length=255, null=True, index=True)

    class Meta:
        table = "users"

    @property
    def is_agent(self) -> bool:
        return self.role == UserRole.AGENT

    def __str__(self) -> str:
        return f"{self.username}#{self.id}"
