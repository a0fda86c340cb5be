# chatrelay/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Human or agent account, credential and live session token
- Message: Append-only log of exchanged messages
"""
from .user import User, UserRole
from .message import Message
