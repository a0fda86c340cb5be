# chatrelay/core/bootstrap.py
"""
Bootstrap module for application initialization.
Creates a default agent on first startup so the relay has a responder.
"""
import json
import os
import logging
from chatrelay.models.user import User, UserRole
from chatrelay.core.security import hash_password

logger = logging.getLogger("uvicorn.error")


async def ensure_default_agent() -> None:
    """
    If no agent exists in the database, create one from environment variables.
    Only takes effect under the following conditions:
      - Currently no user with role="agent"
      - And DEFAULT_AGENT_PASSWORD is set
    Environment variables:
      DEFAULT_AGENT_USERNAME (default: "assistant")
      DEFAULT_AGENT_PASSWORD (required, otherwise won't create)
      DEFAULT_AGENT_PROFILE  (optional JSON object describing the persona)
    """
    if await User.filter(role=UserRole.AGENT).exists():
        return

    agent_password = os.getenv("DEFAULT_AGENT_PASSWORD")
    if not agent_password:
        logger.warning("[bootstrap] No agent present and DEFAULT_AGENT_PASSWORD not set -> skip creating default agent.")
        return

    agent_username = os.getenv("DEFAULT_AGENT_USERNAME", "assistant")
    raw_profile = os.getenv("DEFAULT_AGENT_PROFILE")
    try:
        profile = json.loads(raw_profile) if raw_profile else None
    except json.JSONDecodeError:
        logger.warning("[bootstrap] DEFAULT_AGENT_PROFILE is not valid JSON -> using it as a plain description.")
        profile = {"description": raw_profile}

    # Username may already belong to a human account; pick a free variant
    base_username = agent_username
    suffix = 1
    while await User.filter(username=agent_username).exists():
        suffix += 1
        agent_username = f"{base_username}{suffix}"

    u = await User.create(
        username=agent_username,
        password_hash=hash_password(agent_password),
        role=UserRole.AGENT,
        agent_profile=profile,
    )
    logger.warning("[bootstrap] Created default agent -> username=%s id=%s", u.username, u.id)
