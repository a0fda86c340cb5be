"""
Conversation Relay

Turns one human message into one persisted exchange:

    resolve caller -> persist input -> role gate -> select responder
    -> generate reply -> persist reply -> return reply

Each step is a single attempt. Nothing is rolled back: once the input is
stored it stays stored, even when a later step fails.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import settings
from ..core.errors import GatewayProtocolError, NoResponderAvailable
from ..core.security import token_fingerprint
from ..models.message import Message
from ..models.user import User, UserRole
from .generation_base import GenerationService
from .identity_store import IdentityStore
from .message_log import MessageLog
from .responder_selector import ResponderSelector

logger = logging.getLogger("uvicorn.error")


class RelayOutcome(str, Enum):
    OK = "ok"
    INVALID_SESSION = "invalid_session"
    ROLE_NOT_PERMITTED = "role_not_permitted"
    NO_RESPONDER_AVAILABLE = "no_responder_available"


# Human-readable reasons returned to clients for negative outcomes
OUTCOME_MESSAGES = {
    RelayOutcome.INVALID_SESSION: "Invalid session token",
    RelayOutcome.ROLE_NOT_PERMITTED: "AI users cannot start a conversation.",
    RelayOutcome.NO_RESPONDER_AVAILABLE: "No AI users available",
}


@dataclass
class RelayResult:
    outcome: RelayOutcome
    reply: Optional[str] = None
    caller: Optional[User] = None
    responder: Optional[User] = None
    inbound: Optional[Message] = None
    outbound: Optional[Message] = None
    degraded: bool = False  # Reply is the missing-field sentinel

    @property
    def success(self) -> bool:
        return self.outcome is RelayOutcome.OK

    @property
    def message(self) -> Optional[str]:
        return OUTCOME_MESSAGES.get(self.outcome)


class ConversationRelay:
    """
    Stateless orchestrator over the identity store, the message log, the
    responder selector and the generation service.

    Storage and gateway failures propagate as StorageUnavailable /
    GatewayError; every business "no" comes back as a RelayResult.
    """

    def __init__(
        self,
        identity: IdentityStore,
        messages: MessageLog,
        selector: ResponderSelector,
        generator: GenerationService,
        reject_missing_reply: Optional[bool] = None,
    ):
        self.identity = identity
        self.messages = messages
        self.selector = selector
        self.generator = generator
        self.reject_missing_reply = (
            settings.reject_missing_reply if reject_missing_reply is None else reject_missing_reply
        )

    async def handle(self, bearer_token: Optional[str], input_text: str) -> RelayResult:
        # 1) Resolve caller
        caller = await self.identity.find_by_session_token(bearer_token)
        if caller is None:
            logger.warning("[relay] rejected token %s", token_fingerprint(bearer_token))
            return RelayResult(RelayOutcome.INVALID_SESSION)

        # 2) Persist inbound message (kept regardless of what follows)
        inbound = await self.messages.append(caller.id, input_text)

        # 3) Role gate
        if caller.role != UserRole.HUMAN:
            logger.warning("[relay] agent %s tried to start a conversation", caller)
            return RelayResult(RelayOutcome.ROLE_NOT_PERMITTED, caller=caller, inbound=inbound)

        # 4) Select responder from a snapshot of the current agents
        agents = await self.identity.list_agents()
        try:
            responder = self.selector.select(agents)
        except NoResponderAvailable:
            logger.warning("[relay] no agent available for %s", caller)
            return RelayResult(RelayOutcome.NO_RESPONDER_AVAILABLE, caller=caller, inbound=inbound)

        # 5) Generate reply
        generated = await self.generator.complete(responder.agent_profile, input_text)
        if generated.is_missing:
            if self.reject_missing_reply:
                raise GatewayProtocolError(
                    f"{self.generator.name} returned no reply for agent {responder.id}"
                )
            logger.warning("[relay] %s returned no reply; storing sentinel", self.generator.name)
        reply_text = generated.text_or(self.generator.missing_reply_text)

        # 6) Persist reply
        outbound = await self.messages.append(responder.id, reply_text)

        # 7) Done
        logger.info("[relay] %s -> %s (messages %s, %s)", caller, responder, inbound.id, outbound.id)
        return RelayResult(
            RelayOutcome.OK,
            reply=reply_text,
            caller=caller,
            responder=responder,
            inbound=inbound,
            outbound=outbound,
            degraded=generated.is_missing,
        )
