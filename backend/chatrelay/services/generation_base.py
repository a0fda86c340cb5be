"""
Generation Service Abstract Interface

Turns (agent profile, human input) into reply text by delegating to an
external text-generation backend.
"""
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

PROMPT_TEMPLATE = "AI Profile: {profile}\nTopic: {text}"


@dataclass(frozen=True)
class GenerationReply:
    """
    Outcome of one generation call that reached the service and parsed.

    text is None when the response had no reply field at the expected path.
    """
    text: Optional[str]

    @property
    def is_missing(self) -> bool:
        return self.text is None

    def text_or(self, sentinel: str) -> str:
        return sentinel if self.text is None else self.text


def render_profile(profile: Any) -> str:
    """Canonical JSON rendering so identical profiles yield identical prompts"""
    return json.dumps(profile, sort_keys=True, ensure_ascii=False, default=str)


def build_prompt(profile: Any, text: str) -> str:
    return PROMPT_TEMPLATE.format(profile=render_profile(profile), text=text)


class GenerationService(ABC):
    """Generation Service Abstract Base Class"""

    @abstractmethod
    async def complete(self, agent_profile: Any, input_text: str) -> GenerationReply:
        """
        Ask the backend for a reply.

        Raises:
        - GatewayUnavailable: network failure or error status
        - GatewayProtocolError: response body is not parseable JSON of the expected shape
        """

    @property
    @abstractmethod
    def missing_reply_text(self) -> str:
        """Sentinel used by generate() when the reply field is absent"""

    async def generate(self, agent_profile: Any, input_text: str) -> str:
        """Reply text, or the sentinel when the backend returned no reply field"""
        reply = await self.complete(agent_profile, input_text)
        return reply.text_or(self.missing_reply_text)

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name (e.g., "Ollama")"""
