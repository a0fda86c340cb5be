"""
Ollama Generation Adapter

Posts {model, prompt} to an Ollama-compatible /api/generate endpoint and
extracts the reply from a fixed dotted field path in the JSON response.
"""
import logging
from typing import Any, Optional

import httpx

from ..config import settings
from ..core.errors import GatewayProtocolError, GatewayUnavailable
from .generation_base import GenerationReply, GenerationService, build_prompt

logger = logging.getLogger("uvicorn.error")


def extract_field(payload: Any, path: str) -> Optional[str]:
    """
    Follow a dotted path ("message.content") through nested dicts.

    Returns None when any step is missing or the leaf is not a string.
    """
    node = payload
    for key in path.split("."):
        if not isinstance(node, dict) or key not in node:
            return None
        node = node[key]
    return node if isinstance(node, str) else None


class OllamaGenerationService(GenerationService):
    """Ollama /api/generate client"""

    def __init__(
        self,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        reply_path: Optional[str] = None,
        timeout: Optional[float] = None,
        missing_reply: Optional[str] = None,
    ):
        self.api_url = api_url or settings.generation_api_url
        self.model = model or settings.generation_model
        self.reply_path = reply_path or settings.generation_reply_path
        self.timeout = timeout if timeout is not None else settings.generation_timeout_sec
        self._missing_reply = missing_reply or settings.generation_missing_reply

    @property
    def name(self) -> str:
        return f"Ollama ({self.model})"

    @property
    def missing_reply_text(self) -> str:
        return self._missing_reply

    async def complete(self, agent_profile: Any, input_text: str) -> GenerationReply:
        payload = {
            "model": self.model,
            "prompt": build_prompt(agent_profile, input_text),
            "stream": False,  # One JSON object instead of NDJSON chunks
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(self.api_url, json=payload)
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GatewayUnavailable(
                f"{self.name} answered {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise GatewayUnavailable(f"{self.name} unreachable: {e!r}") from e

        try:
            result = resp.json()
        except ValueError as e:
            raise GatewayProtocolError(f"{self.name} returned non-JSON body") from e
        if not isinstance(result, dict):
            raise GatewayProtocolError(
                f"{self.name} returned {type(result).__name__}, expected object"
            )

        text = extract_field(result, self.reply_path)
        if text is None:
            logger.warning("[generation] %s response has no %r field", self.name, self.reply_path)
        return GenerationReply(text=text)


# Global singleton
ollama_generation_service = OllamaGenerationService()
