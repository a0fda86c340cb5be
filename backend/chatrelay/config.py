# chatrelay/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Agent Chat Relay API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

    # Generation service (Ollama-compatible /api/generate endpoint)
    generation_api_url: str = os.getenv("GENERATION_API_URL", "http://localhost:11434/api/generate")
    generation_model: str = os.getenv("GENERATION_MODEL", "qwen2.5-coder")
    # No client-side timeout unless configured; the transport layer owns request deadlines
    generation_timeout_sec: float | None = (
        float(os.getenv("GENERATION_TIMEOUT_SEC")) if os.getenv("GENERATION_TIMEOUT_SEC") else None
    )
    generation_reply_path: str = os.getenv("GENERATION_REPLY_PATH", "response")
    generation_missing_reply: str = os.getenv("GENERATION_MISSING_REPLY", "AI Error")
    # False: a missing reply field is stored and returned as the sentinel text
    # True: a missing reply field is a protocol error
    reject_missing_reply: bool = _env_flag("REJECT_MISSING_REPLY")

    # Session tokens (bytes of randomness before urlsafe encoding)
    session_token_bytes: int = int(os.getenv("SESSION_TOKEN_BYTES", "32"))

    # Notification hub (per-subscriber queue size)
    hub_channel_capacity: int = int(os.getenv("HUB_CHANNEL_CAPACITY", "100"))


settings = Settings()  # Instantiate configuration
