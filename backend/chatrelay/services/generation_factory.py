"""
Generation Service Factory
"""
from .generation_base import GenerationService
from .generation_ollama import ollama_generation_service


def get_generation_service() -> GenerationService:
    """
    Get the generation backend used by the relay.

    Note:
    - Configure GENERATION_API_URL / GENERATION_MODEL in .env
    """
    return ollama_generation_service
