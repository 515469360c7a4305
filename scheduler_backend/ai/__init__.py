"""Generative-text relay package."""

from scheduler_backend.ai.relay import AIConfigError, AIGenerationError, generate_text

__all__ = ["generate_text", "AIConfigError", "AIGenerationError"]
