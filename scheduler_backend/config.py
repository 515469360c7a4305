"""Centralised settings for the scheduler gateway.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Backend store
    # ------------------------------------------------------------------
    store_backend: str = field(
        default_factory=lambda: os.environ.get("STORE_BACKEND", "supabase")
    )
    supabase_url: str = field(
        default_factory=lambda: os.environ.get("SUPABASE_URL", "")
    )
    supabase_key: str = field(
        default_factory=lambda: os.environ.get("SUPABASE_KEY", "")
    )
    store_timeout: float = field(
        default_factory=lambda: float(os.environ.get("STORE_TIMEOUT", "30.0"))
    )
    allowed_resources: list[str] = field(
        default_factory=lambda: _env_list(
            "ALLOWED_RESOURCES", "appointments,employees,shifts"
        )
    )

    # ------------------------------------------------------------------
    # Generative-text relay
    # ------------------------------------------------------------------
    ai_provider: str = field(
        default_factory=lambda: os.environ.get("AI_PROVIDER", "gemini")
    )
    google_api_key: str = field(
        default_factory=lambda: os.environ.get("GOOGLE_API_KEY", "")
    )
    gemini_model: str = field(
        default_factory=lambda: os.environ.get("GEMINI_MODEL", "gemini-1.5-pro")
    )
    openai_api_key: str = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY", "")
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    )
    ollama_base_url: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_BASE_URL", "http://localhost:11434")
    )
    ollama_chat_model: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_CHAT_MODEL", "llama3.1:8b")
    )

    # ------------------------------------------------------------------
    # Optional route groups
    # ------------------------------------------------------------------
    enable_ai_relay: bool = field(
        default_factory=lambda: _env_flag("ENABLE_AI_RELAY", True)
    )
    enable_legacy_appointments: bool = field(
        default_factory=lambda: _env_flag("ENABLE_LEGACY_APPOINTMENTS", True)
    )
    enable_hello: bool = field(
        default_factory=lambda: _env_flag("ENABLE_HELLO", True)
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    cors_origins: list[str] = field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "*")
    )
    host: str = field(
        default_factory=lambda: os.environ.get("HOST", "0.0.0.0")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "3000"))
    )
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )

    @property
    def store_configured(self) -> bool:
        """True when the selected store backend has everything it needs."""
        if self.store_backend == "memory":
            return True
        return bool(self.supabase_url and self.supabase_key)

    def resource_allowed(self, resource: str) -> bool:
        """Return whether *resource* may be addressed through the table proxy."""
        if "*" in self.allowed_resources:
            return True
        return resource in self.allowed_resources


# Module-level singleton, import this everywhere:
#   from scheduler_backend.config import settings
settings = Settings()
