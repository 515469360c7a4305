"""Single-shot prompt-to-text relay.

Chat providers
--------------
``gemini`` (default)
    Google AI Studio via ``langchain-google-genai``.
    Requires ``GOOGLE_API_KEY``; model from ``GEMINI_MODEL``.

``openai``
    Requires ``OPENAI_API_KEY``; model from ``OPENAI_CHAT_MODEL``.

``ollama``
    Local Ollama server at ``OLLAMA_BASE_URL``; no credential needed.

Set ``AI_PROVIDER`` in your ``.env`` to switch providers.
"""

from __future__ import annotations

from typing import Any

from scheduler_backend.config import Settings, settings as default_settings

# Provider name -> (settings attribute, environment variable) of its credential
_CREDENTIALS = {
    "gemini": ("google_api_key", "GOOGLE_API_KEY"),
    "openai": ("openai_api_key", "OPENAI_API_KEY"),
}


class AIConfigError(Exception):
    """The relay cannot run because configuration is missing or invalid."""


class AIGenerationError(Exception):
    """The provider call failed."""


def _check_credentials(cfg: Settings) -> None:
    provider = cfg.ai_provider
    if provider not in (*_CREDENTIALS, "ollama"):
        raise AIConfigError(f"Unknown AI_PROVIDER {provider!r}")
    if provider in _CREDENTIALS:
        attr, env_name = _CREDENTIALS[provider]
        if not getattr(cfg, attr):
            raise AIConfigError(f"{env_name} not set")


def _get_llm(cfg: Settings) -> Any:
    """Return a LangChain chat model for ``cfg.ai_provider``."""
    if cfg.ai_provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(model=cfg.openai_chat_model, api_key=cfg.openai_api_key)

    if cfg.ai_provider == "ollama":
        from langchain_ollama import ChatOllama

        return ChatOllama(model=cfg.ollama_chat_model, base_url=cfg.ollama_base_url)

    from langchain_google_genai import ChatGoogleGenerativeAI

    return ChatGoogleGenerativeAI(model=cfg.gemini_model, google_api_key=cfg.google_api_key)


def _content_text(message: Any) -> str:
    """Flatten a chat message's content into plain text."""
    content = getattr(message, "content", message)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict):
                parts.append(str(part.get("text", "")))
            else:
                parts.append(str(part))
        return "".join(parts)
    return str(content)


async def generate_text(prompt: str, cfg: Settings | None = None) -> str:
    """Send *prompt* to the configured provider and return the reply text.

    Args:
        prompt: Non-empty user prompt, forwarded unmodified.
        cfg: Settings to read provider options from.  Defaults to the
            module-level ``settings``.

    Returns:
        The model's text output.

    Raises:
        AIConfigError: The provider is unknown or its credential is unset.
        AIGenerationError: Building the model or the provider call failed.
    """
    cfg = cfg or default_settings
    _check_credentials(cfg)

    try:
        llm = _get_llm(cfg)
        result = await llm.ainvoke(prompt)
    except Exception as exc:  # noqa: BLE001
        raise AIGenerationError(str(exc)) from exc

    return _content_text(result)
