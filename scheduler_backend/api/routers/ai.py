"""Generative-text relay endpoint.

POST /api/ai   ``{"prompt": "..."}`` -> ``{"prompt": "...", "output": "..."}``
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from scheduler_backend.ai import generate_text
from scheduler_backend.api.deps import get_settings
from scheduler_backend.config import Settings

router = APIRouter()


@router.post("/api/ai", response_model=dict[str, str])
async def ai_relay(
    payload: Optional[dict[str, Any]] = Body(default=None),
    cfg: Settings = Depends(get_settings),
) -> dict[str, str]:
    """Forward the prompt to the configured provider and echo both back."""
    raw = (payload or {}).get("prompt")
    prompt = str(raw) if raw else ""
    if not prompt:
        raise HTTPException(status_code=400, detail='Missing "prompt" in JSON body')

    output = await generate_text(prompt, cfg)
    return {"prompt": prompt, "output": output}
