"""agents/llm_client.py — Unified LLM chat helper.

Talks to any OpenAI-compatible chat-completions endpoint through
``openai.AsyncOpenAI``.  The default target is Google's Gemini
OpenAI-compatibility endpoint (``gemini-2.5-flash``); point ``LLM_BASE_URL``
at ``https://api.openai.com/v1`` (or a local server) to use another provider.

Authentication:
- ``LLM_API_KEY`` (falls back to ``API_KEY``) is sent as the bearer token.

Usage::

    from agents.llm_client import async_llm_chat

    text = await async_llm_chat(
        prompt="Review this trade…",
        model="gemini-2.5-flash",
        system="You are a trading mentor.",
    )
"""
from __future__ import annotations

import asyncio
import logging
import os
from typing import Optional

import openai

logger = logging.getLogger(__name__)


class LLMClientError(RuntimeError):
    """The LLM backend could not produce a reply."""


# ------------------------------------------------------------------ #
# Public helper                                                        #
# ------------------------------------------------------------------ #


async def async_llm_chat(
    prompt: str,
    *,
    model: str = "gemini-2.5-flash",
    system: str = "",
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """Send *prompt* to an LLM and return the assistant's text reply.

    Args:
        prompt:   User message text.
        model:    Model identifier (e.g. ``"gemini-2.5-flash"``).
        system:   Optional system message prepended to the conversation.
        api_key:  Bearer token; defaults to ``LLM_API_KEY`` / ``API_KEY``.
        base_url: Endpoint root; defaults to ``LLM_BASE_URL`` or the SDK default.
        timeout:  Seconds to wait for a reply; ``None`` waits indefinitely.

    Returns:
        The assistant's reply text (never empty).

    Raises:
        LLMClientError: missing key, transport/API failure, or an empty reply.
    """
    key = (api_key or os.getenv("LLM_API_KEY") or os.getenv("API_KEY") or "").strip()
    if not key:
        raise LLMClientError("No LLM API key configured; set LLM_API_KEY")

    try:
        text = await _openai_direct_chat(
            prompt=prompt,
            model=model,
            system=system,
            timeout=timeout,
            api_key=key,
            base_url=base_url or os.getenv("LLM_BASE_URL") or None,
        )
    except asyncio.TimeoutError as exc:
        logger.warning("LLM call timed out after %.0fs", timeout or 0)
        raise LLMClientError("LLM request timed out") from exc
    except openai.OpenAIError as exc:
        logger.error("LLM call failed (%s: %s)", type(exc).__name__, exc)
        raise LLMClientError(f"LLM request failed: {type(exc).__name__}") from exc

    text = text.strip()
    if not text:
        raise LLMClientError("LLM returned an empty reply")
    return text


# ------------------------------------------------------------------ #
# Internal: OpenAI-compatible backend                                  #
# ------------------------------------------------------------------ #


async def _openai_direct_chat(
    prompt: str,
    *,
    model: str,
    system: str,
    timeout: Optional[float],
    api_key: str,
    base_url: Optional[str],
) -> str:
    """Call the chat-completions API via openai.AsyncOpenAI."""
    messages: list[dict] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    # One request per call; the caller decides whether to try again
    aclient = openai.AsyncOpenAI(api_key=api_key, base_url=base_url, max_retries=0)
    request = aclient.chat.completions.create(
        model=model,
        messages=messages,  # type: ignore[arg-type]
        temperature=0.7,
    )
    if timeout is not None:
        response = await asyncio.wait_for(request, timeout=timeout)
    else:
        response = await request
    if response.choices:
        return response.choices[0].message.content or ""
    return ""
