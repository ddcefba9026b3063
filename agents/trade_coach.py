"""
agents/trade_coach.py — LLM-generated coaching note for a pending trade.

Given the trade the user is about to log (or is editing), the coach renders
the trade context into a prompt and asks the LLM for a 1–3 sentence
suggestion that connects the trader's emotional state to the outcome.

The reply is plain text.  It is merged into the pending form's ``suggestion``
field by the caller; the coach never touches the journal itself.

Environment variables:
  LLM_MODEL     : model name (default "gemini-2.5-flash")
  LLM_BASE_URL  : OpenAI-compatible endpoint root
  LLM_API_KEY   : bearer token (falls back to API_KEY)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from agents.llm_client import LLMClientError, async_llm_chat
from journal_config import COACH_SYSTEM_PROMPT
from models.trade_log import (
    EmotionalState,
    TradeDirection,
    TradeFormData,
    TradeJournalError,
    TradeResult,
    TradeValidationError,
)

logger = logging.getLogger(__name__)

SUGGESTION_FAILED_MESSAGE = "Failed to get AI suggestion. Please try again."


class SuggestionError(TradeJournalError):
    """Suggestion generation failed; ``str(exc)`` is safe to show to the user."""

    def __init__(self, message: str = SUGGESTION_FAILED_MESSAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class SuggestionContext:
    """Trade fields sent to the LLM. ``strategy`` is already resolved."""

    direction: TradeDirection
    currency_pair: str
    strategy: str
    result: TradeResult
    pips_captured: float
    risk_free: bool
    reason: str
    emotional_state: EmotionalState

    @classmethod
    def from_form(cls, form: TradeFormData) -> "SuggestionContext":
        """Extract the context, rejecting forms that are not ready yet."""
        if not form.reason.strip() or not form.pips_captured:
            raise TradeValidationError(
                "Please enter Pips Captured and Reason for Win/Loss before generating a suggestion."
            )
        try:
            strategy = form.resolved_strategy()
        except TradeValidationError as exc:
            raise TradeValidationError(
                "Please specify your custom strategy before generating a suggestion."
            ) from exc
        return cls(
            direction=form.direction,
            currency_pair=form.currency_pair.strip(),
            strategy=strategy,
            result=form.result,
            pips_captured=form.pips_captured,
            risk_free=form.risk_free,
            reason=form.reason.strip(),
            emotional_state=form.emotional_state,
        )


def build_suggestion_prompt(ctx: SuggestionContext) -> str:
    return f"""\
A trader has just logged the following trade:
- Direction: {ctx.direction.value}
- Currency Pair: {ctx.currency_pair}
- Strategy: {ctx.strategy}
- Result: {ctx.result.value} ({ctx.pips_captured:g} pips)
- Risk-Free Trade: {"Yes" if ctx.risk_free else "No"}
- Trader's Reason for Win/Loss: "{ctx.reason}"
- Trader's Emotional State: "{ctx.emotional_state.value}"

Based on this information, provide a concise, actionable suggestion for the trader to \
improve their mindset or execution on the next trade. Focus on the connection between \
their emotional state and the trade outcome. If the trade was risk-free and a win, \
acknowledge the good trade management. The suggestion should be 1-3 sentences long.
"""


class TradeCoach:
    """Stateless suggestion generator.

    Args:
        model:    LLM model name; defaults to ``LLM_MODEL``.
        api_key:  Overrides ``LLM_API_KEY`` / ``API_KEY``.
        base_url: Overrides ``LLM_BASE_URL``.
    """

    def __init__(
        self,
        *,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        self._model = model or os.getenv("LLM_MODEL", "gemini-2.5-flash")
        self._api_key = api_key
        self._base_url = base_url

    @property
    def model(self) -> str:
        return self._model

    async def generate_suggestion(self, form: TradeFormData) -> str:
        """Return a coaching note for *form*.

        Raises:
            TradeValidationError: the form lacks a reason, non-zero pips, or a
                custom strategy for ``Other``.  No request is sent.
            SuggestionError: the LLM call failed.
        """
        ctx = SuggestionContext.from_form(form)
        prompt = build_suggestion_prompt(ctx)
        try:
            suggestion = await async_llm_chat(
                prompt,
                model=self._model,
                system=COACH_SYSTEM_PROMPT,
                api_key=self._api_key,
                base_url=self._base_url,
            )
        except LLMClientError as exc:
            logger.error("Suggestion generation failed for %s: %s", ctx.currency_pair or "?", exc)
            raise SuggestionError() from exc
        logger.info("Generated suggestion for %s (%d chars)", ctx.currency_pair or "?", len(suggestion))
        return suggestion
