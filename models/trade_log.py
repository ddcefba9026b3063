"""models/trade_log.py — Data models for the FX trade journal.

``TradeFormData`` is the validated input model the form and CLI submit;
``TradeLog`` is the persisted entity held by :class:`core.trade_log_store.TradeLogStore`.
These are pure in-memory models; persistence is handled by database/local_store.py.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TradeSession(str, Enum):
    ASIA = "Asia"
    LONDON = "London"
    NEW_YORK = "New York"
    OVERLAP = "Overlap"


class TradeDirection(str, Enum):
    LONG = "Long"
    SHORT = "Short"


class EmotionalState(str, Enum):
    CALM = "Calm"
    RUSHED = "Rushed"
    REVENGE_TRADING = "Revenge Trading"
    CONFIDENT = "Confident"
    ANXIOUS = "Anxious"


class TradeResult(str, Enum):
    WIN = "Win"
    LOSS = "Loss"


OTHER_STRATEGY = "Other"

STRATEGY_OPTIONS: tuple[str, ...] = (
    "Breakout",
    "Trend Following",
    "Support/Resistance",
    "Price Action",
    "News Trading",
    "Scalping",
    OTHER_STRATEGY,
)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TradeJournalError(Exception):
    """Base class for trade journal errors."""


class TradeValidationError(TradeJournalError, ValueError):
    """A pending submission was rejected; the message is shown to the user."""


class TradeNotFoundError(TradeJournalError, KeyError):
    """No trade with the requested id exists."""

    def __init__(self, trade_id: str) -> None:
        super().__init__(trade_id)
        self.trade_id = trade_id

    def __str__(self) -> str:
        return f"No trade with id {self.trade_id!r}"


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def derive_result(pips_captured: float) -> TradeResult:
    """Classify a trade outcome. Zero pips counts as a loss."""
    return TradeResult.WIN if pips_captured > 0 else TradeResult.LOSS


def resolve_strategy(strategy: str, custom_strategy: str | None = None) -> str:
    """Turn a strategy selection into the string stored on the trade.

    The ``Other`` marker is replaced by the trimmed custom text; any other
    selection is returned unchanged.
    """
    if strategy == OTHER_STRATEGY:
        custom = (custom_strategy or "").strip()
        if not custom:
            raise TradeValidationError(
                'Please specify your custom strategy when "Other" is selected.'
            )
        return custom
    return strategy


# ---------------------------------------------------------------------------
# Input model
# ---------------------------------------------------------------------------


class TradeFormData(BaseModel):
    """One pending trade entry as captured by the form.

    ``strategy`` holds a preset name or ``"Other"``; the custom text lives in
    ``custom_strategy`` until :meth:`validated` resolves it.
    """

    model_config = ConfigDict(validate_assignment=True)

    entry_date_time: datetime
    session: TradeSession = TradeSession.LONDON
    currency_pair: str = ""
    direction: TradeDirection = TradeDirection.LONG
    strategy: str = STRATEGY_OPTIONS[0]
    custom_strategy: str = ""
    pips_captured: float = Field(default=0.0, allow_inf_nan=False)
    risk_free: bool = False
    reason: str = ""
    emotional_state: EmotionalState = EmotionalState.CALM
    suggestion: str = ""

    @field_validator("pips_captured", mode="before")
    @classmethod
    def blank_pips_is_zero(cls, v: Any) -> Any:
        # The form sends "" for an empty number box
        if v is None or (isinstance(v, str) and not v.strip()):
            return 0.0
        return v

    @classmethod
    def build(cls, **fields: Any) -> "TradeFormData":
        """Construct a form, mapping pydantic errors to TradeValidationError."""
        try:
            return cls(**fields)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first.get("loc", ())) or "form"
            raise TradeValidationError(f"Invalid value for {field}: {first.get('msg')}") from exc

    @property
    def result(self) -> TradeResult:
        return derive_result(self.pips_captured)

    def resolved_strategy(self) -> str:
        return resolve_strategy(self.strategy, self.custom_strategy)

    def validated(self) -> "TradeFormData":
        """Return a copy ready for storage, or raise TradeValidationError.

        The copy carries the resolved strategy and an empty ``custom_strategy``.
        """
        currency_pair = self.currency_pair.strip()
        if not currency_pair:
            raise TradeValidationError("Currency Pair is a required field.")
        return self.model_copy(
            update={
                "currency_pair": currency_pair,
                "strategy": self.resolved_strategy(),
                "custom_strategy": "",
            }
        )


# ---------------------------------------------------------------------------
# Persisted entity
# ---------------------------------------------------------------------------

# Document keys, in column order for CSV export.
DOCUMENT_FIELDS: tuple[str, ...] = (
    "id",
    "entryDateTime",
    "session",
    "currencyPair",
    "direction",
    "strategy",
    "pipsCaptured",
    "riskFree",
    "reason",
    "emotionalState",
    "suggestion",
    "result",
)


@dataclass(frozen=True)
class TradeLog:
    """One logged trade.

    ``result`` is derived from ``pips_captured`` on every create and update;
    a revived document keeps the ``result`` it was stored with.
    """

    id: str
    entry_date_time: datetime
    session: TradeSession
    currency_pair: str
    direction: TradeDirection
    strategy: str
    pips_captured: float
    risk_free: bool
    reason: str
    emotional_state: EmotionalState
    suggestion: str
    result: TradeResult

    @classmethod
    def from_form(cls, trade_id: str, form: TradeFormData) -> "TradeLog":
        """Build a record from a form; validates and derives ``result``."""
        clean = form.validated()
        return cls(
            id=trade_id,
            entry_date_time=clean.entry_date_time,
            session=clean.session,
            currency_pair=clean.currency_pair,
            direction=clean.direction,
            strategy=clean.strategy,
            pips_captured=float(clean.pips_captured),
            risk_free=clean.risk_free,
            reason=clean.reason,
            emotional_state=clean.emotional_state,
            suggestion=clean.suggestion,
            result=derive_result(clean.pips_captured),
        )

    def with_suggestion(self, suggestion: str) -> "TradeLog":
        return replace(self, suggestion=suggestion)

    def to_form_data(self) -> TradeFormData:
        """Rebuild the form used to edit this trade.

        A strategy outside the presets is shown as ``Other`` with the stored
        text in ``custom_strategy``.
        """
        is_custom = self.strategy not in STRATEGY_OPTIONS
        return TradeFormData(
            entry_date_time=self.entry_date_time,
            session=self.session,
            currency_pair=self.currency_pair,
            direction=self.direction,
            strategy=OTHER_STRATEGY if is_custom else self.strategy,
            custom_strategy=self.strategy if is_custom else "",
            pips_captured=self.pips_captured,
            risk_free=self.risk_free,
            reason=self.reason,
            emotional_state=self.emotional_state,
            suggestion=self.suggestion,
        )

    # ── Document (de)serialization ───────────────────────────────────────────

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "entryDateTime": self.entry_date_time.isoformat(),
            "session": self.session.value,
            "currencyPair": self.currency_pair,
            "direction": self.direction.value,
            "strategy": self.strategy,
            "pipsCaptured": self.pips_captured,
            "riskFree": self.risk_free,
            "reason": self.reason,
            "emotionalState": self.emotional_state.value,
            "suggestion": self.suggestion,
            "result": self.result.value,
        }

    @classmethod
    def from_document(cls, doc: Any) -> "TradeLog":
        """Revive one stored record.

        Raises ValueError, KeyError or TypeError when the shape is wrong.
        """
        if not isinstance(doc, dict):
            raise TypeError(f"trade record must be an object, got {type(doc).__name__}")
        # ValidationError is a ValueError
        stored = StoredTradeLog.model_validate(doc)
        fields = stored.model_dump()
        fields["pips_captured"] = float(fields["pips_captured"])
        return cls(**fields)


class StoredTradeLog(BaseModel):
    """Shape of one record in the stored document.

    Keys are camelCase.  Scalars are not coerced: ``"false"`` is not a bool
    and ``null`` is not a string.
    """

    model_config = ConfigDict(extra="ignore")

    id: StrictStr = Field(min_length=1)
    entry_date_time: datetime = Field(alias="entryDateTime")
    session: TradeSession
    currency_pair: StrictStr = Field(alias="currencyPair")
    direction: TradeDirection
    strategy: StrictStr
    pips_captured: float = Field(alias="pipsCaptured", strict=True, allow_inf_nan=False)
    risk_free: StrictBool = Field(alias="riskFree")
    reason: StrictStr = ""
    emotional_state: EmotionalState = Field(alias="emotionalState")
    suggestion: StrictStr = ""
    result: TradeResult

    @field_validator("entry_date_time", mode="before")
    @classmethod
    def iso_string_only(cls, v: Any) -> datetime:
        if not isinstance(v, str):
            raise ValueError("entryDateTime must be an ISO-8601 string")
        return datetime.fromisoformat(v)
