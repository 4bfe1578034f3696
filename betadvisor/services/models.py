"""Value objects for matches, single-game lookups, recommendations and button results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional

Confidence = Literal["high", "medium", "low", "N/A"]

CONFIDENCE_HIGH: Confidence = "high"
CONFIDENCE_MEDIUM: Confidence = "medium"
CONFIDENCE_LOW: Confidence = "low"
CONFIDENCE_NA: Confidence = "N/A"


@dataclass(frozen=True)
class Participant:
    name: str
    sort_order: int


@dataclass(frozen=True)
class Outcome:
    outcome_id: str
    current_odds: str
    name: str


@dataclass(frozen=True)
class Condition:
    condition_id: str
    status: str
    name: str
    outcomes: tuple[Outcome, ...] = ()


@dataclass(frozen=True)
class Match:
    id: str
    title: str
    starts_at: int
    status: str
    sport_name: str
    country_name: str
    league_name: str
    participants: tuple[Participant, ...] = ()
    conditions: tuple[Condition, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# Single-game lookup shape used by the button mapper.
@dataclass(frozen=True)
class GameOutcome:
    outcome_id: str
    id: str = ""


@dataclass(frozen=True)
class GameCondition:
    condition_id: str
    param: Optional[str] = None
    id: str = ""
    outcomes: tuple[GameOutcome, ...] = ()


@dataclass(frozen=True)
class Game:
    id: str
    title: str = ""
    starts_at: str = ""
    league_title: str = ""
    conditions: tuple[GameCondition, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Recommendation:
    game_id: str
    condition_id: str
    outcome_id: str


@dataclass(frozen=True)
class ButtonResult:
    button_text: Optional[str]
    confidence: Confidence
    market_type: Optional[str] = None
    explanation: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.button_text)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "buttonText": self.button_text,
            "confidence": self.confidence,
            "marketType": self.market_type,
        }
        if self.explanation is not None:
            out["explanation"] = self.explanation
        return out

    @classmethod
    def failure(cls, explanation: str) -> "ButtonResult":
        return cls(button_text=None, confidence=CONFIDENCE_LOW, market_type=None, explanation=explanation)
