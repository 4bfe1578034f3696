"""Render bot recommendations and their resolved buttons as plain-text blocks."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from betadvisor.core.logger import get_logger
from betadvisor.services.button_mapper import GameFetcher, get_button_text
from betadvisor.services.models import ButtonResult, Recommendation
from betadvisor.services.name_resolver import MarketKeyResolver

logger = get_logger("services.recommendation")

_FIELD_ALIASES = {
    "game_id": ("gameId", "game_id"),
    "condition_id": ("conditionId", "condition_id"),
    "outcome_id": ("outcomeId", "outcome_id"),
}

INVALID_FORMAT_REASON = "Invalid recommendation format"


def parse_recommendation(raw: Any) -> Optional[Recommendation]:
    """Recommendation from a mapping with string ids; None when the shape is wrong."""
    if isinstance(raw, Recommendation):
        return raw
    if not isinstance(raw, Mapping):
        return None
    values: dict[str, str] = {}
    for field_name, aliases in _FIELD_ALIASES.items():
        value = next((raw[a] for a in aliases if a in raw), None)
        if not isinstance(value, str) or not value.strip():
            return None
        values[field_name] = value
    return Recommendation(**values)


def _header(game_id: Any, condition_id: Any, outcome_id: Any) -> str:
    return (
        "\nBot recommendation:\n"
        f"- Game ID: {game_id}\n"
        f"- Condition ID: {condition_id}\n"
        f"- Outcome ID: {outcome_id}\n"
    )


def format_invalid_recommendation() -> str:
    return (
        _header(None, None, None)
        + "\nCould not determine the matching button in the interface.\n"
        + f"Reason: {INVALID_FORMAT_REASON}\n"
        + "\nRecommended:\n"
        + "1. Check the recommendation format\n"
        + "2. Make sure it is an object with the fields gameId, conditionId, outcomeId\n"
    )


def format_recommendation(rec: Recommendation, result: ButtonResult) -> str:
    header = _header(rec.game_id, rec.condition_id, rec.outcome_id)
    if result.button_text:
        return (
            header
            + f'\nMatching button in the interface: "{result.button_text}"\n'
            + f"Confidence: {result.confidence}\n"
            + f"Market type: {result.market_type}\n"
            + "\n>>> PRESS THIS BUTTON <<<\n"
            + f"{result.button_text}\n"
        )
    return (
        header
        + "\nCould not determine the matching button in the interface.\n"
        + f"Reason: {result.explanation}\n"
        + "\nRecommended:\n"
        + f"1. List the match buttons for game {rec.game_id}\n"
        + "2. Compare the condition and outcome ids with the listed buttons\n"
    )


async def process_recommendation(
    raw: Any,
    *,
    fetch_game: GameFetcher | None = None,
    resolver: MarketKeyResolver | None = None,
) -> str:
    """Validate, resolve and render a bot recommendation as a text block.

    Malformed input renders the invalid-format block without any lookup.
    """
    rec = parse_recommendation(raw)
    if rec is None:
        logger.info("recommendation_invalid type=%s", type(raw).__name__)
        return format_invalid_recommendation()
    result = await get_button_text(
        rec.game_id,
        rec.condition_id,
        rec.outcome_id,
        fetch_game=fetch_game,
        resolver=resolver,
    )
    return format_recommendation(rec, result)
