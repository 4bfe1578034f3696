"""Map a bot recommendation (game, condition, outcome ids) to a UI button label."""

from __future__ import annotations

from typing import Awaitable, Callable, Optional

from betadvisor.core.logger import get_logger
from betadvisor.data.providers import subgraph
from betadvisor.services.models import CONFIDENCE_HIGH, ButtonResult, Game
from betadvisor.services.name_resolver import MarketKeyResolver, default_market_key_resolver

logger = get_logger("services.button_mapper")

GameFetcher = Callable[[str], Awaitable[Optional[Game]]]

GAME_NOT_FOUND = "Game not found in API"


def is_totals_market(market_key: str) -> bool:
    # Literal substring rule: any key mentioning "totals" shows the line.
    return market_key == "totals" or "totals" in market_key


def compose_button_text(selection_name: str, market_key: str, param: Optional[str]) -> str:
    if param and is_totals_market(market_key):
        return f"{selection_name} ({param})"
    return selection_name


async def get_button_text(
    game_id: str,
    condition_id: str,
    outcome_id: str,
    *,
    fetch_game: GameFetcher | None = None,
    resolver: MarketKeyResolver | None = None,
) -> ButtonResult:
    """Resolve the button a recommendation points at.

    Never raises: fetch failures, missing game/condition/outcome and any
    unexpected error come back as a ``low`` confidence result with an
    explanation.
    """
    fetch = fetch_game or subgraph.get_game
    try:
        game = await fetch(game_id)
        if game is None:
            return ButtonResult.failure(GAME_NOT_FOUND)

        condition = next((c for c in game.conditions if c.condition_id == condition_id), None)
        if condition is None:
            return ButtonResult.failure(f"Condition {condition_id} not found for game {game_id}")

        outcome = next((o for o in condition.outcomes if o.outcome_id == outcome_id), None)
        if outcome is None:
            return ButtonResult.failure(f"Outcome {outcome_id} not found for condition {condition_id}")

        resolver = resolver or default_market_key_resolver()
        market_key = resolver.classify(condition_id)
        market_name = resolver.market_name(market_key)
        selection_name = resolver.selection_name(market_key, outcome_id)

        return ButtonResult(
            button_text=compose_button_text(selection_name, market_key, condition.param),
            confidence=CONFIDENCE_HIGH,
            market_type=market_name,
        )
    except Exception as exc:
        logger.warning("button_mapping_failed game_id=%s condition_id=%s err=%s", game_id, condition_id, exc)
        return ButtonResult.failure(f"Error: {exc}")
