"""Match aggregation: flatten the subgraph tree and filter by odds."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

from betadvisor.core.decimalutils import D, NumberLike, parse_odds
from betadvisor.core.logger import get_logger
from betadvisor.data.mappers import participant_from_payload
from betadvisor.data.providers import subgraph
from betadvisor.services.models import Condition, Match, Outcome
from betadvisor.services.name_resolver import (
    UNKNOWN_MARKET,
    OutcomeNameResolver,
    default_outcome_resolver,
)

logger = get_logger("services.matches")


def _items(node: Any, key: str) -> list:
    value = node.get(key) if isinstance(node, dict) else None
    return list(value) if isinstance(value, (list, tuple)) else []


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _epoch(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _flatten_condition(raw: dict, resolver: OutcomeNameResolver) -> Condition:
    raw_outcomes = [o for o in _items(raw, "outcomes") if isinstance(o, dict)]
    if raw_outcomes:
        name = resolver.market_name(_text(raw_outcomes[0].get("outcomeId")))
    else:
        name = UNKNOWN_MARKET
    outcomes = tuple(
        Outcome(
            outcome_id=_text(o.get("outcomeId")),
            current_odds=_text(o.get("currentOdds")),
            name=resolver.selection_name(_text(o.get("outcomeId"))),
        )
        for o in raw_outcomes
    )
    return Condition(
        condition_id=_text(raw.get("conditionId")),
        status=_text(raw.get("status")),
        name=name,
        outcomes=outcomes,
    )


def flatten_games(data: dict, resolver: OutcomeNameResolver | None = None) -> list[Match]:
    """Transform the sports -> countries -> leagues -> games tree into a flat list.

    Order follows the upstream tree (depth-first, not re-sorted). Each game gets
    its ancestors' names; each condition is named after the market of its
    first outcome and each outcome after its own selection. The input is not
    modified.
    """
    resolver = resolver or default_outcome_resolver()
    matches: list[Match] = []
    for sport in _items(data, "sports"):
        for country in _items(sport, "countries"):
            for league in _items(country, "leagues"):
                for game in _items(league, "games"):
                    conditions = tuple(
                        _flatten_condition(c, resolver) for c in _items(game, "conditions") if isinstance(c, dict)
                    )
                    participants = tuple(
                        participant_from_payload(p) for p in _items(game, "participants") if isinstance(p, dict)
                    )
                    matches.append(
                        Match(
                            id=_text(game.get("gameId") or game.get("id")),
                            title=_text(game.get("title")),
                            starts_at=_epoch(game.get("startsAt")),
                            status=_text(game.get("status")),
                            sport_name=_text(sport.get("name")),
                            country_name=_text(country.get("name")),
                            league_name=_text(league.get("name")),
                            participants=participants,
                            conditions=conditions,
                        )
                    )
    return matches


def has_odds_at_least(match: Match, min_odds: Decimal) -> bool:
    for condition in match.conditions:
        for outcome in condition.outcomes:
            odds = parse_odds(outcome.current_odds)
            if odds is not None and odds >= min_odds:
                return True
    return False


def filter_games_by_odds(matches: Sequence[Match], min_odds: NumberLike) -> list[Match]:
    """New list of the matches with at least one outcome priced at ``min_odds`` or more.

    Unparseable odds never qualify. Relative order is kept; matches are not copied
    or modified.
    """
    threshold = D(min_odds)
    return [m for m in matches if has_odds_at_least(m, threshold)]


async def get_matches(
    start: int,
    end: int,
    *,
    sport_name: str | None = None,
    min_odds: NumberLike | None = None,
    resolver: OutcomeNameResolver | None = None,
) -> list[Match]:
    """Fetch upcoming games in ``[start, end]`` and return them flattened.

    Upstream failures propagate: a bulk listing has no per-match fallback.
    """
    data = await subgraph.get_games(start, end, sport_name=sport_name)
    matches = flatten_games(data, resolver)
    if min_odds:
        filtered = filter_games_by_odds(matches, min_odds)
        logger.info("matches_filtered total=%s kept=%s min_odds=%s", len(matches), len(filtered), min_odds)
        return filtered
    return matches
