from typing import Any, Optional

from betadvisor.services.models import Game, GameCondition, GameOutcome, Participant


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def participant_from_payload(payload: dict) -> Participant:
    try:
        sort_order = int(payload.get("sortOrder") or 0)
    except (TypeError, ValueError):
        sort_order = 0
    return Participant(name=_text(payload.get("name")), sort_order=sort_order)


def game_from_payload(payload: Optional[dict]) -> Optional[Game]:
    """Map the single-game GraphQL object; None passes through as 'not found'."""
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected game payload type: {type(payload).__name__}")

    conditions = []
    for raw_condition in _as_list(payload.get("conditions")):
        if not isinstance(raw_condition, dict):
            continue
        outcomes = tuple(
            GameOutcome(outcome_id=_text(o.get("outcomeId")), id=_text(o.get("id")))
            for o in _as_list(raw_condition.get("outcomes"))
            if isinstance(o, dict)
        )
        param = raw_condition.get("param")
        conditions.append(
            GameCondition(
                condition_id=_text(raw_condition.get("conditionId")),
                param=None if param in (None, "") else str(param),
                id=_text(raw_condition.get("id")),
                outcomes=outcomes,
            )
        )

    league = payload.get("league") or {}
    return Game(
        id=_text(payload.get("id") or payload.get("gameId")),
        title=_text(payload.get("title")),
        starts_at=_text(payload.get("startsAt")),
        league_title=_text(league.get("title") or league.get("name")) if isinstance(league, dict) else "",
        conditions=tuple(conditions),
    )
