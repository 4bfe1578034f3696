"""Markdown report of upcoming matches: per-match text, template rendering and the report header."""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

from betadvisor.core.timeutils import format_utc, from_epoch, to_local_time
from betadvisor.services.models import Match

MATCH_TEMPLATE = """
Game Information:
Game ID: {{gameId}} [Use this ID when the bot recommends a match]
Title: {{gameTitle}}
League: {{leagueName}} ({{countryName}})
Teams: {{participants}}
Start Time (UTC): {{startTimeUTC}}
Start Time (MSK): {{startTimeLocal}}

Available Betting Options:
[Bot recommendations will include Condition ID and Outcome ID - use these to find the correct betting option below]
{{formattedOdds}}"""

SEPARATOR = "-" * 80

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def render_template(state: Mapping[str, Any], template: str) -> str:
    """Replace ``{{key}}`` placeholders; unknown keys are left as is."""

    def _sub(m: re.Match) -> str:
        key = m.group(1)
        if key not in state:
            return m.group(0)
        return str(state[key])

    return _PLACEHOLDER_RE.sub(_sub, template)


def _format_match(match: Match, tz_offset_hours: int) -> str:
    participants = " vs ".join(f"{p.name} (Order: {p.sort_order})" for p in match.participants)
    conditions = []
    for c in match.conditions:
        outcomes = "\n".join(
            f"      {o.name or 'Unknown'} (Outcome ID: {o.outcome_id}): Odds {o.current_odds}" for o in c.outcomes
        )
        conditions.append(f"{c.name or 'Unknown'} (Condition ID: {c.condition_id})\n    Outcomes:\n{outcomes}")
    return (
        f"Match: {match.title}\n"
        f"Time (UTC): {format_utc(match.starts_at)}\n"
        f"Time (MSK): {to_local_time(match.starts_at, tz_offset_hours)}\n"
        f"Sport: {match.sport_name}\n"
        f"League: {match.league_name}, {match.country_name}\n"
        f"Teams: {participants}\n"
        f"Conditions:\n  " + "\n  ".join(conditions)
    )


def format_matches(matches: Sequence[Match], *, tz_offset_hours: int = 3) -> str:
    text = "\n\n".join(_format_match(m, tz_offset_hours) for m in matches)
    return text or "No matches found"


def compose_game_state(match: Match, *, tz_offset_hours: int = 3) -> dict[str, str]:
    return {
        "gameId": match.id,
        "gameTitle": match.title,
        "leagueName": match.league_name,
        "countryName": match.country_name,
        "participants": " vs ".join(p.name for p in match.participants),
        "startTimeUTC": from_epoch(match.starts_at).strftime("%Y-%m-%d %H:%M:%S UTC"),
        "startTimeLocal": to_local_time(match.starts_at, tz_offset_hours),
        "formattedOdds": format_matches([match], tz_offset_hours=tz_offset_hours),
    }


def build_report(
    matches: Sequence[Match],
    *,
    chain: str,
    graph_url: str,
    tz_offset_hours: int = 3,
) -> str:
    header = f"Chain: {chain}\nGraph URL: {graph_url}\nMatches: {len(matches)}\n{'=' * 80}"
    contexts = [
        render_template(compose_game_state(m, tz_offset_hours=tz_offset_hours), MATCH_TEMPLATE) for m in matches
    ]
    return header + f"\n\n{SEPARATOR}\n\n".join(contexts)
