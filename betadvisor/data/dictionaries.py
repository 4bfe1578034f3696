"""Static market/selection lookup tables.

Tables are read-only process-wide constants (``MappingProxyType``). They are
exposed through the dictionary classes below and, above those, through the
resolvers in ``betadvisor.services.name_resolver``. Lookups raise ``KeyError``
for unknown identifiers; callers decide on the placeholder.
"""

from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Protocol

UNKNOWN_MARKET_KEY = "unknown"

# outcomeId -> (market name, selection name)
OUTCOMES: Mapping[str, tuple[str, str]] = MappingProxyType(
    {
        "29": ("Full Time Result", "1"),
        "30": ("Full Time Result", "X"),
        "31": ("Full Time Result", "2"),
        "4": ("Double Chance", "1X"),
        "5": ("Double Chance", "12"),
        "6": ("Double Chance", "2X"),
        "7": ("Handicap", "1"),
        "8": ("Handicap", "2"),
        "9": ("Total Goals", "Over"),
        "10": ("Total Goals", "Under"),
        "21": ("Both Teams To Score", "Yes"),
        "22": ("Both Teams To Score", "No"),
        "17": ("Total Goals", "Over"),
        "32": ("Total Goals", "Under"),
    }
)

# Two-stage tables: conditionId suffix -> market key -> names.
MARKET_KEY_SUFFIXES: tuple[tuple[str, str], ...] = (
    ("0640393189", "match_result"),
    ("0640393190", "totals"),
    ("0640393191", "double_chance"),
    ("0640393192", "match_result_and_totals"),
)

MARKET_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "match_result": "Match Result",
        "totals": "Total Goals Over/Under",
        "double_chance": "Double Chance",
        "match_result_and_totals": "Match Result & Over/Under",
        "handicap": "Handicap",
        "exact_score": "Exact Score",
        "both_teams_to_score": "Both Teams to Score",
    }
)

SELECTION_NAMES: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "match_result": MappingProxyType({"29": "1", "30": "X", "31": "2"}),
        "totals": MappingProxyType({"17": "Over", "32": "Under"}),
        "double_chance": MappingProxyType({"6266": "1X", "6267": "12", "6268": "X2"}),
        "match_result_and_totals": MappingProxyType(
            {
                "9738": "1 & Over",
                "9739": "1 & Under",
                "9740": "X & Over",
                "9741": "X & Under",
                "9742": "2 & Over",
                "9743": "2 & Under",
            }
        ),
        "both_teams_to_score": MappingProxyType({"2": "Yes", "3": "No"}),
    }
)

# Degraded-mode maps, keyed by the last "-" separated part of the outcome id.
FALLBACK_SELECTIONS: Mapping[str, str] = MappingProxyType(
    {
        "1": "Home Win (1)",
        "2": "Away Win (2)",
        "X": "Draw (X)",
        "over": "Over",
        "under": "Under",
        "1X": "Home Win or Draw (1X)",
        "X2": "Draw or Away Win (X2)",
        "12": "Home Win or Away Win (12)",
        "13": "Over 0.5 Goals",
        "14": "Under 0.5 Goals",
        "21": "Over 1.5 Goals",
        "22": "Under 1.5 Goals",
        "23": "Over 2.5 Goals",
        "24": "Under 2.5 Goals",
        "25": "Over 3.5 Goals",
        "26": "Under 3.5 Goals",
        "29": "Home Team To Score",
        "30": "Away Team To Score",
        "31": "Home Team Clean Sheet",
        "38": "Home No Clean Sheet",
        "39": "Away No Clean Sheet",
        "40": "Away Team Clean Sheet",
        "49": "Both Teams To Score - Yes",
        "50": "Both Teams To Score - No",
        "51": "Over 0.5 1st Half",
        "52": "Under 0.5 1st Half",
        "101": "Draw No Bet - 1",
        "102": "Draw No Bet - 2",
        "128": "Over 2.5 Goals",
        "129": "Under 2.5 Goals",
        "6266": "Both Teams To Score - No",
        "6267": "Both Teams To Score - Yes",
        "6268": "Both Teams To Score - No Goal",
    }
)

FALLBACK_MARKETS: Mapping[str, str] = MappingProxyType(
    {
        "1": "Match Result (1X2)",
        "2": "Match Result (1X2)",
        "X": "Match Result (1X2)",
        "1X": "Double Chance",
        "X2": "Double Chance",
        "12": "Double Chance",
        "over": "Total Goals Over/Under",
        "under": "Total Goals Over/Under",
        "13": "Total Goals Over/Under 0.5",
        "14": "Total Goals Over/Under 0.5",
        "21": "Total Goals Over/Under 1.5",
        "22": "Total Goals Over/Under 1.5",
        "23": "Total Goals Over/Under 2.5",
        "24": "Total Goals Over/Under 2.5",
        "25": "Total Goals Over/Under 3.5",
        "26": "Total Goals Over/Under 3.5",
        "128": "Total Goals Over/Under 2.5",
        "129": "Total Goals Over/Under 2.5",
        "29": "Team To Score",
        "30": "Team To Score",
        "31": "Home Team Clean Sheet",
        "38": "Home Team Clean Sheet",
        "39": "Away Team Clean Sheet",
        "40": "Away Team Clean Sheet",
        "49": "Both Teams To Score",
        "50": "Both Teams To Score",
        "6266": "Both Teams To Score",
        "6267": "Both Teams To Score",
        "6268": "Both Teams To Score",
        "51": "1st Half Total Goals Over/Under 0.5",
        "52": "1st Half Total Goals Over/Under 0.5",
        "101": "Draw No Bet",
        "102": "Draw No Bet",
    }
)


class OutcomeDictionary(Protocol):
    """Outcome-keyed lookup: the market and selection an outcome belongs to."""

    def market_name(self, outcome_id: str) -> str: ...

    def selection_name(self, outcome_id: str) -> str: ...


class MarketKeyDictionary(Protocol):
    """Two-stage lookup: conditionId -> market key -> names."""

    def classify(self, condition_id: str) -> str: ...

    def market_name_for_key(self, market_key: str) -> str: ...

    def selection_name_for_key(self, market_key: str, outcome_id: str) -> str: ...


class StaticOutcomeDictionary:
    def __init__(self, outcomes: Mapping[str, tuple[str, str]] = OUTCOMES):
        self._outcomes = MappingProxyType(dict(outcomes))

    def market_name(self, outcome_id: str) -> str:
        return self._outcomes[str(outcome_id)][0]

    def selection_name(self, outcome_id: str) -> str:
        return self._outcomes[str(outcome_id)][1]


class FallbackOutcomeDictionary:
    """Hard-coded maps used when the outcome dictionary is unavailable."""

    @staticmethod
    def _last_part(outcome_id: str) -> str:
        raw = str(outcome_id)
        return raw.split("-")[-1] or raw

    def market_name(self, outcome_id: str) -> str:
        return FALLBACK_MARKETS[self._last_part(outcome_id)]

    def selection_name(self, outcome_id: str) -> str:
        return FALLBACK_SELECTIONS[self._last_part(outcome_id)]


class StaticMarketKeyDictionary:
    def classify(self, condition_id: str) -> str:
        raw = str(condition_id)
        for suffix, key in MARKET_KEY_SUFFIXES:
            if raw.endswith(suffix):
                return key
        return UNKNOWN_MARKET_KEY

    def market_name_for_key(self, market_key: str) -> str:
        return MARKET_NAMES[market_key]

    def selection_name_for_key(self, market_key: str, outcome_id: str) -> str:
        return SELECTION_NAMES[market_key][str(outcome_id)]


def load_outcome_dictionary(path: str | Path) -> StaticOutcomeDictionary:
    """Load outcome tables from a JSON file.

    Expected shape::

        {"outcomes": {"29": {"market": "Full Time Result", "selection": "1"}}}
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    raw = data.get("outcomes") if isinstance(data, dict) else None
    if not isinstance(raw, dict):
        raise ValueError(f"dictionary file {path} has no 'outcomes' object")
    outcomes: dict[str, tuple[str, str]] = {}
    for outcome_id, entry in raw.items():
        if not isinstance(entry, dict):
            continue
        market = entry.get("market")
        selection = entry.get("selection")
        if market is None or selection is None:
            continue
        outcomes[str(outcome_id)] = (str(market), str(selection))
    return StaticOutcomeDictionary(outcomes)
