"""Display-name resolution for markets and selections.

Two strategies are kept apart on purpose:

- ``OutcomeNameResolver`` asks the outcome dictionary which market and
  selection an outcome id belongs to (used when flattening match trees).
- ``MarketKeyResolver`` first classifies a condition id into a market key and
  then looks names up by key (used by the button mapper).

Dictionary misses and dictionary errors never propagate; they resolve to
``UNKNOWN_MARKET`` / ``UNKNOWN_SELECTION``.
"""

from __future__ import annotations

from functools import lru_cache

from betadvisor.core.config import Settings, settings as default_settings
from betadvisor.core.logger import get_logger
from betadvisor.data.dictionaries import (
    UNKNOWN_MARKET_KEY,
    FallbackOutcomeDictionary,
    MarketKeyDictionary,
    OutcomeDictionary,
    StaticMarketKeyDictionary,
    StaticOutcomeDictionary,
    load_outcome_dictionary,
)

logger = get_logger("services.name_resolver")

UNKNOWN_MARKET = "Unknown Market"
UNKNOWN_SELECTION = "Unknown Selection"


class OutcomeNameResolver:
    def __init__(self, dictionary: OutcomeDictionary):
        self._dictionary = dictionary

    def market_name(self, outcome_id: str) -> str:
        try:
            name = self._dictionary.market_name(outcome_id)
        except Exception as exc:
            logger.debug("market_name_miss outcome_id=%s err=%r", outcome_id, exc)
            return UNKNOWN_MARKET
        return name or UNKNOWN_MARKET

    def selection_name(self, outcome_id: str) -> str:
        try:
            name = self._dictionary.selection_name(outcome_id)
        except Exception as exc:
            logger.debug("selection_name_miss outcome_id=%s err=%r", outcome_id, exc)
            return UNKNOWN_SELECTION
        return name or UNKNOWN_SELECTION


class MarketKeyResolver:
    def __init__(self, dictionary: MarketKeyDictionary):
        self._dictionary = dictionary

    def classify(self, condition_id: str) -> str:
        try:
            key = self._dictionary.classify(condition_id)
        except Exception as exc:
            logger.debug("classify_miss condition_id=%s err=%r", condition_id, exc)
            return UNKNOWN_MARKET_KEY
        return key or UNKNOWN_MARKET_KEY

    def market_name(self, market_key: str) -> str:
        try:
            name = self._dictionary.market_name_for_key(market_key)
        except Exception as exc:
            logger.debug("market_key_miss market_key=%s err=%r", market_key, exc)
            return UNKNOWN_MARKET
        return name or UNKNOWN_MARKET

    def selection_name(self, market_key: str, outcome_id: str) -> str:
        try:
            name = self._dictionary.selection_name_for_key(market_key, outcome_id)
        except Exception as exc:
            logger.debug("selection_key_miss market_key=%s outcome_id=%s err=%r", market_key, outcome_id, exc)
            return UNKNOWN_SELECTION
        return name or UNKNOWN_SELECTION


def build_outcome_resolver(cfg: Settings | None = None) -> OutcomeNameResolver:
    cfg = cfg or default_settings
    if cfg.use_fallback_dictionary:
        logger.info("name_resolver_mode mode=fallback")
        return OutcomeNameResolver(FallbackOutcomeDictionary())
    path = (cfg.dictionary_path or "").strip()
    if path:
        logger.info("name_resolver_mode mode=dictionary path=%s", path)
        return OutcomeNameResolver(load_outcome_dictionary(path))
    return OutcomeNameResolver(StaticOutcomeDictionary())


@lru_cache(maxsize=1)
def default_outcome_resolver() -> OutcomeNameResolver:
    return build_outcome_resolver()


@lru_cache(maxsize=1)
def default_market_key_resolver() -> MarketKeyResolver:
    return MarketKeyResolver(StaticMarketKeyDictionary())
