from __future__ import annotations

from typing import Any

from betadvisor.core.config import settings
from betadvisor.core.http import game_api_client, request_with_retries, subgraph_client
from betadvisor.core.logger import get_logger
from betadvisor.data.mappers import game_from_payload
from betadvisor.services.models import Game

logger = get_logger("providers.subgraph")

GAMES_QUERY = """
  query GetGames($where: Sport_filter, $gamesWhere: Game_filter) {
    sports(where: $where) {
      name
      countries {
        name
        leagues {
          name
          games(where: $gamesWhere) {
            gameId
            title
            startsAt
            status
            participants {
              name
              sortOrder
            }
            conditions {
              conditionId
              status
              outcomes {
                outcomeId
                currentOdds
              }
            }
          }
        }
      }
    }
  }
"""

GAME_QUERY = """
  query GetGame($id: ID!) {
    game(id: $id) {
      id
      title
      startsAt
      league {
        title
      }
      conditions {
        id
        conditionId
        param
        outcomes {
          id
          outcomeId
        }
      }
    }
  }
"""


class SubgraphError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, errors: list | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict) and first.get("message"):
            return str(first["message"])
        return str(first)
    return str(errors)


async def post_query(
    client, url: str, query: str, variables: dict | None = None, *, require_data: bool = True
) -> dict | None:
    """POST a GraphQL query and return ``data``; transport, HTTP and GraphQL errors raise.

    A missing ``data`` raises unless ``require_data`` is off, in which case None comes back.
    """
    resp = await request_with_retries(
        client,
        "POST",
        url,
        json={"query": query, "variables": variables or {}},
    )
    if resp.status_code < 200 or resp.status_code >= 300:
        raise SubgraphError(
            f"API error: {resp.status_code} {resp.reason_phrase}",
            status_code=resp.status_code,
        )
    try:
        payload = resp.json()
    except ValueError as exc:
        raise SubgraphError(f"Malformed response from {url}: {exc}", status_code=resp.status_code) from exc
    if not isinstance(payload, dict):
        raise SubgraphError(f"Malformed response from {url}: expected object", status_code=resp.status_code)

    errors = payload.get("errors")
    if errors:
        raise SubgraphError(
            f"GraphQL error: {_first_error_message(errors)}",
            status_code=resp.status_code,
            errors=errors if isinstance(errors, list) else [errors],
        )
    data = payload.get("data")
    if data is None and require_data:
        raise SubgraphError("Empty result.data while fetching subgraph", status_code=resp.status_code)
    return data


def games_variables(start: int, end: int, sport_name: str | None = None) -> dict:
    return {
        "where": {"name_contains": sport_name} if sport_name else None,
        "gamesWhere": {
            "status": "Created",
            "startsAt_gte": int(start),
            "startsAt_lte": int(end),
        },
    }


async def get_games(start: int, end: int, sport_name: str | None = None) -> dict:
    """Raw sports -> countries -> leagues -> games tree for the time window."""
    variables = games_variables(start, end, sport_name)
    logger.info("subgraph_query query=GetGames url=%s variables=%s", settings.graph_url, variables)
    try:
        data = await post_query(subgraph_client(), settings.graph_url, GAMES_QUERY, variables)
    except Exception as exc:
        logger.error("subgraph_query_failed query=GetGames err=%s", exc)
        raise
    if not isinstance(data.get("sports"), list):
        raise SubgraphError("Malformed response: 'sports' is missing")
    logger.info("subgraph_query_ok query=GetGames sports=%s", len(data["sports"]))
    return data


async def get_game(game_id: str) -> Game | None:
    if not game_id or not isinstance(game_id, str):
        raise ValueError("Invalid gameId: must be a non-empty string")
    try:
        data = await post_query(
            game_api_client(), settings.game_api_url, GAME_QUERY, {"id": game_id}, require_data=False
        )
    except Exception as exc:
        logger.error("game_fetch_failed game_id=%s err=%s", game_id, exc)
        raise
    game = game_from_payload((data or {}).get("game"))
    if game is None:
        logger.info("game_not_found game_id=%s", game_id)
    return game
