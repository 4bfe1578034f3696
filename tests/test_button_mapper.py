import asyncio

import httpx

import betadvisor.data.providers.subgraph as subgraph
from betadvisor.data.mappers import game_from_payload
from betadvisor.services.button_mapper import compose_button_text, get_button_text, is_totals_market
from betadvisor.services.models import ButtonResult

MATCH_RESULT_CID = "100610060000000000267304920000000000000640393189"
TOTALS_CID = "100610060000000000267304920000000000000640393190"
COMBO_CID = "100610060000000000267304920000000000000640393192"


def _game_payload():
    return {
        "id": "12345",
        "title": "Team A vs Team B",
        "league": {"title": "Example League"},
        "startsAt": "2023-10-01T15:00:00Z",
        "conditions": [
            {
                "id": "1",
                "conditionId": MATCH_RESULT_CID,
                "outcomes": [
                    {"id": "1_29", "outcomeId": "29"},
                    {"id": "1_30", "outcomeId": "30"},
                    {"id": "1_31", "outcomeId": "31"},
                ],
            },
            {
                "id": "2",
                "conditionId": TOTALS_CID,
                "param": "2.5",
                "outcomes": [
                    {"id": "2_17", "outcomeId": "17"},
                    {"id": "2_32", "outcomeId": "32"},
                ],
            },
            {
                "id": "3",
                "conditionId": COMBO_CID,
                "param": "2.5",
                "outcomes": [{"id": "3_9738", "outcomeId": "9738"}],
            },
            {
                "id": "4",
                "conditionId": "486903008559711340",
                "param": "1.5",
                "outcomes": [{"id": "4_29", "outcomeId": "29"}],
            },
        ],
    }


def _fetcher(payload):
    calls = []

    async def fetch(game_id):
        calls.append(game_id)
        return game_from_payload(payload)

    fetch.calls = calls
    return fetch


def _map(game_id, condition_id, outcome_id, fetch):
    return asyncio.run(get_button_text(game_id, condition_id, outcome_id, fetch_game=fetch))


def test_match_result_home_win():
    fetch = _fetcher(_game_payload())
    result = _map("12345", MATCH_RESULT_CID, "29", fetch)
    assert result == ButtonResult(button_text="1", confidence="high", market_type="Match Result")
    assert result.explanation is None
    assert fetch.calls == ["12345"]


def test_match_result_away_win():
    result = _map("12345", MATCH_RESULT_CID, "31", _fetcher(_game_payload()))
    assert result.button_text == "2"
    assert result.market_type == "Match Result"


def test_totals_appends_param():
    result = _map("12345", TOTALS_CID, "32", _fetcher(_game_payload()))
    assert result == ButtonResult(button_text="Under (2.5)", confidence="high", market_type="Total Goals Over/Under")


def test_totals_family_key_appends_param():
    result = _map("12345", COMBO_CID, "9738", _fetcher(_game_payload()))
    assert result.button_text == "1 & Over (2.5)"
    assert result.market_type == "Match Result & Over/Under"


def test_param_ignored_for_non_totals_market():
    result = _map("12345", "486903008559711340", "29", _fetcher(_game_payload()))
    assert result.button_text == "Unknown Selection"
    assert result.confidence == "high"
    assert result.market_type == "Unknown Market"


def test_fetch_failure_is_low_confidence():
    async def failing(_game_id):
        raise RuntimeError("API connection failed")

    result = _map("12345", MATCH_RESULT_CID, "29", failing)
    assert result.button_text is None
    assert result.confidence == "low"
    assert result.market_type is None
    assert "API connection failed" in result.explanation


def test_game_not_found():
    result = _map("999", MATCH_RESULT_CID, "29", _fetcher(None))
    assert result == ButtonResult(button_text=None, confidence="low", market_type=None, explanation="Game not found in API")


def test_condition_not_found():
    result = _map("12345", "nope", "29", _fetcher(_game_payload()))
    assert result.confidence == "low"
    assert result.button_text is None
    assert result.explanation == "Condition nope not found for game 12345"


def test_outcome_not_found():
    result = _map("12345", MATCH_RESULT_CID, "17", _fetcher(_game_payload()))
    assert result.confidence == "low"
    assert result.explanation == f"Outcome 17 not found for condition {MATCH_RESULT_CID}"


def test_malformed_game_payload_is_caught():
    result = _map("12345", MATCH_RESULT_CID, "29", _fetcher(["not", "a", "game"]))
    assert result.confidence == "low"
    assert result.explanation.startswith("Error: ")


def test_resolver_failure_is_caught():
    class BrokenResolver:
        def classify(self, condition_id):
            raise RuntimeError("boom")

    result = asyncio.run(
        get_button_text("12345", MATCH_RESULT_CID, "29", fetch_game=_fetcher(_game_payload()), resolver=BrokenResolver())
    )
    assert result == ButtonResult.failure("Error: boom")


def test_repeated_calls_are_deterministic():
    fetch = _fetcher(_game_payload())
    results = [_map("12345", TOTALS_CID, "17", fetch) for _ in range(3)]
    assert results[0] == results[1] == results[2]
    assert results[0].button_text == "Over (2.5)"
    assert fetch.calls == ["12345", "12345", "12345"]


def test_default_fetcher_is_subgraph_get_game(monkeypatch):
    async def fake_get_game(game_id):
        assert game_id == "12345"
        return game_from_payload(_game_payload())

    monkeypatch.setattr(subgraph, "get_game", fake_get_game)
    result = asyncio.run(get_button_text("12345", MATCH_RESULT_CID, "30"))
    assert result.button_text == "X"


def test_concurrent_invocations_are_independent():
    fetch = _fetcher(_game_payload())

    async def run_all():
        return await asyncio.gather(
            get_button_text("12345", MATCH_RESULT_CID, "29", fetch_game=fetch),
            get_button_text("12345", TOTALS_CID, "32", fetch_game=fetch),
            get_button_text("12345", "missing", "29", fetch_game=fetch),
        )

    first, second, third = asyncio.run(run_all())
    assert first.button_text == "1"
    assert second.button_text == "Under (2.5)"
    assert third.confidence == "low"
    assert len(fetch.calls) == 3


def test_totals_rule():
    assert is_totals_market("totals")
    assert is_totals_market("match_result_and_totals")
    assert not is_totals_market("match_result")
    assert compose_button_text("Over", "totals", None) == "Over"
    assert compose_button_text("Over", "totals", "") == "Over"
    assert compose_button_text("1", "match_result", "2.5") == "1"


def test_button_result_to_dict():
    assert ButtonResult("1", "high", "Match Result").to_dict() == {
        "buttonText": "1",
        "confidence": "high",
        "marketType": "Match Result",
    }
    assert ButtonResult.failure("x").to_dict()["explanation"] == "x"


def test_null_game_data_is_reported_as_not_found(monkeypatch):
    def handler(request):
        return httpx.Response(200, json={"data": None})

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    monkeypatch.setattr(subgraph, "game_api_client", lambda: client)

    result = asyncio.run(get_button_text("g", "c", "o"))

    assert result.button_text is None
    assert result.confidence == "low"
    assert result.explanation == "Game not found in API"
