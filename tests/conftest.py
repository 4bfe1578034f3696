import copy
import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DICTIONARY_MODE", "dictionary")
os.environ.setdefault("LOG_LEVEL", "WARNING")

_GAMES_TREE = {
    "sports": [
        {
            "name": "Football",
            "countries": [
                {
                    "name": "England",
                    "leagues": [
                        {
                            "name": "Premier League",
                            "games": [
                                {
                                    "gameId": "g-1",
                                    "title": "Arsenal - Chelsea",
                                    "startsAt": "1696172400",
                                    "status": "Created",
                                    "participants": [
                                        {"name": "Arsenal", "sortOrder": 0},
                                        {"name": "Chelsea", "sortOrder": 1},
                                    ],
                                    "conditions": [
                                        {
                                            "conditionId": "c-1x2",
                                            "status": "Created",
                                            "outcomes": [
                                                {"outcomeId": "29", "currentOdds": "1.85"},
                                                {"outcomeId": "30", "currentOdds": "3.4"},
                                                {"outcomeId": "31", "currentOdds": "4.1"},
                                            ],
                                        },
                                        {
                                            "conditionId": "c-total",
                                            "status": "Created",
                                            "outcomes": [
                                                {"outcomeId": "10", "currentOdds": "1.9"},
                                                {"outcomeId": "9", "currentOdds": "1.95"},
                                            ],
                                        },
                                    ],
                                },
                                {
                                    "gameId": "g-2",
                                    "title": "Leeds - Hull",
                                    "startsAt": "1696176000",
                                    "status": "Created",
                                    "participants": [
                                        {"name": "Leeds", "sortOrder": 0},
                                        {"name": "Hull", "sortOrder": 1},
                                    ],
                                    "conditions": [],
                                },
                            ],
                        }
                    ],
                },
                {
                    "name": "Spain",
                    "leagues": [
                        {
                            "name": "La Liga",
                            "games": [
                                {
                                    "gameId": "g-3",
                                    "title": "Betis - Getafe",
                                    "startsAt": 1696179600,
                                    "status": "Created",
                                    "participants": [
                                        {"name": "Getafe", "sortOrder": 1},
                                        {"name": "Betis", "sortOrder": 0},
                                    ],
                                    "conditions": [
                                        {
                                            "conditionId": "c-dc",
                                            "status": "Paused",
                                            "outcomes": [
                                                {"outcomeId": "4", "currentOdds": "1.15"},
                                                {"outcomeId": "6", "currentOdds": "1.1"},
                                            ],
                                        },
                                        {"conditionId": "c-empty", "status": "Created", "outcomes": []},
                                    ],
                                }
                            ],
                        }
                    ],
                },
            ],
        }
    ]
}


@pytest.fixture()
def games_tree():
    return copy.deepcopy(_GAMES_TREE)


@pytest.fixture()
def api_client():
    from fastapi.testclient import TestClient

    from betadvisor.main import app

    client = TestClient(app)
    try:
        yield client
    finally:
        client.close()
