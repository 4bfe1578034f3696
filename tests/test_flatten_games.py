import copy

from betadvisor.data.dictionaries import StaticOutcomeDictionary
from betadvisor.services.matches import flatten_games
from betadvisor.services.name_resolver import UNKNOWN_MARKET, OutcomeNameResolver


class RecordingResolver(OutcomeNameResolver):
    def __init__(self):
        super().__init__(StaticOutcomeDictionary())
        self.market_calls = []
        self.selection_calls = []

    def market_name(self, outcome_id):
        self.market_calls.append(outcome_id)
        return super().market_name(outcome_id)

    def selection_name(self, outcome_id):
        self.selection_calls.append(outcome_id)
        return super().selection_name(outcome_id)


def test_one_match_per_game_in_tree_order(games_tree):
    matches = flatten_games(games_tree, RecordingResolver())
    assert [m.id for m in matches] == ["g-1", "g-2", "g-3"]


def test_ancestor_names_and_scalars(games_tree):
    first, _, third = flatten_games(games_tree, RecordingResolver())
    assert (first.sport_name, first.country_name, first.league_name) == ("Football", "England", "Premier League")
    assert (third.country_name, third.league_name) == ("Spain", "La Liga")
    assert first.title == "Arsenal - Chelsea"
    assert first.starts_at == 1696172400
    assert third.starts_at == 1696179600
    assert first.status == "Created"


def test_participants_keep_source_order(games_tree):
    third = flatten_games(games_tree, RecordingResolver())[2]
    assert [(p.name, p.sort_order) for p in third.participants] == [("Getafe", 1), ("Betis", 0)]


def test_condition_and_outcome_order_preserved(games_tree):
    first = flatten_games(games_tree, RecordingResolver())[0]
    assert [c.condition_id for c in first.conditions] == ["c-1x2", "c-total"]
    assert [o.outcome_id for o in first.conditions[0].outcomes] == ["29", "30", "31"]
    assert [o.outcome_id for o in first.conditions[1].outcomes] == ["10", "9"]
    assert [o.current_odds for o in first.conditions[1].outcomes] == ["1.9", "1.95"]


def test_condition_named_after_first_outcome(games_tree):
    resolver = RecordingResolver()
    matches = flatten_games(games_tree, resolver)
    for match in matches:
        for condition in match.conditions:
            if condition.outcomes:
                assert condition.name == resolver.market_name(condition.outcomes[0].outcome_id)
    total = matches[0].conditions[1]
    assert total.name == "Total Goals"
    assert [o.name for o in total.outcomes] == ["Under", "Over"]


def test_resolver_called_once_per_condition_and_once_per_outcome(games_tree):
    resolver = RecordingResolver()
    flatten_games(games_tree, resolver)
    assert resolver.market_calls == ["29", "10", "4"]
    assert resolver.selection_calls == ["29", "30", "31", "10", "9", "4", "6"]


def test_game_without_conditions_has_empty_conditions(games_tree):
    second = flatten_games(games_tree, RecordingResolver())[1]
    assert second.conditions == ()


def test_condition_without_outcomes_is_unknown_market(games_tree):
    third = flatten_games(games_tree, RecordingResolver())[2]
    empty = third.conditions[1]
    assert empty.condition_id == "c-empty"
    assert empty.name == UNKNOWN_MARKET
    assert empty.outcomes == ()


def test_unknown_outcomes_do_not_abort_traversal():
    tree = {
        "sports": [
            {
                "name": "Tennis",
                "countries": [
                    {
                        "name": "World",
                        "leagues": [
                            {
                                "name": "ATP",
                                "games": [
                                    {
                                        "gameId": "t-1",
                                        "title": "A - B",
                                        "startsAt": "1",
                                        "status": "Created",
                                        "participants": [],
                                        "conditions": [
                                            {
                                                "conditionId": "c",
                                                "status": "Created",
                                                "outcomes": [{"outcomeId": "424242", "currentOdds": "2"}],
                                            }
                                        ],
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ]
    }
    (match,) = flatten_games(tree, RecordingResolver())
    assert match.conditions[0].name == "Unknown Market"
    assert match.conditions[0].outcomes[0].name == "Unknown Selection"


def test_input_tree_not_mutated(games_tree):
    before = copy.deepcopy(games_tree)
    flatten_games(games_tree, RecordingResolver())
    assert games_tree == before


def test_empty_tree():
    assert flatten_games({"sports": []}, RecordingResolver()) == []
