"""
Engine API Tests

Tests for game setup from card data, lookups and the mutator surface.
"""

import json

import pytest

from shardbound.config import DEFAULT_CARD_DB
from shardbound.engine import api
from shardbound.engine.cards import card_from_data, load_card_database
from shardbound.engine.combat import CombatAssignment
from shardbound.engine.types import (
    Card, CardType, IllegalSpend, InvalidConfiguration, NotFound, Zone,
)


DEITY = {"id": "deity-ashkar", "name": "Ashkar", "type": "Deity", "essence": 25, "startingKL": 3}

POOL = [
    {"id": f"c{i:02d}", "name": f"Card {i}", "type": "Avatar", "cost": 1, "attack": 2, "health": 2}
    for i in range(30)
]


def make_setup(player_id: str, deck_start: int = 0, deck_size: int = 5) -> api.PlayerSetup:
    return api.build_player_setup(player_id, DEITY, POOL, deck_start=deck_start, deck_size=deck_size)


# =============================================================================
# Card data
# =============================================================================

class TestCardFromData:
    """Raw card records normalize into Card instances."""

    def test_aliases(self):
        card = card_from_data(
            {"id": "x", "name": "Kiln Hound", "type": "avatar", "attack": 3, "health": 1,
             "aspects": ["Flame"], "domainTag": "Cinder", "cost": 2},
            "P1",
        )
        assert card.card_type == CardType.AVATAR
        assert card.power == 3
        assert card.guard == 1
        assert card.subtypes == ["Flame"]
        assert card.domain_tag == "Cinder"
        assert card.kl_cost == 2
        assert card.owner_id == "P1"
        assert card.controller_id == "P1"
        assert card.zone == Zone.VEILED_DECK

    def test_defaults(self):
        card = card_from_data({"id": "s", "name": "Shard", "type": "Shard"}, "P2")
        assert card.power == 0
        assert card.guard == 1
        assert card.kl_cost == 0
        assert card.damage_marked == 0
        assert not card.tapped
        assert not card.is_token

    def test_deity_fields(self):
        deity = card_from_data(DEITY, "P1", Zone.DEITY_ZONE)
        assert deity.card_type == CardType.DEITY
        assert deity.starting_essence == 25
        assert deity.base_kl == 3
        assert deity.zone == Zone.DEITY_ZONE

    def test_toughness_preferred_over_health(self):
        card = card_from_data({"id": "t", "type": "Avatar", "toughness": 4, "health": 2}, "P1")
        assert card.guard == 4

    def test_token_flag(self):
        card = card_from_data({"id": "t", "type": "Token", "isToken": True}, "P1")
        assert card.is_token

    def test_unknown_type(self):
        with pytest.raises(InvalidConfiguration):
            card_from_data({"id": "q", "type": "Planeswalker"}, "P1")

    def test_missing_id(self):
        with pytest.raises(InvalidConfiguration):
            card_from_data({"type": "Avatar"}, "P1")

    def test_non_numeric_stat(self):
        with pytest.raises(InvalidConfiguration):
            card_from_data({"id": "x", "type": "Avatar", "cost": "two"}, "P1")
        with pytest.raises(InvalidConfiguration):
            card_from_data({"id": "y", "type": "Avatar", "attack": [3]}, "P1")


class TestCardDatabase:

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps({"deities": [DEITY], "cards": POOL[:3]}))

        db = load_card_database(path)
        assert len(db.deities) == 1
        assert len(db.cards) == 3
        assert db.get_deity(0)["id"] == "deity-ashkar"
        assert db.get_deity(7)["id"] == "deity-ashkar"

    def test_bundled_database_deals_two_decks(self):
        db = load_card_database(DEFAULT_CARD_DB)
        assert len(db.deities) >= 2
        assert len(db.cards) >= 32
        for raw in db.deities + db.cards:
            card_from_data(raw, "P1")

    def test_empty_deities(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps({"cards": []}))
        with pytest.raises(InvalidConfiguration):
            load_card_database(path).get_deity(0)


# =============================================================================
# Setup
# =============================================================================

class TestGameSetup:
    """Players and games are built from setups."""

    def test_player_from_setup(self):
        player = api.create_player_from_setup(make_setup("P1"))
        assert player.essence == 25
        assert player.base_kl == 3
        assert player.current_kl == 3
        assert player.god_charges == 0
        assert len(player.veiled_deck) == 5
        assert player.hand == []
        assert player.domain_zone is None

    def test_deck_is_copied(self):
        setup = make_setup("P1")
        player = api.create_player_from_setup(setup)
        player.veiled_deck.pop()
        assert len(setup.veiled_deck) == 5

    def test_deity_without_stats(self):
        deity = Card(card_id="d", name="Nameless", card_type=CardType.DEITY, zone=Zone.DEITY_ZONE)
        player = api.create_player_from_setup(api.PlayerSetup(id="P1", deity=deity))
        assert player.essence == 0
        assert player.base_kl == 0

    def test_deck_slice(self):
        setup = make_setup("P2", deck_start=20, deck_size=12)
        assert [c.card_id for c in setup.veiled_deck] == [f"c{i}" for i in range(20, 30)]
        assert all(c.owner_id == "P2" for c in setup.veiled_deck)

    def test_game_defaults(self):
        state = api.create_game_from_setups([make_setup("P1"), make_setup("P2")])
        assert state.turn_number == 0
        assert state.active_player_id == ""
        assert state.first_player_id == "P1"
        assert [p.id for p in state.players] == ["P1", "P2"]

    def test_designated_first_player(self):
        state = api.create_game_from_setups([make_setup("P1"), make_setup("P2")], "P2")
        assert state.first_player_id == "P2"

    def test_unknown_first_player(self):
        with pytest.raises(InvalidConfiguration):
            api.create_game_from_setups([make_setup("P1")], "P5")

    def test_no_setups(self):
        with pytest.raises(InvalidConfiguration):
            api.create_game_from_setups([])

    def test_duplicate_player_ids(self):
        with pytest.raises(InvalidConfiguration):
            api.create_game_from_setups([make_setup("A"), make_setup("A", deck_start=10)])

    def test_deity_placed_in_deity_zone(self):
        deity = Card(card_id="d", name="Nameless", card_type=CardType.DEITY)
        assert deity.zone == Zone.VEILED_DECK
        player = api.create_player_from_setup(api.PlayerSetup(id="P1", deity=deity))
        assert player.deity.zone == Zone.DEITY_ZONE


class TestLookups:

    def test_active_player_before_start(self):
        state = api.create_game_from_setups([make_setup("P1"), make_setup("P2")])
        with pytest.raises(NotFound):
            api.get_active_player(state)

    def test_active_player(self):
        state = api.create_game_from_setups([make_setup("P1"), make_setup("P2")])
        api.start_turn(state)
        assert api.get_active_player(state).id == "P1"

    def test_opponent(self):
        state = api.create_game_from_setups([make_setup("P1"), make_setup("P2")])
        assert api.get_opponent(state, "P1").id == "P2"
        assert api.get_opponent(state, "P2").id == "P1"

    def test_opponent_requires_two_players(self):
        three = api.create_game_from_setups([make_setup("P1"), make_setup("P2"), make_setup("P3")])
        with pytest.raises(InvalidConfiguration):
            api.get_opponent(three, "P1")

        solo = api.create_game_from_setups([make_setup("P1")])
        with pytest.raises(InvalidConfiguration):
            api.get_opponent(solo, "P1")


# =============================================================================
# Full flow
# =============================================================================

def test_play_and_attack_through_api():
    """Two players take turns, deploy avatars and fight."""
    state = api.create_game_from_setups([make_setup("P1"), make_setup("P2", deck_start=10)])

    api.start_turn(state)   # P1 turn 1, no draw
    api.start_turn(state)   # P2 turn 2, draws c10
    api.play_avatar(state, "P2", "c10")
    api.start_turn(state)   # P1 turn 3, draws c00
    api.play_avatar(state, "P1", "c00")
    api.start_turn(state)   # P2 turn 4

    result = api.resolve_combat(state, "P2", "P1", [CombatAssignment("c10", "c00")])

    p1, p2 = state.players
    assert result.dead_attackers == ["c10"]
    assert result.dead_defenders == ["c00"]
    assert [c.card_id for c in p1.crypt] == ["c00"]
    assert [c.card_id for c in p2.crypt] == ["c10"]
    assert p1.essence == 25


def test_spend_god_charges_uses_turn_number():
    state = api.create_game_from_setups([make_setup("P1"), make_setup("P2")])
    state.players[0].god_charges = 2

    api.start_turn(state)
    with pytest.raises(IllegalSpend):
        api.spend_god_charges(state, "P1", 1)

    for _ in range(3):
        api.start_turn(state)
    assert state.turn_number == 4
    api.spend_god_charges(state, "P1", 2)
    assert state.players[0].god_charges == 0
