"""
Card Movement Tests

Tests for playing cards from hand and relocating cards to the Crypt
and Null Zone.
"""

import pytest
from typing import Optional

from shardbound.engine.movement import (
    play_domain, play_shard, play_avatar, play_relic_or_support,
    send_to_crypt, send_to_null,
)
from shardbound.engine.types import (
    Card, CardType, GameState, IllegalCost, NotFound, Player, Zone,
)
from shardbound.engine.zones import ListSlot, ZoneSlot, SingleSlot, board_slots, locate, slot_for


def make_card(card_id: str, card_type: CardType, kl_cost: int = 0, zone: Zone = Zone.HAND) -> Card:
    return Card(
        card_id=card_id,
        name=card_id.title(),
        card_type=card_type,
        kl_cost=kl_cost,
        owner_id="P1",
        controller_id="P1",
        zone=zone,
    )


def make_state(current_kl: int = 5, hand: Optional[list[Card]] = None) -> GameState:
    deity = make_card("deity", CardType.DEITY, zone=Zone.DEITY_ZONE)
    player = Player(id="P1", deity=deity, base_kl=current_kl, current_kl=current_kl)
    player.hand = list(hand or [])
    return GameState(players=[player], first_player_id="P1", active_player_id="P1", turn_number=1)


class TestPlayFromHand:
    """Shards, Avatars and Relics/Supports leave hand and cost KL."""

    def test_play_shard(self):
        shard = make_card("shard", CardType.SHARD, kl_cost=0)
        state = make_state(current_kl=5, hand=[shard])
        play_shard(state, "P1", "shard")

        player = state.players[0]
        assert player.hand == []
        assert player.shard_row == [shard]
        assert shard.zone == Zone.SHARD_ROW
        assert player.current_kl == 5

    def test_play_avatar_charges_kl(self):
        avatar = make_card("knight", CardType.AVATAR, kl_cost=3)
        state = make_state(current_kl=5, hand=[avatar])
        play_avatar(state, "P1", "knight")

        player = state.players[0]
        assert player.avatar_line == [avatar]
        assert avatar.zone == Zone.AVATAR_LINE
        assert player.current_kl == 2

    def test_play_relic_or_support(self):
        relic = make_card("idol", CardType.RELIC, kl_cost=5)
        state = make_state(current_kl=5, hand=[relic])
        play_relic_or_support(state, "P1", "idol")

        player = state.players[0]
        assert player.relic_support_zone == [relic]
        assert relic.zone == Zone.RELIC_SUPPORT_ZONE
        assert player.current_kl == 0

    def test_play_sets_controller(self):
        avatar = make_card("stolen", CardType.AVATAR)
        avatar.controller_id = "P2"
        state = make_state(hand=[avatar])
        play_avatar(state, "P1", "stolen")
        assert avatar.controller_id == "P1"

    def test_insufficient_kl_changes_nothing(self):
        shard = make_card("shard", CardType.SHARD, kl_cost=4)
        state = make_state(current_kl=3, hand=[shard])

        with pytest.raises(IllegalCost):
            play_shard(state, "P1", "shard")

        player = state.players[0]
        assert player.hand == [shard]
        assert player.shard_row == []
        assert player.current_kl == 3
        assert shard.zone == Zone.HAND

    def test_negative_cost_rejected(self):
        avatar = make_card("broken", CardType.AVATAR, kl_cost=-1)
        state = make_state(current_kl=3, hand=[avatar])

        with pytest.raises(IllegalCost):
            play_avatar(state, "P1", "broken")
        assert state.players[0].current_kl == 3
        assert state.players[0].hand == [avatar]

    def test_card_not_in_hand(self):
        state = make_state()
        with pytest.raises(NotFound):
            play_avatar(state, "P1", "ghost")

    def test_unknown_player(self):
        state = make_state(hand=[make_card("shard", CardType.SHARD)])
        with pytest.raises(NotFound):
            play_shard(state, "P9", "shard")


class TestPlayDomain:
    """Only one Domain is in play; a new one replaces the old."""

    def test_play_first_domain(self):
        domain = make_card("steppe", CardType.DOMAIN, kl_cost=1)
        state = make_state(current_kl=2, hand=[domain])
        play_domain(state, "P1", "steppe")

        player = state.players[0]
        assert player.domain_zone is domain
        assert domain.zone == Zone.DOMAIN_ZONE
        assert player.current_kl == 1

    def test_second_domain_replaces_first(self):
        first = make_card("steppe", CardType.DOMAIN)
        second = make_card("caldera", CardType.DOMAIN)
        state = make_state(hand=[first, second])

        play_domain(state, "P1", "steppe")
        play_domain(state, "P1", "caldera")

        player = state.players[0]
        assert player.domain_zone is second
        assert player.crypt == [first]
        assert first.zone == Zone.CRYPT
        assert player.hand == []

    def test_failed_replacement_keeps_old_domain(self):
        first = make_card("steppe", CardType.DOMAIN, kl_cost=0)
        expensive = make_card("citadel", CardType.DOMAIN, kl_cost=9)
        state = make_state(current_kl=2, hand=[first, expensive])
        play_domain(state, "P1", "steppe")

        with pytest.raises(IllegalCost):
            play_domain(state, "P1", "citadel")

        player = state.players[0]
        assert player.domain_zone is first
        assert player.crypt == []
        assert player.hand == [expensive]


class TestSendToCrypt:
    """Board cards go to the Crypt; hand and deck are not searched."""

    def test_from_avatar_line(self):
        avatar = make_card("knight", CardType.AVATAR)
        state = make_state(hand=[avatar])
        play_avatar(state, "P1", "knight")

        send_to_crypt(state, "P1", "knight")

        player = state.players[0]
        assert player.avatar_line == []
        assert player.crypt == [avatar]
        assert avatar.zone == Zone.CRYPT

    def test_from_domain_zone(self):
        domain = make_card("steppe", CardType.DOMAIN)
        state = make_state(hand=[domain])
        play_domain(state, "P1", "steppe")

        send_to_crypt(state, "P1", "steppe")

        player = state.players[0]
        assert player.domain_zone is None
        assert player.crypt == [domain]

    def test_shard_row_searched_before_avatar_line(self):
        state = make_state()
        player = state.players[0]
        in_row = make_card("twin", CardType.SHARD, zone=Zone.SHARD_ROW)
        on_line = make_card("twin", CardType.AVATAR, zone=Zone.AVATAR_LINE)
        player.shard_row.append(in_row)
        player.avatar_line.append(on_line)

        send_to_crypt(state, "P1", "twin")

        assert player.crypt == [in_row]
        assert player.avatar_line == [on_line]

    def test_card_in_hand_not_found(self):
        state = make_state(hand=[make_card("knight", CardType.AVATAR)])
        with pytest.raises(NotFound):
            send_to_crypt(state, "P1", "knight")
        assert len(state.players[0].hand) == 1


class TestSendToNull:
    """Hand or board cards can be sent to the Null Zone."""

    def test_from_hand(self):
        spell = make_card("word", CardType.SPELL)
        state = make_state(hand=[spell])

        send_to_null(state, "P1", "word")

        player = state.players[0]
        assert player.hand == []
        assert player.null_zone == [spell]
        assert spell.zone == Zone.NULL_ZONE

    def test_from_board(self):
        relic = make_card("idol", CardType.RELIC)
        state = make_state(hand=[relic])
        play_relic_or_support(state, "P1", "idol")

        send_to_null(state, "P1", "idol")

        player = state.players[0]
        assert player.relic_support_zone == []
        assert player.null_zone == [relic]

    def test_crypt_not_searched(self):
        state = make_state()
        dead = make_card("fallen", CardType.AVATAR, zone=Zone.CRYPT)
        state.players[0].crypt.append(dead)

        with pytest.raises(NotFound):
            send_to_null(state, "P1", "fallen")
        assert state.players[0].crypt == [dead]


class TestZoneSlots:
    """Uniform accessors over list zones and the single Domain slot."""

    def test_slot_kinds(self):
        player = make_state().players[0]
        assert isinstance(slot_for(player, Zone.HAND), ListSlot)
        assert isinstance(slot_for(player, Zone.DOMAIN_ZONE), SingleSlot)
        assert Zone.DOMAIN_ZONE.is_single_slot
        assert not Zone.SHARD_ROW.is_single_slot

    def test_base_slot_is_abstract(self):
        with pytest.raises(TypeError):
            ZoneSlot()

    def test_deity_zone_has_no_slot(self):
        player = make_state().players[0]
        with pytest.raises(ValueError):
            slot_for(player, Zone.DEITY_ZONE)

    def test_domain_slot_holds_one_card(self):
        player = make_state().players[0]
        slot = slot_for(player, Zone.DOMAIN_ZONE)
        slot.put(make_card("grove", CardType.DOMAIN))

        with pytest.raises(ValueError):
            slot.put(make_card("marsh", CardType.DOMAIN))
        assert player.domain_zone.card_id == "grove"

    def test_locate_follows_board_order(self):
        player = make_state().players[0]
        player.avatar_line.append(make_card("knight", CardType.AVATAR, zone=Zone.AVATAR_LINE))

        slot = locate(board_slots(player), "knight")
        assert slot is not None
        assert slot.zone == Zone.AVATAR_LINE
        assert locate(board_slots(player), "ghost") is None
