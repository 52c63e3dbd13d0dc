"""
Shardbound Card Movement

Moves cards between a player's zones:
- Playing cards from hand onto the board (pays KL)
- Domain replacement (the old Domain goes to the Crypt)
- Sending board cards to the Crypt, or hand/board cards to the Null Zone

Every move validates first and mutates second, so a failed call
leaves the card exactly where it was.
"""

import logging

from .types import Card, GameState, IllegalCost, NotFound, Player, Zone
from .zones import ZoneSlot, board_slots, locate, slot_for

logger = logging.getLogger(__name__)


def _validate_kl_cost(player: Player, card: Card) -> int:
    """Check the player can pay for the card; returns the cost."""
    cost = card.kl_cost or 0
    if cost < 0:
        raise IllegalCost(f"Card {card.card_id} has negative KL cost, which is invalid.")
    if player.current_kl < cost:
        raise IllegalCost(
            f"Player {player.id} cannot pay KL cost {cost} for card {card.card_id} "
            f"(only {player.current_kl} KL available)."
        )
    return cost


def _find_in_hand(player: Player, card_id: str) -> Card:
    card = slot_for(player, Zone.HAND).find(card_id)
    if card is None:
        raise NotFound(f"Card {card_id} not found in hand of player {player.id}.")
    return card


def _relocate(slot: ZoneSlot, card_id: str, player: Player, destination: Zone) -> Card:
    card = slot.remove(card_id)
    card.zone = destination
    slot_for(player, destination).put(card)
    return card


def _play_from_hand(state: GameState, player_id: str, card_id: str, target: Zone) -> Card:
    player = state.get_player(player_id)
    card = _find_in_hand(player, card_id)
    cost = _validate_kl_cost(player, card)

    if target is Zone.DOMAIN_ZONE and player.domain_zone is not None:
        old = _relocate(slot_for(player, Zone.DOMAIN_ZONE), player.domain_zone.card_id, player, Zone.CRYPT)
        logger.debug("Domain %s replaced, sent to Crypt of %s", old.card_id, player.id)

    player.current_kl -= cost
    slot_for(player, Zone.HAND).remove(card_id)
    card.zone = target
    card.controller_id = player.id
    slot_for(player, target).put(card)

    logger.debug(
        "Player %s played %s to %s for %d KL (%d left)",
        player.id, card.card_id, target.value, cost, player.current_kl,
    )
    return card


def play_domain(state: GameState, player_id: str, card_id: str) -> None:
    """Play a Domain from hand, replacing any Domain already in play."""
    _play_from_hand(state, player_id, card_id, Zone.DOMAIN_ZONE)


def play_shard(state: GameState, player_id: str, card_id: str) -> None:
    _play_from_hand(state, player_id, card_id, Zone.SHARD_ROW)


def play_avatar(state: GameState, player_id: str, card_id: str) -> None:
    _play_from_hand(state, player_id, card_id, Zone.AVATAR_LINE)


def play_relic_or_support(state: GameState, player_id: str, card_id: str) -> None:
    _play_from_hand(state, player_id, card_id, Zone.RELIC_SUPPORT_ZONE)


def send_to_crypt(state: GameState, player_id: str, card_id: str) -> None:
    """Send a card from the player's board to their Crypt."""
    player = state.get_player(player_id)
    slot = locate(board_slots(player), card_id)
    if slot is None:
        raise NotFound(f"Card {card_id} not found on board to send to Crypt.")

    _relocate(slot, card_id, player, Zone.CRYPT)
    logger.debug("Card %s of %s sent to Crypt from %s", card_id, player.id, slot.zone.value)


def send_to_null(state: GameState, player_id: str, card_id: str) -> None:
    """Send a card from the player's hand or board to the Null Zone."""
    player = state.get_player(player_id)
    slots = [slot_for(player, Zone.HAND)] + board_slots(player)
    slot = locate(slots, card_id)
    if slot is None:
        raise NotFound(f"Card {card_id} not found to send to Null.")

    _relocate(slot, card_id, player, Zone.NULL_ZONE)
    logger.debug("Card %s of %s sent to Null from %s", card_id, player.id, slot.zone.value)
