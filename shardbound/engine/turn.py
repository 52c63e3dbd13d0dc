"""
Shardbound Turn Manager

Turn structure:
1. start_turn advances turn number and rotates the active player
   (round-robin over the player list)
2. Start phase for the new active player:
   - Untap every permanent
   - Draw (the first player skips the draw on turn 1)
   - Reset the God threshold flag
   - Recalculate KL and check the God threshold

There is no end phase in the core; the next start_turn call ends the turn.
"""

import logging

from .resources import check_god_threshold, recalculate_kl
from .types import GameState, InvalidConfiguration, NotFound, Player, Zone
from .zones import board_slots

logger = logging.getLogger(__name__)


def get_active_player(state: GameState) -> Player:
    for player in state.players:
        if player.id == state.active_player_id:
            return player
    raise NotFound(f"Active player with id {state.active_player_id} not found in GameState.")


def ready_all_permanents(player: Player) -> None:
    """Untap the domain occupant and every card in the board rows."""
    for slot in board_slots(player):
        for card in slot.cards():
            card.tapped = False


def draw_card(player: Player) -> None:
    """Draw the top (front) card of the veiled deck. Empty deck is a no-op."""
    if not player.veiled_deck:
        return
    card = player.veiled_deck.pop(0)
    card.zone = Zone.HAND
    player.hand.append(card)


def start_phase(state: GameState) -> None:
    """Run the start phase for the current active player."""
    player = get_active_player(state)

    ready_all_permanents(player)

    skip_draw = state.turn_number == 1 and player.id == state.first_player_id
    if not skip_draw:
        draw_card(player)

    player.kl_threshold_triggered_this_turn = False

    old_kl = player.current_kl
    new_kl = recalculate_kl(player)
    player.current_kl = new_kl
    check_god_threshold(player, old_kl, new_kl)

    player.turns_taken += 1


def start_turn(state: GameState) -> None:
    """
    Advance the game to the next turn and run the start phase.

    The first call begins the game on turn 1 with the designated first
    player. Later calls rotate to the next player in list order.
    """
    if not state.players:
        raise InvalidConfiguration("GameState has no players.")

    if state.turn_number == 0:
        if not state.has_player(state.first_player_id):
            raise InvalidConfiguration(
                f"First player {state.first_player_id!r} is not in the game."
            )
        state.turn_number = 1
        state.active_player_id = state.first_player_id
    else:
        state.turn_number += 1
        ids = [p.id for p in state.players]
        if state.active_player_id in ids:
            next_index = (ids.index(state.active_player_id) + 1) % len(ids)
        else:
            next_index = 0
        state.active_player_id = ids[next_index]

    logger.debug("Turn %d begins for %s", state.turn_number, state.active_player_id)
    start_phase(state)
