"""
Shardbound KL System

KL is the per-turn resource pool:
- Base KL comes from the Deity
- +1 KL per Shard in the Shard Row
- Static and start-of-turn bonuses from card effects (hook registries)
- Always clamped to [0, 31]

Crossing 13 KL at the start of a turn banks a God Charge (max 3).
God Charges can't be spent before turn 4.
"""

import logging
from typing import Callable

from .types import IllegalSpend, Player

logger = logging.getLogger(__name__)


GOD_THRESHOLD_KL = 13
ABSOLUTE_KL_CAP = 31
MIN_KL = 0
MAX_GOD_CHARGES = 3
MIN_TURN_FOR_GOD_CHARGE_SPEND = 4


KlModifier = Callable[[Player], int]


def _no_static_bonus(player: Player) -> int:
    """Domains, Relics and Deity text will contribute here."""
    return 0


def _no_start_of_turn_effect(player: Player) -> int:
    """Triggered abilities and auras will contribute here."""
    return 0


# Extension points for card effects. Each modifier returns a KL delta.
STATIC_KL_BONUSES: list[KlModifier] = [_no_static_bonus]
START_OF_TURN_KL_EFFECTS: list[KlModifier] = [_no_start_of_turn_effect]


def get_static_kl_bonuses(player: Player) -> int:
    return sum(modifier(player) for modifier in STATIC_KL_BONUSES)


def get_start_of_turn_kl_effects(player: Player) -> int:
    return sum(modifier(player) for modifier in START_OF_TURN_KL_EFFECTS)


def recalculate_kl(player: Player) -> int:
    """
    Compute the player's KL from the current board.

    Pure: the caller assigns the result to player.current_kl.
    """
    kl = player.base_kl
    kl += len(player.shard_row)
    kl += get_static_kl_bonuses(player)
    kl += get_start_of_turn_kl_effects(player)

    return max(MIN_KL, min(ABSOLUTE_KL_CAP, kl))


def check_god_threshold(player: Player, old_kl: int, new_kl: int) -> None:
    """
    Grant a God Charge when KL crosses the threshold this turn.

    Only a strict crossing (old below, new at or above) counts, and only
    once per turn. A player already at the charge cap still uses up the
    trigger for the turn.
    """
    if player.kl_threshold_triggered_this_turn:
        return

    if old_kl < GOD_THRESHOLD_KL <= new_kl:
        if player.god_charges < MAX_GOD_CHARGES:
            player.god_charges += 1
        player.kl_threshold_triggered_this_turn = True
        logger.debug(
            "Player %s crossed the God threshold (%d -> %d KL), charges=%d",
            player.id, old_kl, new_kl, player.god_charges,
        )


def can_spend_god_charges(player: Player, amount: int, turn_number: int) -> bool:
    if amount <= 0:
        return False
    if turn_number < MIN_TURN_FOR_GOD_CHARGE_SPEND:
        return False
    if player.god_charges < amount:
        return False
    return True


def spend_god_charges(player: Player, amount: int, turn_number: int) -> None:
    """Spend God Charges; raises IllegalSpend instead of spending partially."""
    if not can_spend_god_charges(player, amount, turn_number):
        raise IllegalSpend(
            f"Cannot spend {amount} God Charge(s) on turn {turn_number} "
            f"with {player.god_charges} available."
        )

    player.god_charges -= amount
