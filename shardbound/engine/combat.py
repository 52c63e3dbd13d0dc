"""
Shardbound Combat

Resolves one declared attack in a single shot:
- Attackers tap on declaration
- Blocked pairs deal damage to each other simultaneously
- Unblocked power is summed and taken from the defender's Essence
- Deaths are checked only after all damage is marked
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .movement import send_to_crypt
from .types import Card, GameState, NotFound, Player

logger = logging.getLogger(__name__)


@dataclass
class CombatAssignment:
    """One attacker and the blocker assigned to it (None = unblocked)."""
    attacker_card_id: str
    blocker_card_id: Optional[str] = None


@dataclass
class CombatResult:
    """What happened in a resolved combat."""
    unblocked_damage: int = 0
    dead_attackers: list[str] = field(default_factory=list)
    dead_defenders: list[str] = field(default_factory=list)


def get_power(card: Card) -> int:
    return card.power if card.power is not None else 0


def get_guard(card: Card) -> int:
    # No stated guard: the card dies to any damage
    return card.guard if card.guard is not None else 1


def mark_damage(card: Card, amount: int) -> None:
    if amount <= 0:
        return
    card.damage_marked += amount


def is_dead(card: Card) -> bool:
    return card.damage_marked >= get_guard(card)


def find_avatar_on_line(player: Player, card_id: str) -> Card:
    for card in player.avatar_line:
        if card.card_id == card_id:
            return card
    raise NotFound(f"Avatar {card_id} not found on avatar line for player {player.id}.")


def resolve_combat(
    state: GameState,
    attacking_player_id: str,
    defending_player_id: str,
    assignments: list[CombatAssignment],
) -> CombatResult:
    """
    Resolve combat between the attacking and defending players.

    Every attacker must be on the attacking player's avatar line and every
    named blocker on the defending player's. All of them are looked up
    before anything is tapped or damaged.
    """
    attacker_player = state.get_player(attacking_player_id)
    defender_player = state.get_player(defending_player_id)

    pairs: list[tuple[Card, Optional[Card]]] = []
    for assign in assignments:
        attacker = find_avatar_on_line(attacker_player, assign.attacker_card_id)
        blocker = None
        if assign.blocker_card_id:
            blocker = find_avatar_on_line(defender_player, assign.blocker_card_id)
        pairs.append((attacker, blocker))

    for attacker, _ in pairs:
        attacker.tapped = True

    result = CombatResult()
    for attacker, blocker in pairs:
        if blocker is not None:
            attacker_power = get_power(attacker)
            blocker_power = get_power(blocker)
            mark_damage(attacker, blocker_power)
            mark_damage(blocker, attacker_power)
        else:
            result.unblocked_damage += get_power(attacker)

    if result.unblocked_damage > 0:
        defender_player.essence = max(0, defender_player.essence - result.unblocked_damage)

    # Snapshot ids before moving anything off the lines
    result.dead_attackers = [c.card_id for c in attacker_player.avatar_line if is_dead(c)]
    if defender_player is not attacker_player:
        result.dead_defenders = [c.card_id for c in defender_player.avatar_line if is_dead(c)]

    for card_id in result.dead_attackers:
        send_to_crypt(state, attacking_player_id, card_id)
    for card_id in result.dead_defenders:
        send_to_crypt(state, defending_player_id, card_id)

    logger.debug(
        "Combat %s -> %s: %d unblocked damage, %d attacker(s) and %d defender(s) died",
        attacking_player_id, defending_player_id, result.unblocked_damage,
        len(result.dead_attackers), len(result.dead_defenders),
    )
    return result
