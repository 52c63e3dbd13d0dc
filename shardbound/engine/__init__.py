"""
Shardbound Engine

Deterministic rules core for Shardbound.

Core systems:
- KL System: per-turn KL, God threshold, God Charges
- Card Movement: cost-gated plays, Crypt and Null relocation
- Turn Manager: round-robin turns and the start phase
- Combat: simultaneous damage and death processing
- API: setup helpers and the stable mutator surface
"""

from .types import (
    # Errors
    EngineError, NotFound, IllegalCost, IllegalSpend, InvalidConfiguration,

    # Model
    Zone, BOARD_ZONES, CardType, CardAbility, Card, Player, GameState,
)

from .zones import ZoneSlot, ListSlot, SingleSlot, slot_for, board_slots

from .resources import (
    GOD_THRESHOLD_KL, ABSOLUTE_KL_CAP, MIN_KL, MAX_GOD_CHARGES,
    MIN_TURN_FOR_GOD_CHARGE_SPEND,
    STATIC_KL_BONUSES, START_OF_TURN_KL_EFFECTS,
    recalculate_kl, check_god_threshold, can_spend_god_charges,
)

from .combat import CombatAssignment, CombatResult

from .cards import CardDatabase, card_from_data, load_card_database

from .api import (
    PlayerSetup, build_player_setup, create_player_from_setup, create_game_from_setups,
    get_active_player, get_opponent,
    start_turn, play_domain, play_shard, play_avatar, play_relic_or_support,
    send_to_crypt, send_to_null, resolve_combat, spend_god_charges,
)

__all__ = [
    # Errors
    'EngineError', 'NotFound', 'IllegalCost', 'IllegalSpend', 'InvalidConfiguration',

    # Model
    'Zone', 'BOARD_ZONES', 'CardType', 'CardAbility', 'Card', 'Player', 'GameState',

    # Zones
    'ZoneSlot', 'ListSlot', 'SingleSlot', 'slot_for', 'board_slots',

    # KL
    'GOD_THRESHOLD_KL', 'ABSOLUTE_KL_CAP', 'MIN_KL', 'MAX_GOD_CHARGES',
    'MIN_TURN_FOR_GOD_CHARGE_SPEND',
    'STATIC_KL_BONUSES', 'START_OF_TURN_KL_EFFECTS',
    'recalculate_kl', 'check_god_threshold', 'can_spend_god_charges',

    # Combat
    'CombatAssignment', 'CombatResult',

    # Card data
    'CardDatabase', 'card_from_data', 'load_card_database',

    # API
    'PlayerSetup', 'build_player_setup', 'create_player_from_setup', 'create_game_from_setups',
    'get_active_player', 'get_opponent',
    'start_turn', 'play_domain', 'play_shard', 'play_avatar', 'play_relic_or_support',
    'send_to_crypt', 'send_to_null', 'resolve_combat', 'spend_god_charges',
]
