"""
Shardbound Core Types

Cards, players and the game state are plain mutable records.
Everything that points across records does so by id.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


# =============================================================================
# Errors
# =============================================================================

class EngineError(Exception):
    """Base class for every rules violation raised by the engine."""


class NotFound(EngineError):
    """A referenced player, card or zone occupant is not where it should be."""


class IllegalCost(EngineError):
    """A KL cost cannot be paid, or the card data carries a negative cost."""


class IllegalSpend(EngineError):
    """A God Charge spend breaks the turn gate or the balance."""


class InvalidConfiguration(EngineError):
    """The game was set up with the wrong number of players or bad card data."""


# =============================================================================
# Zones
# =============================================================================

class Zone(str, Enum):
    HAND = "HAND"
    VEILED_DECK = "VEILED_DECK"
    CRYPT = "CRYPT"
    NULL_ZONE = "NULL_ZONE"
    DOMAIN_ZONE = "DOMAIN_ZONE"
    SHARD_ROW = "SHARD_ROW"
    AVATAR_LINE = "AVATAR_LINE"
    RELIC_SUPPORT_ZONE = "RELIC_SUPPORT_ZONE"
    DEITY_ZONE = "DEITY_ZONE"

    @property
    def is_single_slot(self) -> bool:
        return self in {Zone.DOMAIN_ZONE, Zone.DEITY_ZONE}


# Search order used whenever a card is pulled off the board
BOARD_ZONES = (
    Zone.SHARD_ROW,
    Zone.AVATAR_LINE,
    Zone.RELIC_SUPPORT_ZONE,
    Zone.DOMAIN_ZONE,
)


# =============================================================================
# Cards
# =============================================================================

class CardType(str, Enum):
    DEITY = "DEITY"
    DOMAIN = "DOMAIN"
    SHARD = "SHARD"
    AVATAR = "AVATAR"
    SPELL = "SPELL"
    RITE = "RITE"
    RELIC = "RELIC"
    SUPPORT = "SUPPORT"
    TOKEN = "TOKEN"


@dataclass
class CardAbility:
    id: str
    label: str
    description: str = ""


@dataclass
class Card:
    """
    A card instance in the game (not the card definition).

    Static fields come from the card database; the runtime fields below them
    are mutated in place by movement and combat.
    """
    card_id: str
    name: str
    card_type: CardType
    subtypes: list[str] = field(default_factory=list)
    domain_tag: str = ""
    kl_cost: int = 0
    power: Optional[int] = None
    guard: Optional[int] = None
    starting_essence: Optional[int] = None  # Deities only
    base_kl: Optional[int] = None           # Deities only
    abilities: list[CardAbility] = field(default_factory=list)
    is_token: bool = False

    # Runtime state
    owner_id: str = ""
    controller_id: str = ""
    zone: Zone = Zone.VEILED_DECK
    damage_marked: int = 0
    tapped: bool = False
    temporary_modifiers: list[Any] = field(default_factory=list)


# =============================================================================
# Players
# =============================================================================

@dataclass
class Player:
    id: str
    deity: Card

    # Resources
    essence: int = 0
    base_kl: int = 0
    current_kl: int = 0
    god_charges: int = 0
    kl_threshold_triggered_this_turn: bool = False

    # Zones
    hand: list[Card] = field(default_factory=list)
    veiled_deck: list[Card] = field(default_factory=list)  # front = top
    crypt: list[Card] = field(default_factory=list)
    null_zone: list[Card] = field(default_factory=list)
    domain_zone: Optional[Card] = None
    shard_row: list[Card] = field(default_factory=list)
    avatar_line: list[Card] = field(default_factory=list)
    relic_support_zone: list[Card] = field(default_factory=list)

    turns_taken: int = 0


# =============================================================================
# Game State
# =============================================================================

@dataclass
class GameState:
    """Complete game state. Player order is turn order."""
    players: list[Player] = field(default_factory=list)
    active_player_id: str = ""
    first_player_id: str = ""
    turn_number: int = 0  # 0 = not started

    def get_player(self, player_id: str) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        raise NotFound(f"Player with id {player_id} not found.")

    def has_player(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)
