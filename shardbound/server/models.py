"""
Pydantic Models for the Shardbound API

Data transfer objects for the REST API and WebSocket communication.
"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


# =============================================================================
# Enums
# =============================================================================

class ActionType(str, Enum):
    """Player action types."""
    START_TURN = "START_TURN"
    PLAY_DOMAIN = "PLAY_DOMAIN"
    PLAY_SHARD = "PLAY_SHARD"
    PLAY_AVATAR = "PLAY_AVATAR"
    PLAY_RELIC_OR_SUPPORT = "PLAY_RELIC_OR_SUPPORT"
    SEND_TO_CRYPT = "SEND_TO_CRYPT"
    SEND_TO_NULL = "SEND_TO_NULL"
    RESOLVE_COMBAT = "RESOLVE_COMBAT"
    SPEND_GOD_CHARGES = "SPEND_GOD_CHARGES"


# =============================================================================
# Request Models
# =============================================================================

class CreateMatchRequest(BaseModel):
    """Request to create a new two-player match."""
    player_ids: list[str] = Field(default_factory=lambda: ["P1", "P2"], min_length=2, max_length=2)
    deity_indexes: list[int] = Field(default_factory=lambda: [0, 1], description="Deity per seat, by index")
    first_player_id: Optional[str] = Field(default=None, description="Defaults to the first seat")
    start: bool = Field(default=False, description="Run the first turn right away")


class CombatAssignmentData(BaseModel):
    """An attacker and its optional blocker."""
    attacker_card_id: str
    blocker_card_id: Optional[str] = None


class PlayerActionRequest(BaseModel):
    """Request to perform a player action."""
    action_type: ActionType
    player_id: str = ""
    card_id: Optional[str] = None
    defender_id: Optional[str] = Field(default=None, description="Defaults to the opponent")
    assignments: list[CombatAssignmentData] = Field(default_factory=list)
    amount: int = 0


# =============================================================================
# Response Models
# =============================================================================

class CreateMatchResponse(BaseModel):
    """Response after creating a match."""
    match_id: str
    player_ids: list[str]
    status: str = "created"


class CardData(BaseModel):
    """Card data for API responses."""
    id: str
    name: str
    type: str
    subtypes: list[str] = Field(default_factory=list)
    domain_tag: str = ""
    kl_cost: int = 0
    power: Optional[int] = None
    guard: Optional[int] = None
    zone: str
    damage_marked: int = 0
    tapped: bool = False
    is_token: bool = False
    owner: str = ""
    controller: str = ""


class PlayerData(BaseModel):
    """Player data for API responses."""
    id: str
    deity: CardData
    essence: int
    base_kl: int
    current_kl: int
    god_charges: int
    turns_taken: int = 0
    hand_size: int = 0
    veiled_deck_size: int = 0
    hand: list[CardData] = Field(default_factory=list)
    crypt: list[CardData] = Field(default_factory=list)
    null_zone: list[CardData] = Field(default_factory=list)
    domain: Optional[CardData] = None
    shard_row: list[CardData] = Field(default_factory=list)
    avatar_line: list[CardData] = Field(default_factory=list)
    relic_support_zone: list[CardData] = Field(default_factory=list)


class GameStateResponse(BaseModel):
    """Complete game state."""
    match_id: str
    turn_number: int
    active_player: Optional[str] = None
    first_player: str
    players: list[PlayerData]


class CombatResultData(BaseModel):
    """Outcome of a resolved combat."""
    unblocked_damage: int = 0
    dead_attackers: list[str] = Field(default_factory=list)
    dead_defenders: list[str] = Field(default_factory=list)


class ActionResultResponse(BaseModel):
    """Response after processing an action."""
    success: bool
    message: str = ""
    new_state: Optional[GameStateResponse] = None
    combat: Optional[CombatResultData] = None


class CardListResponse(BaseModel):
    """Response with the card database."""
    deities: list[dict]
    cards: list[dict]
    total: int
