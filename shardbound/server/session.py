"""
Game Session Management

Manages active game sessions, player connections, and game state.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4
import logging

from shardbound.config import get_config
from shardbound.engine import api
from shardbound.engine.cards import CardDatabase, deck_offsets, load_card_database
from shardbound.engine.combat import CombatAssignment, CombatResult
from shardbound.engine.types import Card, EngineError, GameState, Player

from .models import (
    ActionType, CardData, CreateMatchRequest, GameStateResponse,
    PlayerActionRequest, PlayerData,
)

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid4())[:8]


def serialize_card(card: Card) -> CardData:
    return CardData(
        id=card.card_id,
        name=card.name,
        type=card.card_type.value,
        subtypes=list(card.subtypes),
        domain_tag=card.domain_tag,
        kl_cost=card.kl_cost,
        power=card.power,
        guard=card.guard,
        zone=card.zone.value,
        damage_marked=card.damage_marked,
        tapped=card.tapped,
        is_token=card.is_token,
        owner=card.owner_id,
        controller=card.controller_id,
    )


def serialize_player(player: Player) -> PlayerData:
    return PlayerData(
        id=player.id,
        deity=serialize_card(player.deity),
        essence=player.essence,
        base_kl=player.base_kl,
        current_kl=player.current_kl,
        god_charges=player.god_charges,
        turns_taken=player.turns_taken,
        hand_size=len(player.hand),
        veiled_deck_size=len(player.veiled_deck),
        hand=[serialize_card(c) for c in player.hand],
        crypt=[serialize_card(c) for c in player.crypt],
        null_zone=[serialize_card(c) for c in player.null_zone],
        domain=serialize_card(player.domain_zone) if player.domain_zone else None,
        shard_row=[serialize_card(c) for c in player.shard_row],
        avatar_line=[serialize_card(c) for c in player.avatar_line],
        relic_support_zone=[serialize_card(c) for c in player.relic_support_zone],
    )


@dataclass
class GameSession:
    """
    Manages a single game session.

    Wraps the engine GameState and provides:
    - Player socket tracking
    - State serialization for clients
    - Action dispatch, one action at a time
    """
    id: str
    state: GameState

    player_ids: list[str] = field(default_factory=list)
    player_sockets: dict[str, str] = field(default_factory=dict)  # player_id -> socket_id

    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def connect_socket(self, player_id: str, socket_id: str) -> None:
        self.player_sockets[player_id] = socket_id

    def disconnect_socket(self, socket_id: str) -> Optional[str]:
        """Forget a socket; returns the player it belonged to."""
        for pid, sid in list(self.player_sockets.items()):
            if sid == socket_id:
                del self.player_sockets[pid]
                return pid
        return None

    def get_client_state(self) -> GameStateResponse:
        return GameStateResponse(
            match_id=self.id,
            turn_number=self.state.turn_number,
            active_player=self.state.active_player_id or None,
            first_player=self.state.first_player_id,
            players=[serialize_player(p) for p in self.state.players],
        )

    async def handle_action(
        self, action: PlayerActionRequest
    ) -> tuple[bool, str, Optional[CombatResult]]:
        """
        Apply a player action to the game.

        Returns (success, message, combat result if any). Rules violations
        come back as failures; the game stays usable.
        """
        async with self._lock:
            try:
                combat = self._dispatch(action)
            except EngineError as e:
                logger.info("Match %s rejected %s: %s", self.id, action.action_type.value, e)
                return False, str(e), None

        return True, f"{action.action_type.value} applied", combat

    def _dispatch(self, action: PlayerActionRequest) -> Optional[CombatResult]:
        state = self.state
        kind = action.action_type

        if kind == ActionType.START_TURN:
            api.start_turn(state)
            return None

        if kind == ActionType.RESOLVE_COMBAT:
            defender_id = action.defender_id or api.get_opponent(state, action.player_id).id
            assignments = [
                CombatAssignment(a.attacker_card_id, a.blocker_card_id)
                for a in action.assignments
            ]
            return api.resolve_combat(state, action.player_id, defender_id, assignments)

        if kind == ActionType.SPEND_GOD_CHARGES:
            api.spend_god_charges(state, action.player_id, action.amount)
            return None

        card_moves = {
            ActionType.PLAY_DOMAIN: api.play_domain,
            ActionType.PLAY_SHARD: api.play_shard,
            ActionType.PLAY_AVATAR: api.play_avatar,
            ActionType.PLAY_RELIC_OR_SUPPORT: api.play_relic_or_support,
            ActionType.SEND_TO_CRYPT: api.send_to_crypt,
            ActionType.SEND_TO_NULL: api.send_to_null,
        }
        move = card_moves[kind]
        move(state, action.player_id, action.card_id or "")
        return None


class SessionManager:
    """
    Manages all active game sessions.
    """

    def __init__(self, card_db: Optional[CardDatabase] = None):
        self.sessions: dict[str, GameSession] = {}
        self._lock = asyncio.Lock()
        self._card_db = card_db

    @property
    def card_db(self) -> CardDatabase:
        if self._card_db is None:
            self._card_db = load_card_database(get_config().card_db_path)
        return self._card_db

    async def create_session(self, request: CreateMatchRequest) -> GameSession:
        """Create a new game session with decks dealt from the card database."""
        db = self.card_db
        deck_size = get_config().deck_size
        offsets = deck_offsets(len(request.player_ids))

        setups = []
        for seat, player_id in enumerate(request.player_ids):
            deity_index = request.deity_indexes[seat] if seat < len(request.deity_indexes) else 0
            setups.append(api.build_player_setup(
                player_id,
                db.get_deity(deity_index),
                db.cards,
                deck_start=offsets[seat],
                deck_size=deck_size,
            ))

        state = api.create_game_from_setups(setups, request.first_player_id)

        async with self._lock:
            session_id = generate_id()
            session = GameSession(
                id=session_id,
                state=state,
                player_ids=list(request.player_ids),
            )
            self.sessions[session_id] = session

        logger.info("Created match %s for %s", session_id, ", ".join(request.player_ids))
        return session

    def get_session(self, session_id: str) -> Optional[GameSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    async def remove_session(self, session_id: str) -> None:
        """Remove a session."""
        async with self._lock:
            if session_id in self.sessions:
                del self.sessions[session_id]
                logger.info("Removed match %s", session_id)

    def get_session_by_socket(self, socket_id: str) -> Optional[tuple[GameSession, str]]:
        """Find a session by socket ID, returning (session, player_id)."""
        for session in self.sessions.values():
            for pid, sid in session.player_sockets.items():
                if sid == socket_id:
                    return session, pid
        return None


# Global session manager instance
session_manager = SessionManager()
