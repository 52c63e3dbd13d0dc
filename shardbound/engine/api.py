"""
Shardbound Engine API

The stable surface for setup and UI layers. Callers import from here
rather than from the turn/movement/combat modules directly.
"""

from dataclasses import dataclass, field
from typing import Optional

from . import combat as _combat
from . import movement as _movement
from . import resources as _resources
from . import turn as _turn
from .cards import DEFAULT_DECK_SIZE, build_deck, build_deity
from .combat import CombatAssignment, CombatResult
from .types import Card, GameState, InvalidConfiguration, NotFound, Player, Zone


@dataclass
class PlayerSetup:
    """A Deity and a veiled deck, already owned by the player."""
    id: str
    deity: Card
    veiled_deck: list[Card] = field(default_factory=list)


def build_player_setup(
    player_id: str,
    deity_data: dict,
    pool: list[dict],
    deck_start: int = 0,
    deck_size: int = DEFAULT_DECK_SIZE,
) -> PlayerSetup:
    """Build a PlayerSetup from raw deity data and a slice of the card pool."""
    return PlayerSetup(
        id=player_id,
        deity=build_deity(player_id, deity_data),
        veiled_deck=build_deck(player_id, pool, deck_start, deck_size),
    )


def create_player_from_setup(setup: PlayerSetup) -> Player:
    """
    Create an engine Player.

    Essence comes from the Deity's starting essence and both base and
    current KL from the Deity's base KL (0 when missing). Every zone
    starts empty except the veiled deck.
    """
    deity = setup.deity
    deity.zone = Zone.DEITY_ZONE
    base_kl = deity.base_kl or 0

    return Player(
        id=setup.id,
        deity=deity,
        essence=deity.starting_essence or 0,
        base_kl=base_kl,
        current_kl=base_kl,
        veiled_deck=list(setup.veiled_deck),
    )


def create_game_from_setups(
    setups: list[PlayerSetup],
    first_player_id: Optional[str] = None,
) -> GameState:
    """
    Create a GameState. The first setup goes first unless told otherwise.

    The game starts on turn 0 with no active player; call start_turn()
    to begin.
    """
    if not setups:
        raise InvalidConfiguration("create_game_from_setups requires at least one PlayerSetup.")

    seen: set[str] = set()
    for setup in setups:
        if setup.id in seen:
            raise InvalidConfiguration(f"Duplicate player id {setup.id!r}.")
        seen.add(setup.id)

    state = GameState(
        players=[create_player_from_setup(setup) for setup in setups],
        active_player_id="",
        turn_number=0,
    )
    if first_player_id is None:
        first_player_id = state.players[0].id
    elif not state.has_player(first_player_id):
        raise InvalidConfiguration(f"First player {first_player_id} is not in the game.")
    state.first_player_id = first_player_id
    return state


def get_active_player(state: GameState) -> Player:
    return _turn.get_active_player(state)


def get_opponent(state: GameState, player_id: str) -> Player:
    """In a 2-player game, get the opponent of a given player."""
    if len(state.players) != 2:
        raise InvalidConfiguration("get_opponent is only valid for 2-player games.")
    for player in state.players:
        if player.id != player_id:
            return player
    raise NotFound(f"Opponent of player {player_id} not found in GameState.")


# =============================================================================
# Mutators
# =============================================================================

def start_turn(state: GameState) -> None:
    _turn.start_turn(state)


def play_domain(state: GameState, player_id: str, card_id: str) -> None:
    _movement.play_domain(state, player_id, card_id)


def play_shard(state: GameState, player_id: str, card_id: str) -> None:
    _movement.play_shard(state, player_id, card_id)


def play_avatar(state: GameState, player_id: str, card_id: str) -> None:
    _movement.play_avatar(state, player_id, card_id)


def play_relic_or_support(state: GameState, player_id: str, card_id: str) -> None:
    _movement.play_relic_or_support(state, player_id, card_id)


def send_to_crypt(state: GameState, player_id: str, card_id: str) -> None:
    _movement.send_to_crypt(state, player_id, card_id)


def send_to_null(state: GameState, player_id: str, card_id: str) -> None:
    _movement.send_to_null(state, player_id, card_id)


def resolve_combat(
    state: GameState,
    attacking_player_id: str,
    defending_player_id: str,
    assignments: list[CombatAssignment],
) -> CombatResult:
    return _combat.resolve_combat(state, attacking_player_id, defending_player_id, assignments)


def spend_god_charges(state: GameState, player_id: str, amount: int) -> None:
    """Spend a player's God Charges, gated on the game's current turn."""
    player = state.get_player(player_id)
    _resources.spend_god_charges(player, amount, state.turn_number)
