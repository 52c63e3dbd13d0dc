"""
Match Routes

Endpoints for creating and playing matches.
"""

from fastapi import APIRouter, HTTPException

from shardbound.engine.types import EngineError

from ..session import session_manager
from ..models import (
    CreateMatchRequest, CreateMatchResponse,
    PlayerActionRequest, ActionResultResponse,
    GameStateResponse, CombatResultData,
)

router = APIRouter(prefix="/match", tags=["match"])


@router.post("/create", response_model=CreateMatchResponse)
async def create_match(request: CreateMatchRequest) -> CreateMatchResponse:
    """
    Create a new match.

    Decks are dealt from the card database; pass start=True to run the
    first player's turn 1 immediately.
    """
    try:
        session = await session_manager.create_session(request)
    except EngineError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if request.start:
        success, message, _ = await session.handle_action(
            PlayerActionRequest(action_type="START_TURN")
        )
        if not success:
            raise HTTPException(status_code=400, detail=message)

    return CreateMatchResponse(
        match_id=session.id,
        player_ids=session.player_ids,
        status="started" if request.start else "created",
    )


@router.get("/{match_id}/state", response_model=GameStateResponse)
async def get_match_state(match_id: str) -> GameStateResponse:
    """Get the current state of a match."""
    session = session_manager.get_session(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    return session.get_client_state()


@router.post("/{match_id}/action", response_model=ActionResultResponse)
async def submit_action(
    match_id: str,
    action: PlayerActionRequest
) -> ActionResultResponse:
    """
    Submit a player action.

    Rules violations (unpayable cost, missing card, early God Charge
    spend) come back with success=False and leave the game unchanged.
    """
    session = session_manager.get_session(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    success, message, combat = await session.handle_action(action)

    if not success:
        return ActionResultResponse(
            success=False,
            message=message
        )

    combat_data = None
    if combat is not None:
        combat_data = CombatResultData(
            unblocked_damage=combat.unblocked_damage,
            dead_attackers=combat.dead_attackers,
            dead_defenders=combat.dead_defenders,
        )

    return ActionResultResponse(
        success=True,
        message=message,
        new_state=session.get_client_state(),
        combat=combat_data,
    )


@router.delete("/{match_id}")
async def delete_match(match_id: str) -> dict:
    """
    Delete a match and clean up resources.
    """
    session = session_manager.get_session(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")

    await session_manager.remove_session(match_id)

    return {"status": "deleted", "match_id": match_id}
