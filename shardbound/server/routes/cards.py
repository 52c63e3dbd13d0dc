"""
Cards Routes

Endpoints for querying the card database.
"""

from fastapi import APIRouter, Query
from typing import Optional

from ..models import CardListResponse
from ..session import session_manager

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("", response_model=CardListResponse)
async def list_cards(
    type_filter: Optional[str] = Query(None, description="Filter by card type (AVATAR, SHARD, etc)"),
    name_search: Optional[str] = Query(None, description="Search by card name"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0)
) -> CardListResponse:
    """
    List the deities and cards in the card database.

    Filters apply to the card pool only.
    """
    db = session_manager.card_db
    cards = []

    for raw in db.cards:
        if type_filter and str(raw.get("type", "")).upper() != type_filter.upper():
            continue
        if name_search and name_search.lower() not in str(raw.get("name", "")).lower():
            continue
        cards.append(raw)

    total = len(cards)
    return CardListResponse(
        deities=list(db.deities),
        cards=cards[offset:offset + limit],
        total=total,
    )
