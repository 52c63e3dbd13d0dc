"""
Shardbound Card Data

Turns raw card records (card database JSON) into runtime Card instances.
Raw records use the database's own field names, so several aliases are
accepted for the same stat (e.g. attack/power, toughness/health/essence).
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .types import Card, CardAbility, CardType, InvalidConfiguration, Zone

logger = logging.getLogger(__name__)


DEFAULT_DECK_SIZE = 12


def _first_present(raw: dict, *keys: str, default: Any = None) -> Any:
    """Value of the first key that is present and not None."""
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return default


def _int_stat(raw: dict, *keys: str, default: int) -> int:
    value = _first_present(raw, *keys, default=default)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration(
            f"Card {raw.get('id')!r} has non-numeric {keys[0]} {value!r}"
        ) from None


def _parse_card_type(raw: dict) -> CardType:
    type_line = str(raw.get("type") or raw.get("typeLine") or "").upper()
    try:
        return CardType(type_line)
    except ValueError:
        raise InvalidConfiguration(
            f"Card {raw.get('id')!r} has unknown type {type_line!r}"
        ) from None


def _parse_abilities(raw: dict) -> list[CardAbility]:
    abilities = []
    for entry in raw.get("abilities") or []:
        if isinstance(entry, dict):
            abilities.append(CardAbility(
                id=str(entry.get("id", "")),
                label=str(entry.get("label", "")),
                description=str(entry.get("description", "")),
            ))
    return abilities


def card_from_data(raw: dict, owner_id: str, zone: Zone = Zone.VEILED_DECK) -> Card:
    """
    Build a Card instance owned and controlled by owner_id.

    Args:
        raw: Card record from the card database
        owner_id: Player who owns the card
        zone: Zone the card starts in

    Returns:
        A fresh Card with no damage, untapped
    """
    if "id" not in raw:
        raise InvalidConfiguration(f"Card record has no id: {raw!r}")

    subtypes = raw.get("aspects")
    return Card(
        card_id=str(raw["id"]),
        name=str(raw.get("name", "")),
        card_type=_parse_card_type(raw),
        subtypes=list(subtypes) if isinstance(subtypes, list) else [],
        domain_tag=str(_first_present(raw, "domain", "domainTag", default="")),
        kl_cost=_int_stat(raw, "cost", "startingKL", default=0),
        power=_int_stat(raw, "power", "attack", default=0),
        guard=_int_stat(raw, "toughness", "health", "essence", default=1),
        starting_essence=_int_stat(raw, "essence", default=0),
        base_kl=_int_stat(raw, "startingKL", default=0),
        abilities=_parse_abilities(raw),
        is_token=bool(raw.get("isToken", False)),
        owner_id=owner_id,
        controller_id=owner_id,
        zone=zone,
    )


@dataclass
class CardDatabase:
    """Deity records and the shared card pool decks are cut from."""
    deities: list[dict] = field(default_factory=list)
    cards: list[dict] = field(default_factory=list)

    def get_deity(self, index: int) -> dict:
        if not self.deities:
            raise InvalidConfiguration("Card database has no deities")
        # Fall back to the first deity, like the table-top default
        if 0 <= index < len(self.deities):
            return self.deities[index]
        return self.deities[0]


def load_card_database(path: Union[Path, str]) -> CardDatabase:
    """Read a card database JSON file with 'deities' and 'cards' arrays."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Card database {path} must be a JSON object")

    db = CardDatabase(
        deities=list(data.get("deities") or []),
        cards=list(data.get("cards") or []),
    )
    logger.info("Loaded %d deities and %d cards from %s", len(db.deities), len(db.cards), path)
    return db


def build_deck(
    player_id: str,
    pool: list[dict],
    deck_start: int = 0,
    deck_size: int = DEFAULT_DECK_SIZE,
) -> list[Card]:
    """Cut a deck from the card pool, in pool order."""
    return [
        card_from_data(raw, player_id, Zone.VEILED_DECK)
        for raw in pool[deck_start:deck_start + deck_size]
    ]


def build_deity(player_id: str, deity_data: dict) -> Card:
    return card_from_data(deity_data, player_id, Zone.DEITY_ZONE)


def deck_offsets(player_count: int, spacing: Optional[int] = None) -> list[int]:
    """Where each seat's deck starts in the pool (20 cards apart by default)."""
    step = spacing if spacing is not None else 20
    return [seat * step for seat in range(player_count)]
