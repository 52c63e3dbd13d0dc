"""
Shardbound Zone Accessors

Every player-owned container is wrapped in a ZoneSlot so callers can
search, remove and place cards without caring whether the zone is a
list (hand, deck, rows) or a single slot (the domain).
"""

from abc import ABC, abstractmethod
from typing import Optional

from .types import BOARD_ZONES, Card, NotFound, Player, Zone


class ZoneSlot(ABC):
    """Uniform get / remove / put view over one of a player's zones."""

    zone: Zone

    @abstractmethod
    def cards(self) -> list[Card]:
        ...

    def find(self, card_id: str) -> Optional[Card]:
        for card in self.cards():
            if card.card_id == card_id:
                return card
        return None

    @abstractmethod
    def remove(self, card_id: str) -> Card:
        ...

    @abstractmethod
    def put(self, card: Card) -> None:
        ...


class ListSlot(ZoneSlot):
    """A multi-card zone backed by one of the player's lists."""

    def __init__(self, zone: Zone, items: list[Card]):
        self.zone = zone
        self._items = items

    def cards(self) -> list[Card]:
        return list(self._items)

    def remove(self, card_id: str) -> Card:
        for index, card in enumerate(self._items):
            if card.card_id == card_id:
                return self._items.pop(index)
        raise NotFound(f"Card {card_id} not found in {self.zone.value}.")

    def put(self, card: Card) -> None:
        self._items.append(card)


class SingleSlot(ZoneSlot):
    """A zone holding at most one card, stored on a Player attribute."""

    def __init__(self, zone: Zone, player: Player, attr: str):
        self.zone = zone
        self._player = player
        self._attr = attr

    @property
    def occupant(self) -> Optional[Card]:
        return getattr(self._player, self._attr)

    def cards(self) -> list[Card]:
        occupant = self.occupant
        return [occupant] if occupant is not None else []

    def remove(self, card_id: str) -> Card:
        occupant = self.occupant
        if occupant is None or occupant.card_id != card_id:
            raise NotFound(f"Card {card_id} not found in {self.zone.value}.")
        setattr(self._player, self._attr, None)
        return occupant

    def put(self, card: Card) -> None:
        # Callers clear the slot first; putting never replaces silently
        if self.occupant is not None:
            raise ValueError(f"{self.zone.value} is already occupied")
        setattr(self._player, self._attr, card)


_LIST_ATTRS = {
    Zone.HAND: "hand",
    Zone.VEILED_DECK: "veiled_deck",
    Zone.CRYPT: "crypt",
    Zone.NULL_ZONE: "null_zone",
    Zone.SHARD_ROW: "shard_row",
    Zone.AVATAR_LINE: "avatar_line",
    Zone.RELIC_SUPPORT_ZONE: "relic_support_zone",
}


def slot_for(player: Player, zone: Zone) -> ZoneSlot:
    """Get the accessor for one of the player's zones.

    The Deity zone is fixed for the whole game and has no accessor.
    """
    if zone is Zone.DEITY_ZONE:
        raise ValueError(f"No movable container for {zone.value}")
    if zone.is_single_slot:
        return SingleSlot(zone, player, "domain_zone")
    attr = _LIST_ATTRS.get(zone)
    if attr is None:
        raise ValueError(f"No movable container for {zone.value}")
    return ListSlot(zone, getattr(player, attr))


def board_slots(player: Player) -> list[ZoneSlot]:
    """Board zones in search order: shards, avatars, relics/supports, domain."""
    return [slot_for(player, zone) for zone in BOARD_ZONES]


def locate(slots: list[ZoneSlot], card_id: str) -> Optional[ZoneSlot]:
    """First slot in the list that holds the card, or None."""
    for slot in slots:
        if slot.find(card_id) is not None:
            return slot
    return None
