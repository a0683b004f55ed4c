"""
Card Loader - Turns scraped card records into engine cards.

Records arrive in the scraper's shape (camelCase keys, `control` for the
check value, `cardText`, `isThrow`, ...). Each record is validated and
converted to a CardData; Card instances are made from that.

Conversion rules:
- Unknown symbols become `any`
- Characters and attacks without a block zone default to `mid`
- Play-timing flags come from explicit isEnhance/isResponse/isForm fields
  when the record has them, otherwise from keywords
"""

from __future__ import annotations
import json
import os
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field, ValidationError

from ..engine_core.card import BlockZone, Card, CardData, CardType, Symbol

logger = logging.getLogger(__name__)

ALL_CARDS_FILE = "all-cards.json"
UVSIM_CARD_DATA_DIR = os.getenv("UVSIM_CARD_DATA_DIR")


class ScrapedCard(BaseModel):
    """A card record as produced by the scraper."""
    id: str
    name: str
    card_type: CardType = Field(alias="cardType")
    control: int = 0
    difficulty: int = 0
    block_zone: Optional[str] = Field(None, alias="blockZone")
    block_modifier: int = Field(0, alias="blockModifier")
    symbols: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    card_text: str = Field("", alias="cardText")
    unique: bool = False
    image_url: str = Field("", alias="imageUrl")

    hand_size: Optional[int] = Field(None, alias="handSize")
    health: Optional[int] = None
    stamina: Optional[int] = None
    speed: Optional[int] = None
    damage: Optional[int] = None
    zones: list[str] = Field(default_factory=list)
    is_throw: bool = Field(False, alias="isThrow")
    is_enhance: Optional[bool] = Field(None, alias="isEnhance")
    is_response: Optional[bool] = Field(None, alias="isResponse")
    is_form: Optional[bool] = Field(None, alias="isForm")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def has_keyword(self, word: str) -> bool:
        return any(word in k.lower() for k in self.keywords)

    def to_card_data(self) -> CardData:
        block_zone = _parse_block_zone(self.block_zone)
        if block_zone is None and self.card_type in (CardType.CHARACTER, CardType.ATTACK):
            block_zone = BlockZone.MID

        def flag(explicit: Optional[bool], keyword: str) -> bool:
            return explicit if explicit is not None else self.has_keyword(keyword)

        return CardData(
            id=self.id,
            name=self.name,
            card_type=self.card_type,
            check=self.control,
            difficulty=self.difficulty,
            block_zone=block_zone,
            block_modifier=self.block_modifier,
            symbols=frozenset(parse_symbol(s) for s in self.symbols),
            keywords=frozenset(self.keywords),
            text=self.card_text,
            unique=self.unique,
            enhance=flag(self.is_enhance, "enhance"),
            response=flag(self.is_response, "response"),
            form=flag(self.is_form, "form"),
            blitz=self.has_keyword("blitz"),
            image_url=self.image_url,
            hand_size=self.hand_size,
            health=self.health,
            stamina=self.stamina,
            speed=self.speed,
            damage=self.damage,
            zones=tuple(z for z in (_parse_block_zone(z) for z in self.zones) if z),
            throw=self.is_throw,
            flash=self.has_keyword("flash"),
        )


def parse_symbol(value: str) -> Symbol:
    """Normalize a scraped symbol name. Unknown names become ANY."""
    normalized = "".join(value.lower().split())
    try:
        return Symbol(normalized)
    except ValueError:
        return Symbol.ANY


def _parse_block_zone(value: str | None) -> BlockZone | None:
    if not value:
        return None
    try:
        return BlockZone(value.strip().lower())
    except ValueError:
        return None


def card_from_record(record: dict[str, Any]) -> CardData:
    """Validate one scraped record. Raises pydantic.ValidationError."""
    return ScrapedCard.model_validate(record).to_card_data()


def make_instances(data: CardData, count: int, prefix: str = "") -> list[Card]:
    """Create count distinct instances of one printed card, each with its own id."""
    base = f"{prefix}{data.id}"
    return [Card(data.model_copy(update={"id": f"{base}#{n + 1}"})) for n in range(count)]


class CardLoader:
    """
    Loads scraped card data from a directory.

    Usage:
        loader = CardLoader("data/cards")
        cards = loader.load_and_convert_all()
        attacks = cards[CardType.ATTACK]
    """

    def __init__(self, data_dir: str | Path | None = None):
        data_dir = data_dir or UVSIM_CARD_DATA_DIR
        self.data_dir = Path(data_dir) if data_dir else Path.cwd() / "data" / "cards"

    def load_all_records(self) -> list[dict[str, Any]]:
        """Read all-cards.json: either {"cards": [...]} or a bare list."""
        path = self.data_dir / ALL_CARDS_FILE
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if isinstance(payload, dict):
            return list(payload.get("cards", []))
        return list(payload)

    def convert_records(self, records: Iterable[dict[str, Any]]) -> dict[CardType, list[CardData]]:
        """Convert records grouped by card type. Invalid records are skipped and logged."""
        grouped: dict[CardType, list[CardData]] = {card_type: [] for card_type in CardType}
        for record in records:
            try:
                data = card_from_record(record)
            except ValidationError as e:
                label = record.get("id") if isinstance(record, dict) else record
                logger.warning("Skipping card record %r: %s", label, e.errors()[0]["msg"])
                continue
            grouped[data.card_type].append(data)
        return grouped

    def load_and_convert_all(self) -> dict[CardType, list[Card]]:
        grouped = self.convert_records(self.load_all_records())
        logger.info(
            "Loaded %d cards from %s",
            sum(len(cards) for cards in grouped.values()), self.data_dir,
        )
        return {
            card_type: [Card(data) for data in cards]
            for card_type, cards in grouped.items()
        }
