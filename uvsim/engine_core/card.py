"""
Card Model - Printed card data plus runtime state for one card instance.

Design principles:
- Printed attributes live in a frozen CardData record
- Runtime state (zone, committed, difficulty modifiers) lives on Card
- Variants are a closed set tagged by CardType, not a class hierarchy:
  Character/Backup carry a Vitals pool, Attack carries an AttackProfile
- Cards are passive: zone transitions belong to Zone/Player
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from .errors import InvalidCardError


class CardType(str, Enum):
    """Card variants."""
    CHARACTER = "character"
    ATTACK = "attack"
    FOUNDATION = "foundation"
    ACTION = "action"
    ASSET = "asset"
    BACKUP = "backup"


class Symbol(str, Enum):
    """Deck-building symbols."""
    ALL = "all"
    ANY = "any"
    GOOD = "good"
    EVIL = "evil"
    CHAOS = "chaos"
    ORDER = "order"
    VOID = "void"
    DEATH = "death"
    EARTH = "earth"
    FIRE = "fire"
    WATER = "water"
    WIND = "wind"
    LIFE = "life"
    INFINITY = "infinity"


class BlockZone(str, Enum):
    """Attack and block zones."""
    HIGH = "high"
    MID = "mid"
    LOW = "low"


class ZoneName(str, Enum):
    """Where a card currently is."""
    DECK = "deck"
    HAND = "hand"
    DISCARD = "discard"
    CARD_POOL = "card_pool"
    STAGING_AREA = "staging_area"
    IN_PLAY = "in_play"
    REMOVED = "removed"
    CHARACTER = "character"  # The player's character slot


# =============================================================================
# Printed data
# =============================================================================

class CardData(BaseModel):
    """
    The printed attributes of a card.

    One record per card instance handed over by a card-data loader.
    Variant fields are only required for the variant that uses them.
    """
    id: str
    name: str
    card_type: CardType
    check: int = 0
    difficulty: int = 0
    block_zone: Optional[BlockZone] = None
    block_modifier: int = 0
    symbols: frozenset[Symbol] = Field(default_factory=frozenset)
    keywords: frozenset[str] = Field(default_factory=frozenset)
    text: str = ""
    unique: bool = False
    enhance: bool = False
    response: bool = False
    form: bool = False
    blitz: bool = False
    image_url: str = ""

    # Character
    hand_size: Optional[int] = Field(None, ge=0)
    health: Optional[int] = Field(None, ge=0)

    # Backup
    stamina: Optional[int] = Field(None, ge=0)

    # Attack
    speed: Optional[int] = None
    damage: Optional[int] = None
    zones: tuple[BlockZone, ...] = ()
    throw: bool = False
    flash: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_variant_fields(self) -> "CardData":
        required = {
            CardType.CHARACTER: ("hand_size", "health"),
            CardType.BACKUP: ("stamina",),
            CardType.ATTACK: ("speed", "damage"),
        }.get(self.card_type, ())
        missing = [name for name in required if getattr(self, name) is None]
        if missing:
            raise ValueError(
                f"{self.card_type.value} card {self.id!r} is missing {', '.join(missing)}"
            )
        return self


# =============================================================================
# Variant payloads
# =============================================================================

@dataclass
class Vitals:
    """Health (Character) or stamina (Backup) pool, clamped to [0, maximum]."""
    maximum: int
    current: Optional[int] = None
    is_attacked: bool = False

    def __post_init__(self):
        if self.current is None:
            self.current = self.maximum

    def take_damage(self, amount: int) -> None:
        self.current = max(0, self.current - amount)

    def heal(self, amount: int) -> None:
        self.current = min(self.maximum, self.current + amount)

    @property
    def depleted(self) -> bool:
        return self.current <= 0


@dataclass
class AttackProfile:
    """
    Attack-specific attributes.

    current_zones may diverge from the printed zones through card effects
    and is restored by reset().
    """
    speed: int
    damage: int
    base_zones: tuple[str, ...] = ()
    current_zones: list[str] = field(default_factory=list)
    throw: bool = False
    flash: bool = False

    def has_zone(self, zone: str) -> bool:
        return zone.lower() in self.current_zones

    def add_zone(self, zone: str) -> None:
        zone = zone.lower()
        if zone not in self.current_zones:
            self.current_zones.append(zone)

    def remove_zone(self, zone: str) -> None:
        self.current_zones = [z for z in self.current_zones if z != zone.lower()]

    def set_zones(self, zones: list[str]) -> None:
        self.current_zones = [z.lower() for z in zones]

    def reset_zones(self) -> None:
        self.current_zones = list(self.base_zones)


# =============================================================================
# Card instance
# =============================================================================

@dataclass(eq=False)
class Card:
    """
    A card instance in the game.

    Equality is identity: duplicate printings in a deck are distinct
    instances with distinct ids.
    """
    data: CardData

    # Runtime state
    zone: ZoneName = ZoneName.DECK
    controller_id: Optional[int] = None
    committed: bool = False
    progressive_difficulty: int = 0
    current_difficulty: int = field(init=False, default=0)
    current_block_zone: Optional[BlockZone] = field(init=False, default=None)

    # Variant payloads
    vitals: Optional[Vitals] = field(init=False, default=None)
    attack: Optional[AttackProfile] = field(init=False, default=None)

    def __post_init__(self):
        self.current_difficulty = self.data.difficulty
        self.current_block_zone = self.data.block_zone

        if self.data.card_type == CardType.CHARACTER:
            self.vitals = Vitals(maximum=self.data.health)
        elif self.data.card_type == CardType.BACKUP:
            self.vitals = Vitals(maximum=self.data.stamina)
        elif self.data.card_type == CardType.ATTACK:
            zones = tuple(z.value for z in self.data.zones)
            self.attack = AttackProfile(
                speed=self.data.speed,
                damage=self.data.damage,
                base_zones=zones,
                current_zones=list(zones),
                throw=self.data.throw,
                flash=self.data.flash,
            )

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Card":
        """Build a card from a flat attribute record."""
        return cls(CardData.model_validate(record))

    # -------------------------------------------------------------------------
    # Printed attributes (read-only)
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def card_type(self) -> CardType:
        return self.data.card_type

    @property
    def check(self) -> int:
        return self.data.check

    @property
    def base_difficulty(self) -> int:
        return self.data.difficulty

    @property
    def base_block_zone(self) -> Optional[BlockZone]:
        return self.data.block_zone

    @property
    def block_modifier(self) -> int:
        return self.data.block_modifier

    @property
    def symbols(self) -> frozenset[Symbol]:
        return self.data.symbols

    @property
    def keywords(self) -> frozenset[str]:
        return self.data.keywords

    @property
    def text(self) -> str:
        return self.data.text

    @property
    def unique(self) -> bool:
        return self.data.unique

    @property
    def image_url(self) -> str:
        return self.data.image_url

    @property
    def hand_size(self) -> int:
        """Cards drawn each turn. Characters only."""
        if self.card_type != CardType.CHARACTER:
            raise InvalidCardError(f"{self.name} is not a character")
        return self.data.hand_size

    # -------------------------------------------------------------------------
    # Difficulty and blocking
    # -------------------------------------------------------------------------

    @property
    def difficulty(self) -> int:
        """Total difficulty: current difficulty plus progressive difficulty."""
        return self.current_difficulty + self.progressive_difficulty

    def can_block(self) -> bool:
        return self.current_block_zone is not None

    # -------------------------------------------------------------------------
    # Runtime state
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """Restore effect-mutable state to printed defaults (Ready phase)."""
        self.committed = False
        self.progressive_difficulty = 0
        self.current_difficulty = self.data.difficulty
        self.current_block_zone = self.data.block_zone
        if self.attack is not None:
            self.attack.reset_zones()

    def commit(self) -> None:
        self.committed = True

    def uncommit(self) -> None:
        self.committed = False

    # -------------------------------------------------------------------------
    # Health / stamina (Character and Backup)
    # -------------------------------------------------------------------------

    def _require_vitals(self) -> Vitals:
        if self.vitals is None:
            raise InvalidCardError(f"{self.name} ({self.card_type.value}) has no health or stamina")
        return self.vitals

    def take_damage(self, amount: int) -> None:
        self._require_vitals().take_damage(amount)

    def heal(self, amount: int) -> None:
        self._require_vitals().heal(amount)

    def is_defeated(self) -> bool:
        """Character health is at or below zero."""
        return self._require_vitals().depleted

    def is_destroyed(self) -> bool:
        """Backup stamina is at or below zero."""
        return self._require_vitals().depleted

    def __repr__(self) -> str:
        return f"Card({self.id!r}, {self.name!r}, {self.card_type.value}, zone={self.zone.value})"


def create_card(card_type: CardType | str, **fields: Any) -> Card:
    """
    Factory for a card from keyword attributes.

    Raises pydantic.ValidationError for an unknown card_type or a record
    missing its variant fields.
    """
    return Card.from_record({"card_type": card_type, **fields})
