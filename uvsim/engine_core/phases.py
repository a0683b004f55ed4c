"""
Game phases and turn structure.

Turn cycle: Review -> Ready -> Combat -> End -> Review (next player).

Only phase-level transitions are driven by advance_phase(). Steps are
display granularity, set by the phase-processing routines. Nothing stops a
caller from advancing without processing a phase first: running
process_review_phase()/process_ready_phase() before advancing is the
caller's contract (GameEngine.process_turn() honours it).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TYPE_CHECKING

from .card import Card

if TYPE_CHECKING:
    from .player import Player

logger = logging.getLogger(__name__)


class GamePhase(str, Enum):
    REVIEW = "review"
    READY = "ready"
    COMBAT = "combat"
    END = "end"


class TurnStep(str, Enum):
    # Review phase
    REVIEW_START = "review_start"
    REVIEW_DISCARD = "review_discard"
    REVIEW_DRAW = "review_draw"

    # Ready phase
    READY_START = "ready_start"
    READY_CARDS = "ready_cards"
    READY_MAIN = "ready_main"

    # Combat phase
    COMBAT_START = "combat_start"
    COMBAT_DECLARE_ATTACK = "combat_declare_attack"
    COMBAT_ENHANCE = "combat_enhance"
    COMBAT_BLOCK = "combat_block"
    COMBAT_REVEAL = "combat_reveal"
    COMBAT_DAMAGE = "combat_damage"
    COMBAT_END = "combat_end"

    # End
    TURN_END = "turn_end"


@dataclass(frozen=True)
class GameState:
    """Read-only snapshot of turn position."""
    current_phase: GamePhase
    current_step: TurnStep
    active_player_id: int
    turn_number: int
    priority_player_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.current_phase.value,
            "step": self.current_step.value,
            "active_player_id": self.active_player_id,
            "turn_number": self.turn_number,
            "priority_player_id": self.priority_player_id,
        }


class TurnManager:
    """Drives phases and active-player rotation."""

    def __init__(self, active_player: Player, opponent: Player):
        self._active = active_player
        self._opponent = opponent
        self._phase = GamePhase.REVIEW
        self._step = TurnStep.REVIEW_START
        self._turn_number = 0

    def get_current_phase(self) -> GamePhase:
        return self._phase

    def get_current_step(self) -> TurnStep:
        return self._step

    def get_turn_number(self) -> int:
        return self._turn_number

    def get_active_player(self) -> Player:
        return self._active

    def get_opponent(self) -> Player:
        return self._opponent

    def start_turn(self) -> None:
        self._turn_number += 1
        self._phase = GamePhase.REVIEW
        self._step = TurnStep.REVIEW_START
        logger.debug("Turn %d: %s is active", self._turn_number, self._active.name)

    def process_review_phase(self) -> None:
        """Discard the active player's hand, then draw to hand size."""
        self._phase = GamePhase.REVIEW
        self._step = TurnStep.REVIEW_START

        self._step = TurnStep.REVIEW_DISCARD
        self._active.discard_hand()

        self._step = TurnStep.REVIEW_DRAW
        self._active.draw_to_hand_size()

    def process_ready_phase(self) -> None:
        """Ready all of the active player's cards in play."""
        self._phase = GamePhase.READY
        self._step = TurnStep.READY_START

        self._step = TurnStep.READY_CARDS
        self._active.ready_all_cards()

        # Cards are played from here on
        self._step = TurnStep.READY_MAIN

    def start_combat_phase(self) -> None:
        self._phase = GamePhase.COMBAT
        self._step = TurnStep.COMBAT_START

    def set_step(self, step: TurnStep) -> None:
        """Record the current step for display."""
        self._step = step

    def end_turn(self) -> None:
        """Enter End and hand the turn to the other player."""
        self._phase = GamePhase.END
        self._step = TurnStep.TURN_END
        self._active, self._opponent = self._opponent, self._active

    def advance_phase(self) -> None:
        previous = self._phase
        if self._phase == GamePhase.REVIEW:
            self._phase = GamePhase.READY
            self._step = TurnStep.READY_START
        elif self._phase == GamePhase.READY:
            self.start_combat_phase()
        elif self._phase == GamePhase.COMBAT:
            self.end_turn()
        elif self._phase == GamePhase.END:
            self.start_turn()
        logger.debug("Phase %s -> %s", previous.value, self._phase.value)

    def get_state(self) -> GameState:
        return GameState(
            current_phase=self._phase,
            current_step=self._step,
            active_player_id=self._active.id,
            turn_number=self._turn_number,
            priority_player_id=self._active.id,
        )


# =============================================================================
# Combat slot
# =============================================================================

@dataclass
class AttackState:
    """The single attack in flight during Combat."""
    attacker_id: int
    defender_id: int
    attack_card: Card
    enhancements: list[Card] = field(default_factory=list)
    block_card: Card | None = None
    speed: int = 0
    damage: int = 0
    resolved: bool = False


class CombatManager:
    """
    Holds at most one attack.

    Declaring a new attack overwrites the slot; there is no queue.
    Damage resolution is not modelled: resolve_attack() only marks the
    attack as resolved.
    """

    def __init__(self):
        self._current: AttackState | None = None

    def has_active_attack(self) -> bool:
        return self._current is not None and not self._current.resolved

    def get_current_attack(self) -> AttackState | None:
        return self._current

    def declare_attack(self, attacker_id: int, defender_id: int, attack_card: Card) -> AttackState:
        profile = attack_card.attack
        self._current = AttackState(
            attacker_id=attacker_id,
            defender_id=defender_id,
            attack_card=attack_card,
            speed=profile.speed if profile else 0,
            damage=profile.damage if profile else 0,
        )
        return self._current

    def add_enhancement(self, enhancement: Card) -> None:
        if self._current:
            self._current.enhancements.append(enhancement)

    def declare_block(self, block_card: Card) -> None:
        if self._current:
            self._current.block_card = block_card

    def resolve_attack(self) -> None:
        if self._current:
            self._current.resolved = True

    def clear_attack(self) -> None:
        self._current = None
