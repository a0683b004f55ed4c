"""
Tests for the turn/phase state machine and the combat slot.
"""

from ..engine_core.phases import (
    CombatManager,
    GamePhase,
    TurnManager,
    TurnStep,
)
from ..engine_core.player import Player


def make_turn_manager(make_foundation):
    active, opponent = Player(1, "Alice"), Player(2, "Bob")
    active.setup_game(make_foundation(f"f{i}") for i in range(20))
    return TurnManager(active, opponent), active, opponent


class TestTurnManager:
    """Tests for phase transitions."""

    def test_initial_state(self, make_foundation):
        """A new manager is at turn 0 in Review."""
        tm, active, _ = make_turn_manager(make_foundation)

        assert tm.get_turn_number() == 0
        assert tm.get_current_phase() == GamePhase.REVIEW
        assert tm.get_active_player() is active

    def test_start_turn(self, make_foundation):
        """start_turn() opens turn 1 at the start of Review."""
        tm, _, _ = make_turn_manager(make_foundation)
        tm.start_turn()

        state = tm.get_state()
        assert state.turn_number == 1
        assert state.current_phase == GamePhase.REVIEW
        assert state.current_step == TurnStep.REVIEW_START
        assert state.active_player_id == 1

    def test_full_cycle(self, make_foundation):
        """Review, Ready, Combat and End loop back with players swapped."""
        tm, active, opponent = make_turn_manager(make_foundation)
        tm.start_turn()

        tm.advance_phase()
        assert tm.get_current_phase() == GamePhase.READY
        tm.advance_phase()
        assert tm.get_current_phase() == GamePhase.COMBAT
        assert tm.get_current_step() == TurnStep.COMBAT_START
        tm.advance_phase()
        assert tm.get_current_phase() == GamePhase.END
        assert tm.get_active_player() is opponent
        tm.advance_phase()
        assert tm.get_current_phase() == GamePhase.REVIEW
        assert tm.get_turn_number() == 2
        assert tm.get_opponent() is active

    def test_review_discards_then_draws(self, make_foundation):
        """Review discards the hand before drawing up."""
        tm, active, _ = make_turn_manager(make_foundation)
        active.draw_cards(3)
        kept = active.hand.get_cards()

        tm.process_review_phase()

        assert tm.get_current_step() == TurnStep.REVIEW_DRAW
        assert active.discard.count() == 3
        assert active.hand.count() == active.get_hand_size()
        assert not any(active.hand.contains(c) for c in kept)

    def test_ready_phase_readies_cards(self, make_foundation):
        """Ready uncommits cards in play and opens the main step."""
        tm, active, _ = make_turn_manager(make_foundation)
        card = make_foundation("in-play")
        active.play_area.add(card)
        card.commit()

        tm.process_ready_phase()

        assert tm.get_current_phase() == GamePhase.READY
        assert tm.get_current_step() == TurnStep.READY_MAIN
        assert not card.committed

    def test_end_turn_swaps_players(self, make_foundation):
        """end_turn() hands the turn to the opponent."""
        tm, active, opponent = make_turn_manager(make_foundation)
        tm.end_turn()

        assert tm.get_current_phase() == GamePhase.END
        assert tm.get_current_step() == TurnStep.TURN_END
        assert tm.get_active_player() is opponent
        assert tm.get_opponent() is active

    def test_state_to_dict(self, make_foundation):
        """The turn state serializes to plain values."""
        tm, _, _ = make_turn_manager(make_foundation)
        tm.start_turn()

        assert tm.get_state().to_dict() == {
            "phase": "review",
            "step": "review_start",
            "active_player_id": 1,
            "turn_number": 1,
            "priority_player_id": 1,
        }


class TestCombatManager:
    """Tests for the single attack slot."""

    def test_declare_attack(self, make_attack):
        """Declaring fills the slot with the attack's speed and damage."""
        combat = CombatManager()
        card = make_attack("a1", speed=5, damage=2)

        state = combat.declare_attack(1, 2, card)

        assert combat.has_active_attack()
        assert state.attack_card is card
        assert state.speed == 5
        assert state.damage == 2

    def test_second_attack_overwrites(self, make_attack):
        """Only one attack is tracked at a time."""
        combat = CombatManager()
        combat.declare_attack(1, 2, make_attack("a1"))
        second = make_attack("a2")
        combat.declare_attack(1, 2, second)

        assert combat.get_current_attack().attack_card is second

    def test_block_and_enhance(self, make_attack, make_foundation):
        """Blocks and enhancements attach to the current attack."""
        combat = CombatManager()
        combat.declare_attack(1, 2, make_attack("a1"))
        enhancement = make_foundation("e1")
        block = make_attack("b1")

        combat.add_enhancement(enhancement)
        combat.declare_block(block)

        attack = combat.get_current_attack()
        assert attack.enhancements == [enhancement]
        assert attack.block_card is block

    def test_resolve_and_clear(self, make_attack):
        """A resolved attack stays visible until cleared."""
        combat = CombatManager()
        combat.declare_attack(1, 2, make_attack("a1"))

        combat.resolve_attack()
        assert not combat.has_active_attack()
        assert combat.get_current_attack().resolved

        combat.clear_attack()
        assert combat.get_current_attack() is None

    def test_block_without_attack_is_ignored(self, make_attack):
        """Blocking with no attack does nothing."""
        combat = CombatManager()
        combat.declare_block(make_attack("b1"))
        assert combat.get_current_attack() is None
