"""
Validation for card plays, moves and whole-state integrity.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    BODY_PARTS, ERROR_CARD_NOT_IN_PILE, ERROR_GAME_FINISHED, ERROR_ILLEGAL_NOMINATION,
    ERROR_NO_PENDING_MOVES, ERROR_NOT_IN_HAND, ERROR_PILE_UNRESOLVED,
    ERROR_STACK_NOT_FOUND, NEW_STACK_ID, REQUIRED_CHARACTERS
)
from .errors import INVARIANT_VIOLATION, raise_error
from .models import BodyPart, CardNomination, GamePhase, GameState, MoveAction


class ValidationResult:
    """Result of a play or move validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message

    @classmethod
    def success(cls) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def validate_play(
    state: GameState,
    card_id: str,
    target_stack_id: Optional[str] = None,
    target_pile: Optional[BodyPart] = None,
    nomination: Optional[CardNomination] = None
) -> ValidationResult:
    """
    Validate a card play attempt by the current player.

    Args:
        state: Current game state
        card_id: Id of the card being played
        target_stack_id: Existing stack to play on, or None for a new stack
        target_pile: Explicit pile, or None to use the card's body part
        nomination: Nomination to apply to a wild card

    Returns:
        ValidationResult with validation outcome
    """
    from .game import find_stack_by_id, get_player
    from .shuffle import get_card_effective_properties
    from .wildcards import validate_nomination

    if state.game_phase == GamePhase.FINISHED:
        return ValidationResult.error(ERROR_GAME_FINISHED, "Game is already finished")

    player = get_player(state, state.current_player)
    card = player.find_card(card_id) if player else None
    if card is None:
        return ValidationResult.error(
            ERROR_NOT_IN_HAND,
            f"Card {card_id} is not in {state.current_player}'s hand"
        )

    if target_stack_id is not None and find_stack_by_id(state, target_stack_id) is None:
        return ValidationResult.error(ERROR_STACK_NOT_FOUND, f"Stack {target_stack_id} not found")

    if nomination is not None and card.is_wild and not validate_nomination(card, nomination):
        return ValidationResult.error(
            ERROR_ILLEGAL_NOMINATION,
            f"Card {card_id} cannot be nominated as "
            f"{nomination.character.value} {nomination.body_part.value}"
        )

    pile = target_pile
    if pile is None:
        if card.is_wild and nomination is not None:
            pile = nomination.body_part
        else:
            pile = get_card_effective_properties(card)[1]
    if pile not in BODY_PARTS:
        return ValidationResult.error(
            ERROR_PILE_UNRESOLVED,
            f"No valid pile for card {card_id}; nominate it or name a pile"
        )

    return ValidationResult.success()


def validate_move(state: GameState, move: MoveAction) -> ValidationResult:
    """
    Validate a stack-to-stack relocation paid for with a pending move.
    """
    from .game import find_stack_by_id

    if state.game_phase == GamePhase.FINISHED:
        return ValidationResult.error(ERROR_GAME_FINISHED, "Game is already finished")

    if state.pending_moves <= 0:
        return ValidationResult.error(ERROR_NO_PENDING_MOVES, "No pending moves available")

    from_stack = find_stack_by_id(state, move.from_stack_id)
    if from_stack is None:
        return ValidationResult.error(ERROR_STACK_NOT_FOUND, f"Stack {move.from_stack_id} not found")

    pile = from_stack.piles.get(move.from_pile)
    if pile is None or not any(card.id == move.card_id for card in pile.cards):
        return ValidationResult.error(
            ERROR_CARD_NOT_IN_PILE,
            f"Card {move.card_id} is not in {move.from_stack_id}/{getattr(move.from_pile, 'value', move.from_pile)}"
        )

    if move.to_stack_id != NEW_STACK_ID and find_stack_by_id(state, move.to_stack_id) is None:
        return ValidationResult.error(ERROR_STACK_NOT_FOUND, f"Stack {move.to_stack_id} not found")

    if move.to_pile not in BODY_PARTS:
        return ValidationResult.error(ERROR_PILE_UNRESOLVED, f"Invalid target pile {move.to_pile!r}")

    return ValidationResult.success()


@dataclass
class GameStateReport:
    valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)  # suspicious but legal


def validate_game_state(state: GameState) -> GameStateReport:
    """
    Structural self-check of a game state. Never mutates the state.

    Checks card conservation against the configured universe, unique ids,
    pending move count, pile layout, seats and phase consistency.
    """
    from .shuffle import create_deck

    errors = []
    warnings = []
    rules = state.rule_config

    # Card conservation
    all_cards = state.all_cards()

    expected_total = rules.get_deck_size()
    if len(all_cards) != expected_total:
        errors.append(f"Invalid total card count: {len(all_cards)}, expected {expected_total}")

    id_counts = Counter(card.id for card in all_cards)
    duplicates = sorted(card_id for card_id, count in id_counts.items() if count > 1)
    if duplicates:
        errors.append(f"Cards present in more than one location: {', '.join(duplicates)}")

    expected_ids = {card.id for card in create_deck(rules)}
    unknown = sorted(set(id_counts) - expected_ids)
    missing = sorted(expected_ids - set(id_counts))
    if unknown:
        errors.append(f"Unknown card ids: {', '.join(unknown)}")
    if missing:
        errors.append(f"Missing card ids: {', '.join(missing)}")

    for card in all_cards:
        if not card.is_wild and card.nomination is not None:
            errors.append(f"Regular card {card.id} carries a nomination")

    # Players
    player_ids = [player.id for player in state.players]
    if len(state.players) != 2 or len(set(player_ids)) != 2:
        errors.append(f"Expected two distinct seats, found {player_ids}")
    if state.current_player not in player_ids:
        errors.append(f"Current player {state.current_player} is not seated")

    for player in state.players:
        if len(player.hand) > rules.max_hand_size:
            warnings.append(f"Player {player.id} has too many cards: {len(player.hand)}")
        illegal = [c for c in player.scored_characters if c not in REQUIRED_CHARACTERS]
        if illegal:
            errors.append(f"Player {player.id} scored invalid characters: {illegal}")

    # Stacks
    stack_ids = [stack.id for stack in state.stacks]
    if len(stack_ids) != len(set(stack_ids)):
        errors.append("Duplicate stack ids")
    for stack in state.stacks:
        if set(stack.piles.keys()) != set(BODY_PARTS):
            errors.append(f"Stack {stack.id} does not have exactly the head/torso/legs piles")
        for body_part, pile in stack.piles.items():
            if pile.body_part != body_part:
                errors.append(f"Stack {stack.id} pile {body_part} is tagged {pile.body_part}")
        if stack.owner not in player_ids:
            errors.append(f"Stack {stack.id} owned by unknown player {stack.owner}")

    if state.pending_moves < 0:
        errors.append(f"Invalid pending moves: {state.pending_moves}")

    # Phase consistency
    if state.game_phase == GamePhase.FINISHED and not state.winner:
        errors.append("Game marked as finished but no winner set")
    if state.winner and state.game_phase != GamePhase.FINISHED:
        errors.append(f"Winner {state.winner} set while game is {state.game_phase.value}")
    if state.current_turn_state is not None and state.game_phase != GamePhase.PLAYING:
        errors.append("Turn in progress outside the playing phase")

    return GameStateReport(valid=not errors, errors=errors, warnings=warnings)


def assert_valid_state(state: GameState) -> None:
    """Raise GameError when the state breaks an invariant."""
    report = validate_game_state(state)
    if not report.valid:
        raise_error(INVARIANT_VIOLATION, "; ".join(report.errors))
