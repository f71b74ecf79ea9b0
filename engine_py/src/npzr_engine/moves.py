"""
Card relocation between stacks and cascading completion processing.
"""

import logging
from typing import List, Optional

from .constants import BODY_PARTS, NEW_STACK_ID
from .game import check_game_winner, create_stack, find_stack_by_id
from .models import GamePhase, GameState, MoveAction
from .stacks import (
    add_card_to_stack, complete_stack, get_all_completable_stacks,
    remove_card_from_pile
)
from .validate import validate_move

logger = logging.getLogger(__name__)


def execute_move(state: GameState, move: MoveAction) -> bool:
    """
    Relocate one card from a stack pile to another pile.

    The card loses any nomination. ``to_stack_id == "new"`` creates a stack for
    the current player. On failure the card goes back where it came from and
    the state is unchanged.
    """
    from_stack = find_stack_by_id(state, move.from_stack_id)
    if from_stack is None:
        return False

    if move.to_stack_id != NEW_STACK_ID and find_stack_by_id(state, move.to_stack_id) is None:
        return False
    if move.to_pile not in BODY_PARTS:
        return False

    card = remove_card_from_pile(from_stack, move.from_pile, move.card_id)
    if card is None:
        return False

    previous_nomination = card.nomination
    card.nomination = None

    if move.to_stack_id == NEW_STACK_ID:
        to_stack = create_stack(state, state.current_player)
    else:
        to_stack = find_stack_by_id(state, move.to_stack_id)

    if not add_card_to_stack(to_stack, card, move.to_pile):
        card.nomination = previous_nomination
        add_card_to_stack(from_stack, card, move.from_pile)
        return False

    cleanup_empty_stacks(state)
    logger.debug(
        f"Moved card {card.id} from {move.from_stack_id}/{move.from_pile.value} "
        f"to {to_stack.id}/{move.to_pile.value}"
    )
    return True


def cleanup_empty_stacks(state: GameState) -> None:
    state.stacks = [stack for stack in state.stacks if not stack.is_empty()]


def _update_winner(state: GameState) -> None:
    winner = check_game_winner(state)
    if winner and state.game_phase != GamePhase.FINISHED:
        state.game_phase = GamePhase.FINISHED
        state.winner = winner
        logger.info(f"Game finished, {winner} wins")


def process_stack_completions(state: GameState) -> int:
    """
    Complete every completable stack until a pass completes nothing.

    Returns:
        Number of stacks completed
    """
    completed = 0
    limit = state.rule_config.cascade_limit
    passes = 0

    while passes < limit:
        passes += 1
        completed_any = False
        for stack in get_all_completable_stacks(state):
            if complete_stack(state, stack.id) is not None:
                completed += 1
                completed_any = True
        if not completed_any:
            break

    _update_winner(state)
    return completed


def can_execute_move(state: GameState, move: MoveAction) -> bool:
    return validate_move(state, move).valid


def use_pending_move(state: GameState) -> bool:
    if state.pending_moves <= 0:
        return False
    state.pending_moves -= 1
    return True


def apply_pending_move(state: GameState, move: MoveAction) -> bool:
    """
    Spend one pending move on a relocation and resolve any completions it exposes.

    Returns:
        True when the move was legal and executed
    """
    validation = validate_move(state, move)
    if not validation.valid:
        logger.info(f"Move rejected [{validation.error_code}] {validation.error_message}")
        return False

    if not execute_move(state, move):
        return False

    use_pending_move(state)
    process_stack_completions(state)
    return True


def get_available_moves(state: GameState) -> List[MoveAction]:
    """Every relocation the current pending moves allow."""
    if state.pending_moves <= 0:
        return []

    moves = []
    for stack in state.stacks:
        for pile_type in BODY_PARTS:
            for card in stack.piles[pile_type].cards:
                for target in state.stacks:
                    if target.id == stack.id:
                        continue
                    for target_pile in BODY_PARTS:
                        moves.append(MoveAction(card.id, stack.id, pile_type, target.id, target_pile))
                for target_pile in BODY_PARTS:
                    moves.append(MoveAction(card.id, stack.id, pile_type, NEW_STACK_ID, target_pile))
    return moves


def find_completing_move(state: GameState, moves: Optional[List[MoveAction]] = None) -> Optional[MoveAction]:
    """First move that leaves one of the mover's stacks completable, simulated on a clone."""
    candidates = moves if moves is not None else get_available_moves(state)
    for move in candidates:
        trial = state.clone()
        if not execute_move(trial, move):
            continue
        if any(stack.owner == state.current_player for stack in get_all_completable_stacks(trial)):
            return move
    return None


def execute_optimal_move(state: GameState, move: Optional[MoveAction] = None) -> bool:
    """
    Spend one pending move, either the caller's choice or a heuristic pick.

    The heuristic prefers a move that exposes a completion and otherwise
    takes the first available relocation.
    """
    if state.pending_moves <= 0:
        return False

    if move is None:
        available = get_available_moves(state)
        if not available:
            return False
        move = find_completing_move(state, available) or available[0]

    return apply_pending_move(state, move)


def cascade_completions(state: GameState) -> int:
    """
    Spend pending moves one at a time, re-running completion after each.

    Bounded by ``rule_config.cascade_limit`` iterations.

    Returns:
        Number of completions triggered by the cascade
    """
    total_completions = 0
    iterations = 0
    limit = state.rule_config.cascade_limit

    while state.pending_moves > 0 and state.game_phase != GamePhase.FINISHED:
        if iterations >= limit:
            logger.warning(f"Cascade stopped at safety limit of {limit} iterations")
            break
        iterations += 1

        before = state.pending_moves
        if not execute_optimal_move(state):
            break

        # One move spent, anything above that was earned by completions
        total_completions += max(0, state.pending_moves - before + 1)

    return total_completions


def find_card_location(state: GameState, card_id: str) -> Optional[tuple]:
    """Locate a card on the table as (stack, body_part)."""
    for stack in state.stacks:
        for body_part, pile in stack.piles.items():
            if any(card.id == card_id for card in pile.cards):
                return stack, body_part
    return None
