"""
Turn handling: the batch turn form and the sequential turn state machine.

Sequential turns run Draw -> PlayCard -> (AwaitMove)? -> PlayCard again or end.
Every operation returns a TurnContinuation and rejected input leaves the state
untouched.
"""

import logging
from typing import List, Optional, Sequence, Union

from .game import get_current_player, switch_turn
from .models import (
    BodyPart, Card, CardNomination, GamePhase, GameState, MoveAction,
    PlayCardAction, TurnContinuation, TurnPhase, TurnState
)
from .moves import apply_pending_move, process_stack_completions
from .shuffle import draw_card, is_wild_card
from .stacks import place_card
from .validate import validate_play
from .wildcards import nominate_wild_card

logger = logging.getLogger(__name__)

CardRef = Union[Card, str]


def _card_id(card: CardRef) -> str:
    return card.id if isinstance(card, Card) else card


def _is_finished(state: GameState) -> bool:
    return state.game_phase == GamePhase.FINISHED


def _current_signal(state: GameState) -> TurnContinuation:
    """Signal describing where the turn stands, used when input is rejected."""
    turn_state = state.current_turn_state
    if _is_finished(state) or turn_state is None:
        return TurnContinuation.END_TURN
    if turn_state.phase == TurnPhase.AWAIT_MOVE:
        return TurnContinuation.AWAIT_MOVE
    return TurnContinuation.CONTINUE


def _end_turn(state: GameState) -> TurnContinuation:
    state.current_turn_state = None
    if not _is_finished(state):
        switch_turn(state)
    return TurnContinuation.END_TURN


def _play_from_hand(
    state: GameState,
    card_id: str,
    target_stack_id: Optional[str],
    target_pile: Optional[BodyPart],
    nomination: Optional[CardNomination]
) -> Optional[Card]:
    """
    Validate and place one card from the current player's hand.

    Returns:
        The played card, or None when rejected (state unchanged)
    """
    validation = validate_play(state, card_id, target_stack_id, target_pile, nomination)
    if not validation.valid:
        logger.info(f"Play rejected [{validation.error_code}] {validation.error_message}")
        return None

    player = get_current_player(state)
    index = next(i for i, c in enumerate(player.hand) if c.id == card_id)
    card = player.hand.pop(index)
    previous_nomination = card.nomination

    if is_wild_card(card) and nomination is not None:
        if not nominate_wild_card(card, nomination.character, nomination.body_part):
            player.hand.insert(index, card)
            return None

    if place_card(state, card, target_stack_id, target_pile) is None:
        card.nomination = previous_nomination
        player.hand.insert(index, card)
        logger.info(f"Play rejected: card {card_id} could not be placed")
        return None

    logger.debug(f"{state.current_player} played {card}")
    return card


# Batch turns

def validate_card_play(state: GameState, card: CardRef, target_stack_id: Optional[str] = None) -> bool:
    """Card is in the current player's hand and the target stack, if any, exists."""
    player = get_current_player(state)
    if not player.has_card(_card_id(card)):
        return False
    if target_stack_id is None:
        return True
    return any(stack.id == target_stack_id for stack in state.stacks)


def can_play_card(state: GameState, card: CardRef) -> bool:
    return get_current_player(state).has_card(_card_id(card))


def must_nominate_wild_card(card: Card) -> bool:
    return is_wild_card(card) and card.nomination is None


def execute_card_play(state: GameState, action: PlayCardAction) -> bool:
    """Play one card and resolve completions. Does not touch turn order."""
    if _is_finished(state):
        return False
    card = _play_from_hand(
        state, _card_id(action.card), action.target_stack_id, action.target_pile, action.nomination
    )
    if card is None:
        return False
    process_stack_completions(state)
    return True


def execute_turn(
    state: GameState,
    regular_action: PlayCardAction,
    wild_actions: Sequence[PlayCardAction] = ()
) -> bool:
    """
    Play a whole turn at once: draw, chained wild cards, then the closing card.

    All plays are checked before anything changes; if any play fails while
    executing, the state is rolled back and False is returned.
    """
    if _is_finished(state) or state.current_turn_state is not None:
        return False

    if not validate_card_play(state, regular_action.card, regular_action.target_stack_id):
        return False
    player = get_current_player(state)
    for wild_action in wild_actions:
        card = player.find_card(_card_id(wild_action.card))
        if card is None or not is_wild_card(card):
            return False
        if not validate_card_play(state, wild_action.card, wild_action.target_stack_id):
            return False

    snapshot = state.clone()
    draw_card(state)

    for action in list(wild_actions) + [regular_action]:
        if _is_finished(state):
            break
        if not execute_card_play(state, action):
            state.restore(snapshot)
            return False

    if not _is_finished(state):
        switch_turn(state)
    return True


# Sequential turns

def initialize_turn_state(state: GameState) -> TurnState:
    state.current_turn_state = TurnState()
    return state.current_turn_state


def start_sequential_turn(state: GameState) -> TurnContinuation:
    """Draw for the current player and open the PlayCard phase."""
    if _is_finished(state):
        return TurnContinuation.END_TURN

    if state.current_turn_state is not None and state.current_turn_state.has_drawn_card:
        # Turn already running, no second draw
        return _current_signal(state)

    turn_state = initialize_turn_state(state)
    draw_card(state)  # an exhausted deck does not stop the turn
    turn_state.has_drawn_card = True
    turn_state.phase = TurnPhase.PLAY_CARD
    logger.debug(f"{state.current_player} starts a turn")
    return TurnContinuation.CONTINUE


def play_next_card(
    state: GameState,
    card: CardRef,
    target_stack_id: Optional[str] = None,
    target_pile: Optional[BodyPart] = None,
    nomination: Optional[CardNomination] = None
) -> TurnContinuation:
    """
    Play one card within the running turn.

    Returns AWAIT_MOVE when the play earned moves, CONTINUE after a fast (wild)
    card or a rejected play, and END_TURN after a regular card.
    """
    if _is_finished(state):
        return TurnContinuation.END_TURN

    turn_state = state.current_turn_state
    if turn_state is None or turn_state.phase != TurnPhase.PLAY_CARD:
        logger.info("Play rejected: no turn in the PlayCard phase")
        return _current_signal(state) if turn_state else TurnContinuation.CONTINUE

    moves_before = state.pending_moves
    played = _play_from_hand(state, _card_id(card), target_stack_id, target_pile, nomination)
    if played is None:
        return TurnContinuation.CONTINUE

    turn_state.cards_played_this_turn.append(played)
    turn_state.last_card_was_wild = played.is_fast_card
    process_stack_completions(state)

    if _is_finished(state):
        return _end_turn(state)

    earned = state.pending_moves - moves_before
    if earned > 0:
        turn_state.phase = TurnPhase.AWAIT_MOVE
        turn_state.moves_earned_this_turn += earned
        return TurnContinuation.AWAIT_MOVE

    if played.is_fast_card:
        turn_state.can_continue_playing = True
        turn_state.phase = TurnPhase.PLAY_CARD
        return TurnContinuation.CONTINUE

    return _end_turn(state)


def execute_sequential_move(state: GameState, move: MoveAction) -> TurnContinuation:
    """Spend an earned move while the turn awaits one."""
    if _is_finished(state):
        return TurnContinuation.END_TURN

    turn_state = state.current_turn_state
    if turn_state is None or turn_state.phase != TurnPhase.AWAIT_MOVE:
        return _current_signal(state)

    moves_before = state.pending_moves
    if not apply_pending_move(state, move):
        return TurnContinuation.AWAIT_MOVE

    if _is_finished(state):
        return _end_turn(state)

    # The move itself completed a stack: keep relocating
    earned = state.pending_moves - (moves_before - 1)
    if earned > 0:
        turn_state.moves_earned_this_turn += earned
        return TurnContinuation.AWAIT_MOVE

    if turn_state.last_card_was_wild:
        turn_state.phase = TurnPhase.PLAY_CARD
        turn_state.can_continue_playing = True
        return TurnContinuation.CONTINUE

    return _end_turn(state)


def skip_move(state: GameState) -> TurnContinuation:
    """Decline the awaited move; the credit stays in pending_moves."""
    if _is_finished(state):
        return TurnContinuation.END_TURN

    turn_state = state.current_turn_state
    if turn_state is None or turn_state.phase != TurnPhase.AWAIT_MOVE:
        return _current_signal(state)

    turn_state.phase = TurnPhase.PLAY_CARD
    turn_state.can_continue_playing = True
    return TurnContinuation.CONTINUE


def end_sequential_turn(state: GameState) -> TurnContinuation:
    """
    Stop playing after a fast card instead of taking the extra play.

    Also allowed when the current player has nothing left to play.
    """
    if _is_finished(state):
        return TurnContinuation.END_TURN

    turn_state = state.current_turn_state
    if turn_state is None or turn_state.phase != TurnPhase.PLAY_CARD:
        return _current_signal(state)
    if not turn_state.can_continue_playing and get_current_player(state).hand:
        return _current_signal(state)
    return _end_turn(state)


def can_play_another_card(state: GameState) -> bool:
    turn_state = state.current_turn_state
    return (
        not _is_finished(state)
        and turn_state is not None
        and turn_state.phase == TurnPhase.PLAY_CARD
        and turn_state.can_continue_playing
    )


def is_awaiting_move(state: GameState) -> bool:
    turn_state = state.current_turn_state
    return turn_state is not None and turn_state.phase == TurnPhase.AWAIT_MOVE


def close_finished_turn(state: GameState) -> bool:
    """Drop the open turn once the game is won outside the turn flow."""
    if not _is_finished(state) or state.current_turn_state is None:
        return False
    state.current_turn_state = None
    return True


def get_cards_played_this_turn(state: GameState) -> List[Card]:
    turn_state = state.current_turn_state
    return list(turn_state.cards_played_this_turn) if turn_state else []
