"""
Tests for play, move and whole-state validation.
"""

import pytest

from npzr_engine.constants import (
    ERROR_CARD_NOT_IN_PILE, ERROR_GAME_FINISHED, ERROR_ILLEGAL_NOMINATION,
    ERROR_NO_PENDING_MOVES, ERROR_NOT_IN_HAND, ERROR_PILE_UNRESOLVED,
    ERROR_STACK_NOT_FOUND, PLAYER_ONE
)
from npzr_engine.errors import GameError, INVARIANT_VIOLATION
from npzr_engine.game import create_stack
from npzr_engine.models import BodyPart, CardNomination, CardType, Character, GamePhase, MoveAction
from npzr_engine.validate import assert_valid_state, validate_game_state, validate_move, validate_play


def test_fresh_state_is_valid(state):
    report = validate_game_state(state)
    assert report.valid
    assert report.errors == []
    assert report.warnings == []


def test_duplicate_card_detected(state):
    state.players[0].hand.append(state.deck[0])

    report = validate_game_state(state)
    assert not report.valid
    assert any("more than one location" in error for error in report.errors)


def test_missing_card_detected(state):
    state.deck.pop()

    report = validate_game_state(state)
    assert not report.valid
    assert any("Missing card ids" in error for error in report.errors)


def test_regular_card_with_nomination_detected(state):
    regular = next(card for card in state.deck if card.type == CardType.REGULAR)
    regular.nomination = CardNomination(regular.character, regular.body_part)

    assert not validate_game_state(state).valid


def test_negative_pending_moves_detected(state):
    state.pending_moves = -1
    assert not validate_game_state(state).valid


def test_finished_without_winner_detected(state):
    state.game_phase = GamePhase.FINISHED
    assert not validate_game_state(state).valid


def test_large_hand_is_only_a_warning(state):
    hand = state.players[0].hand
    while len(hand) <= state.rule_config.max_hand_size:
        hand.append(state.deck.pop())

    report = validate_game_state(state)
    assert report.valid
    assert report.warnings


def test_assert_valid_state_raises(state):
    state.pending_moves = -3
    with pytest.raises(GameError) as exc_info:
        assert_valid_state(state)
    assert exc_info.value.code == INVARIANT_VIOLATION


def test_validate_play_errors(state, picker):
    in_deck = picker.take(CardType.REGULAR, Character.NINJA, BodyPart.HEAD)
    state.deck.append(in_deck)
    regular = picker.regular(Character.PIRATE, BodyPart.LEGS)
    wild_head = picker.to_hand(CardType.WILD_POSITION, body_part=BodyPart.HEAD)
    universal = picker.to_hand(CardType.WILD_UNIVERSAL)

    assert validate_play(state, in_deck.id).error_code == ERROR_NOT_IN_HAND
    assert validate_play(state, regular.id, "stack_7").error_code == ERROR_STACK_NOT_FOUND
    illegal = CardNomination(Character.PIRATE, BodyPart.TORSO)
    assert validate_play(state, wild_head.id, nomination=illegal).error_code == ERROR_ILLEGAL_NOMINATION
    assert validate_play(state, universal.id).error_code == ERROR_PILE_UNRESOLVED

    assert validate_play(state, regular.id).valid
    assert validate_play(state, universal.id, target_pile=BodyPart.TORSO).valid

    state.game_phase = GamePhase.FINISHED
    assert validate_play(state, regular.id).error_code == ERROR_GAME_FINISHED


def test_validate_move_errors(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    card = picker.regular_on_stack(stack, Character.ROBOT, BodyPart.TORSO)
    move = MoveAction(card.id, stack.id, BodyPart.TORSO, "new", BodyPart.HEAD)

    assert validate_move(state, move).error_code == ERROR_NO_PENDING_MOVES

    state.pending_moves = 1
    assert validate_move(state, move).valid
    assert validate_move(
        state, MoveAction(card.id, "stack_9", BodyPart.TORSO, "new", BodyPart.HEAD)
    ).error_code == ERROR_STACK_NOT_FOUND
    assert validate_move(
        state, MoveAction(card.id, stack.id, BodyPart.LEGS, "new", BodyPart.HEAD)
    ).error_code == ERROR_CARD_NOT_IN_PILE
    assert validate_move(
        state, MoveAction(card.id, stack.id, BodyPart.TORSO, "stack_9", BodyPart.HEAD)
    ).error_code == ERROR_STACK_NOT_FOUND
    assert validate_move(
        state, MoveAction(card.id, stack.id, BodyPart.TORSO, "new", BodyPart.WILD)
    ).error_code == ERROR_PILE_UNRESOLVED
