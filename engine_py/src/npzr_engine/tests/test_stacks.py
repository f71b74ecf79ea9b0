"""
Tests for stack placement and completion.
"""

import pytest

from npzr_engine.constants import PLAYER_ONE, PLAYER_TWO
from npzr_engine.errors import GameError, WILD_NOT_SCORABLE
from npzr_engine.game import create_stack, record_score
from npzr_engine.models import BodyPart, CardNomination, CardType, Character
from npzr_engine.stacks import (
    check_stack_completion, complete_stack, get_stack_summary, place_card,
    remove_card_from_pile
)
from npzr_engine.validate import validate_game_state


def _build(picker, stack, character):
    for body_part in (BodyPart.HEAD, BodyPart.TORSO, BodyPart.LEGS):
        picker.regular_on_stack(stack, character, body_part)


def test_three_matching_tops_complete(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    _build(picker, stack, Character.NINJA)

    assert check_stack_completion(stack) == Character.NINJA


def test_empty_pile_never_completes(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.HEAD)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.TORSO)

    assert check_stack_completion(stack) is None


def test_burying_a_pile_blocks_completion(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    _build(picker, stack, Character.NINJA)
    picker.on_stack(stack, BodyPart.HEAD, CardType.REGULAR, Character.PIRATE, BodyPart.HEAD)

    assert check_stack_completion(stack) is None


def test_only_top_cards_count(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    picker.regular_on_stack(stack, Character.PIRATE, BodyPart.HEAD)
    _build(picker, stack, Character.NINJA)

    assert check_stack_completion(stack) == Character.NINJA


def test_nominated_universal_completes(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.HEAD)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.TORSO)
    picker.on_stack(
        stack, BodyPart.LEGS, CardType.WILD_UNIVERSAL,
        nomination=CardNomination(Character.NINJA, BodyPart.LEGS)
    )

    assert check_stack_completion(stack) == Character.NINJA


def test_unnominated_wild_on_top_blocks(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.HEAD)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.TORSO)
    picker.on_stack(stack, BodyPart.LEGS, CardType.WILD_UNIVERSAL)

    assert check_stack_completion(stack) is None


def test_complete_stack_scores_owner(state, picker):
    stack = create_stack(state, PLAYER_TWO)
    picker.regular_on_stack(stack, Character.ROBOT, BodyPart.HEAD)
    picker.on_stack(
        stack, BodyPart.TORSO, CardType.WILD_CHARACTER, Character.ROBOT,
        nomination=CardNomination(Character.ROBOT, BodyPart.TORSO)
    )
    picker.regular_on_stack(stack, Character.ROBOT, BodyPart.LEGS)

    assert complete_stack(state, stack.id) == Character.ROBOT
    assert Character.ROBOT in state.players[1].scored_characters
    assert not state.players[0].scored_characters
    assert stack.id not in [s.id for s in state.stacks]
    assert state.pending_moves == 1
    assert len(state.scored_cards) == 3
    assert all(card.nomination is None for card in state.scored_cards)
    assert validate_game_state(state).valid


def test_complete_incomplete_or_missing_stack(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    picker.regular_on_stack(stack, Character.NINJA, BodyPart.HEAD)

    assert complete_stack(state, stack.id) is None
    assert complete_stack(state, "stack_99") is None
    assert state.pending_moves == 0
    assert len(state.stacks) == 1


def test_place_card_creates_stack_for_current_player(state, picker):
    card = picker.regular(Character.ZOMBIE, BodyPart.TORSO)
    state.players[0].hand.remove(card)

    stack = place_card(state, card)

    assert stack.id == "stack_1"
    assert stack.owner == PLAYER_ONE
    assert stack.piles[BodyPart.TORSO].top is card


def test_stack_ids_are_never_reused(state, picker):
    first = create_stack(state, PLAYER_ONE)
    _build(picker, first, Character.PIRATE)
    complete_stack(state, first.id)

    second = create_stack(state, PLAYER_ONE)
    assert second.id != first.id


def test_unnominated_wild_needs_a_pile(state, picker):
    universal = picker.take(CardType.WILD_UNIVERSAL)

    assert place_card(state, universal) is None
    assert state.stacks == []


def test_any_card_may_go_on_any_pile(state, picker):
    opponent_stack = create_stack(state, PLAYER_TWO)
    card = picker.take(CardType.REGULAR, Character.NINJA, BodyPart.LEGS)

    stack = place_card(state, card, opponent_stack.id, BodyPart.HEAD)

    assert stack is opponent_stack
    assert opponent_stack.piles[BodyPart.HEAD].top is card
    assert opponent_stack.owner == PLAYER_TWO


def test_place_on_missing_stack_fails(state, picker):
    card = picker.take(CardType.REGULAR, Character.NINJA, BodyPart.LEGS)
    assert place_card(state, card, "stack_42") is None


def test_remove_card_by_id(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    bottom = picker.regular_on_stack(stack, Character.NINJA, BodyPart.HEAD)
    top = picker.on_stack(stack, BodyPart.HEAD, CardType.REGULAR, Character.ROBOT, BodyPart.HEAD)

    assert remove_card_from_pile(stack, BodyPart.HEAD, bottom.id) is bottom
    assert stack.piles[BodyPart.HEAD].cards == [top]
    assert remove_card_from_pile(stack, BodyPart.HEAD, "missing") is None


def test_stack_summary(state, picker):
    stack = create_stack(state, PLAYER_ONE)
    _build(picker, stack, Character.ZOMBIE)

    summary = get_stack_summary(stack)
    assert summary['head_count'] == 1
    assert summary['is_completable']


def test_scoring_wild_sentinel_is_an_error(state):
    with pytest.raises(GameError) as exc_info:
        record_score(state.players[0], Character.WILD)
    assert exc_info.value.code == WILD_NOT_SCORABLE
