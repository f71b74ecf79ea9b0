"""
Stack and pile handling: placement, removal and completion.
"""

import logging
from typing import Dict, List, Optional

from .game import create_stack, find_stack_by_id, get_player, record_score
from .models import BodyPart, Card, Character, GameState, Stack
from .shuffle import get_card_effective_properties

logger = logging.getLogger(__name__)


def add_card_to_stack(stack: Stack, card: Card, pile: BodyPart) -> bool:
    """Append a card on top of the named pile."""
    target_pile = stack.piles.get(pile)
    if target_pile is None:
        return False
    target_pile.cards.append(card)
    return True


def resolve_target_pile(card: Card, target_pile: Optional[BodyPart]) -> Optional[BodyPart]:
    """Explicit pile if given, else the card's effective body part."""
    if target_pile is not None:
        return target_pile
    _, body_part = get_card_effective_properties(card)
    return body_part


def place_card(
    state: GameState,
    card: Card,
    target_stack_id: Optional[str] = None,
    target_pile: Optional[BodyPart] = None
) -> Optional[Stack]:
    """
    Place a card onto an existing stack or a fresh one.

    Args:
        state: Current game state
        card: Card to place (already removed from wherever it came from)
        target_stack_id: Existing stack id, or None for a new stack owned by the current player
        target_pile: Pile to place on; inferred from the effective body part when omitted

    Returns:
        The stack the card landed on, or None if placement was impossible
    """
    pile = resolve_target_pile(card, target_pile)
    if pile is None:
        # Unnominated wild without an explicit pile
        return None

    if target_stack_id is None:
        if pile not in (BodyPart.HEAD, BodyPart.TORSO, BodyPart.LEGS):
            return None
        stack = create_stack(state, state.current_player)
    else:
        stack = find_stack_by_id(state, target_stack_id)
        if stack is None:
            return None

    if not add_card_to_stack(stack, card, pile):
        return None
    logger.debug(f"Card {card.id} placed on {stack.id}/{pile.value}")
    return stack


def check_stack_completion(stack: Stack) -> Optional[Character]:
    """
    Return the character a stack completes, if any.

    All three piles must be non-empty and the effective characters of their
    top cards must be defined and identical. Buried cards never count.
    """
    tops = []
    for body_part in (BodyPart.HEAD, BodyPart.TORSO, BodyPart.LEGS):
        pile = stack.piles.get(body_part)
        if pile is None or not pile.cards:
            return None
        tops.append(pile.cards[-1])

    characters = [get_card_effective_properties(card)[0] for card in tops]
    character = characters[0]
    if character is None or character == Character.WILD:
        return None
    if all(other == character for other in characters[1:]):
        return character
    return None


def complete_stack(state: GameState, stack_id: str) -> Optional[Character]:
    """
    Score a completable stack for its owner, remove it and award one pending move.

    Returns:
        The completed character, or None for a missing or incomplete stack
    """
    stack = find_stack_by_id(state, stack_id)
    if stack is None:
        return None

    character = check_stack_completion(stack)
    if character is None:
        return None

    owner = get_player(state, stack.owner)
    if owner is not None:
        record_score(owner, character)

    for pile in stack.piles.values():
        for card in pile.cards:
            card.nomination = None
            state.scored_cards.append(card)
        pile.cards = []

    state.stacks = [s for s in state.stacks if s.id != stack_id]
    state.pending_moves += 1
    logger.info(f"Stack {stack_id} completed as {character.value} for {stack.owner}")
    return character


def get_stacks_for_player(state: GameState, player_id: str) -> List[Stack]:
    return [stack for stack in state.stacks if stack.owner == player_id]


def get_all_completable_stacks(state: GameState) -> List[Stack]:
    return [stack for stack in state.stacks if check_stack_completion(stack) is not None]


def get_top_card_from_pile(stack: Stack, pile: BodyPart) -> Optional[Card]:
    target_pile = stack.piles.get(pile)
    if target_pile is None:
        return None
    return target_pile.top


def remove_card_from_pile(stack: Stack, pile: BodyPart, card_id: str) -> Optional[Card]:
    """Remove a card by id from a pile."""
    target_pile = stack.piles.get(pile)
    if target_pile is None:
        return None
    for index, card in enumerate(target_pile.cards):
        if card.id == card_id:
            return target_pile.cards.pop(index)
    return None


def can_place_card_on_pile(stack: Stack, card: Card, pile: BodyPart) -> bool:
    # Any card may go on any pile: burying an opponent's pile is a legal defence
    return pile in stack.piles


def get_stack_summary(stack: Stack) -> Dict:
    return {
        'id': stack.id,
        'owner': stack.owner,
        'head_count': len(stack.piles[BodyPart.HEAD].cards),
        'torso_count': len(stack.piles[BodyPart.TORSO].cards),
        'legs_count': len(stack.piles[BodyPart.LEGS].cards),
        'is_completable': check_stack_completion(stack) is not None,
    }


def count_cards(stacks: List[Stack]) -> int:
    return sum(stack.card_count() for stack in stacks)
