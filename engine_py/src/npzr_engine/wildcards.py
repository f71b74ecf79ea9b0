"""
Wild card nomination rules.
"""

import logging
from typing import List, Optional, Tuple

from .constants import BODY_PARTS, CHARACTERS
from .models import BodyPart, Card, CardNomination, CardType, Character
from .shuffle import get_card_effective_properties, is_wild_card

logger = logging.getLogger(__name__)


def can_nominate(card: Card, character: Character, body_part: BodyPart) -> bool:
    """
    Check whether a wild card may stand for (character, body_part).

    Regular cards can never be nominated and the WILD sentinels are never a
    legal nomination target.
    """
    if character not in CHARACTERS or body_part not in BODY_PARTS:
        return False

    if card.type == CardType.WILD_CHARACTER:
        # Must keep the card's character, any body part
        return card.character == character
    if card.type == CardType.WILD_POSITION:
        # Must keep the card's body part, any character
        return card.body_part == body_part
    if card.type == CardType.WILD_UNIVERSAL:
        return True
    return False


def validate_nomination(card: Card, nomination: CardNomination) -> bool:
    return can_nominate(card, nomination.character, nomination.body_part)


def nominate_wild_card(card: Card, character: Character, body_part: BodyPart) -> bool:
    """Apply a nomination. Leaves the card untouched and returns False when illegal."""
    if not is_wild_card(card):
        return False
    if not can_nominate(card, character, body_part):
        logger.debug(f"Rejected nomination of card {card.id} as {character.value} {body_part.value}")
        return False

    card.nomination = CardNomination(character, body_part)
    return True


def reset_wild_card(card: Card) -> bool:
    """Clear a nomination. Fails on regular cards."""
    if not is_wild_card(card):
        return False
    card.nomination = None
    return True


def get_wild_card_constraints(card: Card) -> Tuple[List[Character], List[BodyPart]]:
    """Characters and body parts a card may be nominated as."""
    if card.type == CardType.WILD_CHARACTER:
        return ([card.character] if card.character else []), list(BODY_PARTS)
    if card.type == CardType.WILD_POSITION:
        return list(CHARACTERS), ([card.body_part] if card.body_part else [])
    if card.type == CardType.WILD_UNIVERSAL:
        return list(CHARACTERS), list(BODY_PARTS)
    return [], []


def get_possible_nominations(card: Card) -> List[CardNomination]:
    """Every legal nomination: 3 character wild, 4 position wild, 12 universal, 0 regular."""
    characters, body_parts = get_wild_card_constraints(card)
    return [
        CardNomination(character, body_part)
        for character in characters
        for body_part in body_parts
    ]


def get_effective_character(card: Card) -> Optional[Character]:
    return get_card_effective_properties(card)[0]


def get_effective_body_part(card: Card) -> Optional[BodyPart]:
    return get_card_effective_properties(card)[1]


def is_nominated(card: Card) -> bool:
    return is_wild_card(card) and card.nomination is not None


def requires_nomination(card: Card) -> bool:
    return is_wild_card(card) and card.nomination is None


def is_fast_card(card: Card) -> bool:
    return card.is_fast_card


def get_wild_card_description(card: Card) -> str:
    if card.type == CardType.WILD_CHARACTER:
        return f"Wild {card.character.value} (any body part)"
    if card.type == CardType.WILD_POSITION:
        return f"Wild {card.body_part.value} (any character)"
    if card.type == CardType.WILD_UNIVERSAL:
        return "Wild Universal (any character, any body part)"
    return f"{card.character.value} {card.body_part.value}"


def get_card_display_name(card: Card) -> str:
    if card.nomination:
        nomination = card.nomination
        return f"{nomination.character.value} {nomination.body_part.value} ({get_wild_card_description(card)})"
    return get_wild_card_description(card)
