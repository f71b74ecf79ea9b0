"""
Deck construction, shuffling, dealing and drawing.
"""

import logging
import random
from typing import List, Optional, Tuple

from .constants import BODY_PARTS, CHARACTERS
from .models import BodyPart, Card, CardType, Character, GameState
from .rules import RuleConfig, default_rules

logger = logging.getLogger(__name__)


def create_deck(rules: RuleConfig = default_rules) -> List[Card]:
    """
    Create the full card universe with sequential ids.

    Regular cards come first (character x body part x copies), followed by one
    character wild per character, one position wild per body part and a
    single universal wild.
    """
    cards = []
    card_id = 1

    for character in CHARACTERS:
        for body_part in BODY_PARTS:
            for _ in range(rules.regular_copies):
                cards.append(Card(
                    id=str(card_id),
                    type=CardType.REGULAR,
                    character=character,
                    body_part=body_part,
                    is_fast_card=False
                ))
                card_id += 1

    for character in CHARACTERS:
        cards.append(Card(id=str(card_id), type=CardType.WILD_CHARACTER, character=character, is_fast_card=True))
        card_id += 1

    for body_part in BODY_PARTS:
        cards.append(Card(id=str(card_id), type=CardType.WILD_POSITION, body_part=body_part, is_fast_card=True))
        card_id += 1

    cards.append(Card(id=str(card_id), type=CardType.WILD_UNIVERSAL, is_fast_card=True))

    return cards


def shuffle_deck(deck: List[Card], rng: Optional[random.Random] = None) -> None:
    """
    Shuffle a deck in place with a uniform random permutation.

    Args:
        deck: Cards to shuffle
        rng: Optional random source for deterministic shuffling
    """
    rng = rng or random.Random()
    rng.shuffle(deck)


def make_rng(rules: RuleConfig) -> random.Random:
    """Random source honoring the configured seed."""
    if rules.seed is not None:
        return random.Random(rules.seed)
    return random.Random()


def deal_initial_hands(state: GameState) -> None:
    """Deal ``hand_size`` cards to every seat, one at a time in seat order."""
    for _ in range(state.rule_config.hand_size):
        for player in state.players:
            if state.deck:
                player.hand.append(state.deck.pop())


def refresh_deck(state: GameState, rng: Optional[random.Random] = None) -> int:
    """
    Refill an empty deck from the cards removed by completed stacks.

    Returns:
        Number of cards returned to the deck
    """
    if state.deck:
        return 0
    if not state.rule_config.reshuffle_scored_cards or not state.scored_cards:
        return 0

    reclaimed = state.scored_cards
    state.scored_cards = []
    for card in reclaimed:
        card.nomination = None

    state.deck = reclaimed
    shuffle_deck(state.deck, rng or make_rng(state.rule_config))
    logger.info(f"Deck refilled with {len(reclaimed)} scored cards")
    return len(reclaimed)


def draw_card(state: GameState) -> Optional[Card]:
    """
    Move the top card of the deck into the current player's hand.

    Returns:
        The drawn card, or None when the deck is empty and cannot be refilled
    """
    from .game import get_current_player

    if not state.deck:
        refresh_deck(state)

    if not state.deck:
        logger.warning("Deck exhausted, no reclaimable cards - nothing drawn")
        return None

    card = state.deck.pop()
    get_current_player(state).hand.append(card)
    logger.debug(f"{state.current_player} drew card {card.id}")
    return card


def is_wild_card(card: Card) -> bool:
    return card.type != CardType.REGULAR


def can_card_fit_pile(card: Card, character: Optional[Character], body_part: Optional[BodyPart]) -> bool:
    """Check whether a card could stand for the given character/body part."""
    if card.type == CardType.REGULAR:
        return card.character == character and card.body_part == body_part
    if card.type == CardType.WILD_CHARACTER:
        return card.character == character
    if card.type == CardType.WILD_POSITION:
        return card.body_part == body_part
    if card.type == CardType.WILD_UNIVERSAL:
        return True
    return False


def get_card_effective_properties(card: Card) -> Tuple[Optional[Character], Optional[BodyPart]]:
    """
    Resolve what a card currently stands for.

    Returns:
        (character, body_part) from the nomination if present, else the card's
        fixed values; a dimension is None when neither exists.
    """
    if card.nomination:
        return card.nomination.character, card.nomination.body_part
    return card.character, card.body_part


def count_card_types(deck: List[Card]) -> dict:
    """Count cards per CardType."""
    summary = {card_type: 0 for card_type in CardType}
    for card in deck:
        summary[card.type] += 1
    return summary
