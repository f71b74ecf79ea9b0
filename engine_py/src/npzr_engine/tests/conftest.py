"""
Shared fixtures for the NPZR engine tests.
"""

from typing import Optional

import pytest

from npzr_engine.engine import NPZREngine
from npzr_engine.game import create_game_state
from npzr_engine.models import BodyPart, Card, CardNomination, CardType, Character, GameState, Stack
from npzr_engine.rules import create_rules
from npzr_engine.stacks import add_card_to_stack


class CardPicker:
    """
    Pulls specific cards out of the deck (or a hand) so tests can set up a
    board without breaking card conservation.
    """

    def __init__(self, state: GameState):
        self.state = state
        self.used = set()

    def take(
        self,
        card_type: CardType,
        character: Optional[Character] = None,
        body_part: Optional[BodyPart] = None
    ) -> Card:
        locations = [self.state.deck] + [player.hand for player in self.state.players]
        for cards in locations:
            for index, card in enumerate(cards):
                if card.id in self.used or card.type != card_type:
                    continue
                if character is not None and card.character != character:
                    continue
                if body_part is not None and card.body_part != body_part:
                    continue
                self.used.add(card.id)
                return cards.pop(index)
        raise LookupError(f"No free {card_type.value} {character} {body_part} card")

    def to_hand(
        self,
        card_type: CardType,
        character: Optional[Character] = None,
        body_part: Optional[BodyPart] = None,
        player_id: Optional[str] = None
    ) -> Card:
        card = self.take(card_type, character, body_part)
        owner = player_id or self.state.current_player
        next(p for p in self.state.players if p.id == owner).hand.append(card)
        return card

    def regular(self, character: Character, body_part: BodyPart, player_id: Optional[str] = None) -> Card:
        return self.to_hand(CardType.REGULAR, character, body_part, player_id)

    def on_stack(
        self,
        stack: Stack,
        pile: BodyPart,
        card_type: CardType,
        character: Optional[Character] = None,
        body_part: Optional[BodyPart] = None,
        nomination: Optional[CardNomination] = None
    ) -> Card:
        card = self.take(card_type, character, body_part)
        card.nomination = nomination
        add_card_to_stack(stack, card, pile)
        return card

    def regular_on_stack(self, stack: Stack, character: Character, body_part: BodyPart) -> Card:
        return self.on_stack(stack, body_part, CardType.REGULAR, character, body_part)


@pytest.fixture
def state():
    return create_game_state(create_rules(seed=42))


@pytest.fixture
def picker(state):
    return CardPicker(state)


@pytest.fixture
def engine():
    return NPZREngine(create_rules(seed=42))


@pytest.fixture
def engine_picker(engine):
    return CardPicker(engine.state)
