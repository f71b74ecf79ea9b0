"""
Base bot interface and utilities.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models import (
    BodyPart, Card, CardNomination, Character, GamePhase, GameState, MoveAction,
    Stack, TurnPhase
)
from ..shuffle import get_card_effective_properties
from ..stacks import get_stacks_for_player


class BotAction:
    """Represents a bot action."""

    def __init__(self, action_type: str, **kwargs):
        self.type = action_type
        self.data = kwargs

    def __repr__(self) -> str:
        return f"BotAction({self.type!r}, {self.data!r})"

    @classmethod
    def play(
        cls,
        card: Card,
        target_stack_id: Optional[str] = None,
        target_pile: Optional[BodyPart] = None,
        nomination: Optional[CardNomination] = None
    ) -> 'BotAction':
        """Create a play action."""
        return cls('play', card=card, target_stack_id=target_stack_id,
                   target_pile=target_pile, nomination=nomination)

    @classmethod
    def move(cls, move: MoveAction) -> 'BotAction':
        """Create a move action."""
        return cls('move', move=move)

    @classmethod
    def skip_move(cls) -> 'BotAction':
        """Create a skip-move action."""
        return cls('skip_move')

    @classmethod
    def end_turn(cls) -> 'BotAction':
        """Create an end-turn action."""
        return cls('end_turn')


class BaseBot(ABC):
    """Abstract base class for bot players. Bots only read the state."""

    def __init__(self, player_id: str):
        self.player_id = player_id

    @abstractmethod
    def choose_action(self, state: GameState) -> Optional[BotAction]:
        """
        Choose an action based on the current game state.

        Args:
            state: Current game state (never mutated by the bot)

        Returns:
            BotAction to take, or None if no action needed
        """
        pass

    def get_player_hand(self, state: GameState) -> List[Card]:
        """Get this bot's current hand."""
        for player in state.players:
            if player.id == self.player_id:
                return list(player.hand)
        return []

    def is_my_turn(self, state: GameState) -> bool:
        """Check if it's this bot's turn."""
        return state.game_phase == GamePhase.PLAYING and state.current_player == self.player_id

    def is_awaiting_move(self, state: GameState) -> bool:
        turn_state = state.current_turn_state
        return turn_state is not None and turn_state.phase == TurnPhase.AWAIT_MOVE

    def can_continue_playing(self, state: GameState) -> bool:
        turn_state = state.current_turn_state
        return turn_state is not None and turn_state.can_continue_playing

    def get_my_stacks(self, state: GameState) -> List[Stack]:
        return get_stacks_for_player(state, self.player_id)

    def get_opponent_stacks(self, state: GameState) -> List[Stack]:
        return [stack for stack in state.stacks if stack.owner != self.player_id]

    def get_top_characters(self, stack: Stack) -> Dict[BodyPart, Optional[Character]]:
        """Effective character of each pile's top card (None for empty piles)."""
        tops = {}
        for body_part, pile in stack.piles.items():
            tops[body_part] = get_card_effective_properties(pile.cards[-1])[0] if pile.cards else None
        return tops
