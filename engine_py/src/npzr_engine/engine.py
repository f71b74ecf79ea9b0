"""Game engine facade owning one GameState"""

import logging
from typing import List, Optional, Sequence, Set

from . import moves, turns
from .game import create_game_state, get_player
from .models import (
    BodyPart, Card, CardNomination, Character, GamePhase, GameState, MoveAction,
    PlayCardAction, PlayerHandle, Stack, TurnContinuation, TurnState
)
from .rules import RuleConfig, default_rules
from .shuffle import draw_card
from .validate import GameStateReport, assert_valid_state, validate_game_state
from .wildcards import nominate_wild_card

logger = logging.getLogger(__name__)


class NPZREngine:
    """
    Public call surface for UI and AI callers.

    Every mutating method reports rejections through its return value and,
    with ``strict_invariants`` enabled, raises GameError if the state ever
    stops passing validate_game_state.
    """

    def __init__(self, rules: Optional[RuleConfig] = None):
        self.rules = rules or default_rules
        self.state: GameState = create_game_state(self.rules)

    @classmethod
    def from_state(cls, state: GameState) -> 'NPZREngine':
        engine = cls.__new__(cls)
        engine.rules = state.rule_config
        engine.state = state
        return engine

    # Lifecycle

    def create_game(self, rules: Optional[RuleConfig] = None) -> GameState:
        if rules is not None:
            self.rules = rules
        self.state = create_game_state(self.rules)
        return self.state

    def add_player(self, name: str) -> Optional[PlayerHandle]:
        """Name the next free seat. Returns None when both seats are taken."""
        for player in self.state.players:
            if player.name is None:
                player.name = name
                logger.info(f"{name} takes seat {player.id}")
                return PlayerHandle(id=player.id, name=name)
        logger.info(f"No free seat for {name}")
        return None

    def reset(self) -> None:
        """Start a fresh game with the same rules and seat names."""
        names = [player.name for player in self.state.players]
        self.state = create_game_state(self.rules)
        for player, name in zip(self.state.players, names):
            player.name = name

    def clone(self) -> 'NPZREngine':
        return NPZREngine.from_state(self.state.clone())

    # Queries

    def get_game_state(self) -> GameState:
        return self.state

    def get_current_player(self) -> str:
        return self.state.current_player

    def get_player_hand(self, player_id: str) -> List[Card]:
        player = get_player(self.state, player_id)
        return list(player.hand) if player else []

    def get_player_score(self, player_id: str) -> Set[Character]:
        player = get_player(self.state, player_id)
        return set(player.scored_characters) if player else set()

    def get_stacks(self) -> List[Stack]:
        return list(self.state.stacks)

    def get_deck_size(self) -> int:
        return len(self.state.deck)

    def get_pending_moves(self) -> int:
        return self.state.pending_moves

    def is_game_finished(self) -> bool:
        return self.state.game_phase == GamePhase.FINISHED

    def get_winner(self) -> Optional[str]:
        return self.state.winner

    def get_current_turn_state(self) -> Optional[TurnState]:
        return self.state.current_turn_state

    def get_available_moves(self) -> List[MoveAction]:
        return moves.get_available_moves(self.state)

    def validate_card_play(self, card: Card, target_stack_id: Optional[str] = None) -> bool:
        return turns.validate_card_play(self.state, card, target_stack_id)

    def validate_game_state(self) -> GameStateReport:
        return validate_game_state(self.state)

    # Mutations

    def _check_invariants(self) -> None:
        if self.state.rule_config.strict_invariants:
            assert_valid_state(self.state)

    def draw_card(self) -> Optional[Card]:
        if self.is_game_finished():
            return None
        card = draw_card(self.state)
        self._check_invariants()
        return card

    def nominate_wild_card(self, card: Card, nomination: CardNomination) -> bool:
        if self.is_game_finished() or not card.is_wild:
            return False
        return nominate_wild_card(card, nomination.character, nomination.body_part)

    def play_turn(self, action: PlayCardAction, chained_wild_actions: Sequence[PlayCardAction] = ()) -> bool:
        if self.is_game_finished():
            return False
        result = turns.execute_turn(self.state, action, chained_wild_actions)
        self._check_invariants()
        return result

    def start_turn(self) -> TurnContinuation:
        result = turns.start_sequential_turn(self.state)
        self._check_invariants()
        return result

    def play_card(
        self,
        card: Card,
        target_stack_id: Optional[str] = None,
        target_pile: Optional[BodyPart] = None,
        nomination: Optional[CardNomination] = None
    ) -> TurnContinuation:
        result = turns.play_next_card(self.state, card, target_stack_id, target_pile, nomination)
        self._check_invariants()
        return result

    def execute_sequential_move(self, move: MoveAction) -> TurnContinuation:
        result = turns.execute_sequential_move(self.state, move)
        self._check_invariants()
        return result

    def skip_move(self) -> TurnContinuation:
        return turns.skip_move(self.state)

    def end_turn(self) -> TurnContinuation:
        return turns.end_sequential_turn(self.state)

    def can_play_another_card(self) -> bool:
        return turns.can_play_another_card(self.state)

    def is_awaiting_move(self) -> bool:
        return turns.is_awaiting_move(self.state)

    def execute_move(self, move: MoveAction) -> bool:
        """Spend one pending move. Inside a sequential turn this also advances the turn."""
        if self.is_game_finished() or self.state.pending_moves <= 0:
            return False

        if self.is_awaiting_move():
            if not moves.can_execute_move(self.state, move):
                return False
            turns.execute_sequential_move(self.state, move)
            success = True
        else:
            success = moves.apply_pending_move(self.state, move)
            turns.close_finished_turn(self.state)

        self._check_invariants()
        return success

    def cascade_completions(self) -> int:
        """Spend pending moves heuristically. Refused while a turn awaits its move."""
        if self.is_game_finished() or self.is_awaiting_move():
            return 0
        completions = moves.cascade_completions(self.state)
        turns.close_finished_turn(self.state)
        self._check_invariants()
        return completions
