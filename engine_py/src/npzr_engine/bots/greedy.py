"""
Greedy bot implementation with basic heuristics.
"""

import logging
from typing import List, Optional, Tuple

from .base import BaseBot, BotAction
from ..constants import BODY_PARTS
from ..models import BodyPart, Card, CardNomination, Character, GameState, Stack, TurnContinuation
from ..moves import find_completing_move
from ..shuffle import get_card_effective_properties
from ..wildcards import get_possible_nominations

logger = logging.getLogger(__name__)

# (score, card, target_stack_id, target_pile, nomination)
Candidate = Tuple[float, Card, Optional[str], BodyPart, Optional[CardNomination]]


class GreedyBot(BaseBot):
    """
    Greedy bot that scores every legal play one step ahead.

    Strategy:
    - Complete one of its own stacks whenever a card allows it
    - Bury the top of an opponent stack that is one card from completing
    - Build towards matching tops on its own stacks
    - Keep wild cards for completions rather than opening stacks with them
    - Spend earned moves only when the relocation exposes a completion
    """

    def choose_action(self, state: GameState) -> Optional[BotAction]:
        """Choose the best action for the current state."""
        if not self.is_my_turn(state) or state.current_turn_state is None:
            return None

        if self.is_awaiting_move(state):
            return self._choose_move_action(state)

        return self._choose_play_action(state)

    def _choose_move_action(self, state: GameState) -> BotAction:
        move = find_completing_move(state)
        if move is not None:
            return BotAction.move(move)
        return BotAction.skip_move()

    def _choose_play_action(self, state: GameState) -> BotAction:
        candidates = self.get_candidate_plays(state)
        if not candidates:
            return BotAction.end_turn()

        best = max(candidates, key=lambda candidate: candidate[0])
        score, card, target_stack_id, target_pile, nomination = best

        # An extra play is optional, only take it when it is worth something
        if self.can_continue_playing(state) and score <= 0:
            return BotAction.end_turn()

        return BotAction.play(card, target_stack_id, target_pile, nomination)

    def get_candidate_plays(self, state: GameState) -> List[Candidate]:
        """Score every (card, nomination, target) combination in hand."""
        candidates = []
        my_stacks = self.get_my_stacks(state)
        opponent_stacks = self.get_opponent_stacks(state)

        for card in self.get_player_hand(state):
            nominations = get_possible_nominations(card) if card.is_wild else [None]
            for nomination in nominations:
                if nomination is not None:
                    character, body_part = nomination.character, nomination.body_part
                else:
                    character, body_part = get_card_effective_properties(card)

                for stack in my_stacks:
                    score = self._score_own_stack(stack, character, body_part)
                    candidates.append((self._wild_adjusted(card, score), card, stack.id, body_part, nomination))

                for stack in opponent_stacks:
                    for pile, score in self._blocking_piles(stack, character):
                        candidates.append((self._wild_adjusted(card, score), card, stack.id, pile, nomination))

                candidates.append((self._wild_adjusted(card, 5.0), card, None, body_part, nomination))

        return candidates

    def _score_own_stack(self, stack: Stack, character: Character, body_part: BodyPart) -> float:
        tops = self.get_top_characters(stack)
        tops[body_part] = character

        if all(tops[part] == character for part in BODY_PARTS):
            return 100.0

        score = 0.0
        for part in BODY_PARTS:
            if part != body_part and tops[part] == character:
                score += 10
            elif part != body_part and tops[part] is not None:
                score -= 3

        current = stack.piles[body_part].top
        if current is not None and get_card_effective_properties(current)[0] == character:
            # Covering a matching top wastes the card
            score -= 5
        return score

    def _blocking_piles(self, stack: Stack, character: Character) -> List[Tuple[BodyPart, float]]:
        """Piles where this card breaks an opponent's near-complete stack."""
        tops = self.get_top_characters(stack)
        counts = {}
        for top in tops.values():
            if top is not None:
                counts[top] = counts.get(top, 0) + 1

        threats = [top for top, count in counts.items() if count >= 2]
        result = []
        for threat in threats:
            if threat == character:
                continue
            for part in BODY_PARTS:
                if tops[part] == threat:
                    result.append((part, 30.0))
        return result

    def _wild_adjusted(self, card: Card, score: float) -> float:
        if not card.is_wild:
            return score
        # Prefer a regular card for the same result
        return score - (1 if score >= 100 else 8)


def play_bot_turn(engine, bot: BaseBot, max_actions: int = 50) -> List[BotAction]:
    """
    Drive one full sequential turn for a bot through the engine facade.

    Returns:
        The actions the bot took, in order
    """
    actions = []
    if engine.is_game_finished() or engine.get_current_player() != bot.player_id:
        return actions

    signal = engine.start_turn()
    while signal != TurnContinuation.END_TURN and len(actions) < max_actions:
        action = bot.choose_action(engine.get_game_state())
        if action is None:
            break
        actions.append(action)

        if action.type == 'play':
            signal = engine.play_card(**action.data)
        elif action.type == 'move':
            signal = engine.execute_sequential_move(action.data['move'])
        elif action.type == 'skip_move':
            signal = engine.skip_move()
        elif action.type == 'end_turn':
            signal = engine.end_turn()

    if signal != TurnContinuation.END_TURN and not engine.is_game_finished():
        logger.warning(f"{bot.player_id} stopped after {len(actions)} actions without ending the turn")
    return actions
