"""Game setup, seats, stacks and the win condition"""

import logging
from typing import Optional

from .constants import PLAYER_IDS, REQUIRED_CHARACTERS
from .errors import UNKNOWN_PLAYER, WILD_NOT_SCORABLE, raise_error
from .models import Character, GamePhase, GameState, Player, Stack
from .rules import RuleConfig, default_rules
from .shuffle import create_deck, deal_initial_hands, make_rng, shuffle_deck

logger = logging.getLogger(__name__)


def create_game_state(rules: RuleConfig = default_rules) -> GameState:
    """Build a shuffled deck, seat both players and deal the opening hands."""
    deck = create_deck(rules)
    shuffle_deck(deck, make_rng(rules))

    state = GameState(
        players=[Player(id=player_id) for player_id in PLAYER_IDS],
        current_player=PLAYER_IDS[0],
        deck=deck,
        rule_config=rules,
    )

    deal_initial_hands(state)
    state.game_phase = GamePhase.PLAYING
    logger.info(f"Game created: {len(state.deck)} cards left in deck")
    return state


def get_player(state: GameState, player_id: str) -> Optional[Player]:
    for player in state.players:
        if player.id == player_id:
            return player
    return None


def get_current_player(state: GameState) -> Player:
    player = get_player(state, state.current_player)
    if player is None:
        raise_error(UNKNOWN_PLAYER, f"Current player {state.current_player} is not seated")
    return player


def get_opponent_player(state: GameState) -> Player:
    for player in state.players:
        if player.id != state.current_player:
            return player
    raise_error(UNKNOWN_PLAYER, "No opponent seated")


def switch_turn(state: GameState) -> None:
    state.current_player = get_opponent_player(state).id
    logger.info(f"Turn passes to {state.current_player}")


def create_stack(state: GameState, owner: str) -> Stack:
    """Create an empty stack with a never-reused id."""
    stack = Stack(id=f"stack_{state.next_stack_number}", owner=owner)
    state.next_stack_number += 1
    state.stacks.append(stack)
    return stack


def find_stack_by_id(state: GameState, stack_id: Optional[str]) -> Optional[Stack]:
    for stack in state.stacks:
        if stack.id == stack_id:
            return stack
    return None


def record_score(player: Player, character: Character) -> None:
    """Add a completed character to a player's score. The WILD sentinel is a caller bug."""
    if character == Character.WILD or character not in REQUIRED_CHARACTERS:
        raise_error(WILD_NOT_SCORABLE, f"Cannot score {character!r} for {player.id}")
    if character in player.scored_characters:
        logger.info(f"{player.id} already scored {character.value}")
    player.scored_characters.add(character)


def check_win_condition(player: Player) -> bool:
    return REQUIRED_CHARACTERS.issubset(player.scored_characters)


def check_game_winner(state: GameState) -> Optional[str]:
    for player in state.players:
        if check_win_condition(player):
            return player.id
    return None
