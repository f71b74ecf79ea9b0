"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, Optional

import orjson

from .models import Card, GameState, Stack, TurnState
from .stacks import check_stack_completion


def card_to_dict(card: Card) -> Dict[str, Any]:
    return {
        "id": card.id,
        "type": card.type.value,
        "character": card.character.value if card.character else None,
        "body_part": card.body_part.value if card.body_part else None,
        "nomination": {
            "character": card.nomination.character.value,
            "body_part": card.nomination.body_part.value
        } if card.nomination else None,
        "is_fast_card": card.is_fast_card
    }


def stack_to_dict(stack: Stack) -> Dict[str, Any]:
    completed = check_stack_completion(stack)
    return {
        "id": stack.id,
        "owner": stack.owner,
        "piles": {
            body_part.value: [card_to_dict(card) for card in pile.cards]
            for body_part, pile in stack.piles.items()
        },
        "completes_as": completed.value if completed else None
    }


def _turn_state_to_dict(turn_state: Optional[TurnState]) -> Optional[Dict[str, Any]]:
    if turn_state is None:
        return None
    return {
        "phase": turn_state.phase.value,
        "cards_played_this_turn": [card.id for card in turn_state.cards_played_this_turn],
        "last_card_was_wild": turn_state.last_card_was_wild,
        "moves_earned_this_turn": turn_state.moves_earned_this_turn,
        "can_continue_playing": turn_state.can_continue_playing,
        "has_drawn_card": turn_state.has_drawn_card
    }


def sanitize_state(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Sanitize game state for a UI or AI client.

    Args:
        state: Game state to sanitize
        viewer_id: ID of the player viewing the state (to show their cards)

    Returns:
        Sanitized state dictionary safe for JSON transmission. The deck order
        and the other seat's hand are hidden.
    """
    sanitized = {
        "current_player": state.current_player,
        "game_phase": state.game_phase.value,
        "winner": state.winner,
        "pending_moves": state.pending_moves,
        "deck_size": len(state.deck),
        "scored_card_count": len(state.scored_cards),
        "stacks": [stack_to_dict(stack) for stack in state.stacks],
        "turn": _turn_state_to_dict(state.current_turn_state),
        "players": {}
    }

    for player in state.players:
        sanitized_player = {
            "id": player.id,
            "name": player.name,
            "hand_count": len(player.hand),
            "scored_characters": sorted(character.value for character in player.scored_characters)
        }

        # Show full hand only to the viewer
        if player.id == viewer_id:
            sanitized_player["hand"] = [card_to_dict(card) for card in player.hand]

        sanitized["players"][player.id] = sanitized_player

    return sanitized


def dumps_state(state: GameState, viewer_id: Optional[str] = None) -> bytes:
    """JSON-encode the sanitized view of a state."""
    return orjson.dumps(sanitize_state(state, viewer_id))
