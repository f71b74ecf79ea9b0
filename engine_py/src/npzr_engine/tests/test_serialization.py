"""
Tests for state sanitization and JSON encoding.
"""

import orjson

from npzr_engine.constants import PLAYER_ONE, PLAYER_TWO
from npzr_engine.game import create_stack
from npzr_engine.models import BodyPart, Character
from npzr_engine.serialization import dumps_state, sanitize_state


def test_viewer_sees_only_own_hand(state):
    view = sanitize_state(state, PLAYER_ONE)

    assert len(view["players"][PLAYER_ONE]["hand"]) == 5
    assert "hand" not in view["players"][PLAYER_TWO]
    assert view["players"][PLAYER_TWO]["hand_count"] == 5
    assert "deck" not in view
    assert view["deck_size"] == 34
    assert view["game_phase"] == "playing"


def test_stacks_report_completion(state, picker):
    stack = create_stack(state, PLAYER_TWO)
    for body_part in (BodyPart.HEAD, BodyPart.TORSO, BodyPart.LEGS):
        picker.regular_on_stack(stack, Character.ZOMBIE, body_part)

    view = sanitize_state(state)
    assert view["stacks"][0]["completes_as"] == "zombie"
    assert len(view["stacks"][0]["piles"]["head"]) == 1


def test_dumps_state_is_json(state):
    state.players[0].scored_characters.add(Character.PIRATE)

    decoded = orjson.loads(dumps_state(state, PLAYER_TWO))

    assert decoded["current_player"] == PLAYER_ONE
    assert decoded["players"][PLAYER_ONE]["scored_characters"] == ["pirate"]
    assert decoded["turn"] is None
