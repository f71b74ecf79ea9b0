#!/usr/bin/env python3
"""Self-play runner: two greedy bots play one NPZR game"""

import logging
import os
from typing import Optional

from .bots import GreedyBot, play_bot_turn
from .constants import PLAYER_IDS
from .engine import NPZREngine
from .rules import create_rules
from .serialization import dumps_state

logger = logging.getLogger(__name__)


def run_game(seed: Optional[int] = None, max_turns: int = 500) -> NPZREngine:
    """
    Play bots against each other until someone wins or ``max_turns`` pass.

    Returns:
        The engine holding the final state
    """
    engine = NPZREngine(create_rules(seed=seed))
    for player_id in PLAYER_IDS:
        engine.add_player(f"Greedy {player_id}")
    bots = {player_id: GreedyBot(player_id) for player_id in PLAYER_IDS}

    turns_played = 0
    while not engine.is_game_finished() and turns_played < max_turns:
        bot = bots[engine.get_current_player()]
        play_bot_turn(engine, bot)
        turns_played += 1

    if engine.is_game_finished():
        logger.info(f"{engine.get_winner()} won after {turns_played} turns")
    else:
        logger.info(f"No winner after {turns_played} turns")
    return engine


def main():
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

    seed = os.getenv("NPZR_SEED")
    max_turns = int(os.getenv("NPZR_MAX_TURNS", 500))

    engine = run_game(int(seed) if seed else None, max_turns)
    print(dumps_state(engine.get_game_state()).decode())


if __name__ == "__main__":
    main()
