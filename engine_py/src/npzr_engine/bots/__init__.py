"""
Bot players driving the engine facade.
"""

from .base import BaseBot, BotAction
from .greedy import GreedyBot, play_bot_turn

__all__ = ["BaseBot", "BotAction", "GreedyBot", "play_bot_turn"]
