"""
NPZR (Ninja Pirate Zombie Robot) rules engine.
"""

from .engine import NPZREngine
from .errors import GameError
from .models import (
    BodyPart, Card, CardNomination, CardType, Character, GamePhase, GameState,
    MoveAction, PlayCardAction, TurnContinuation, TurnPhase
)
from .rules import RuleConfig, create_rules, default_rules

__all__ = [
    "NPZREngine", "GameError", "BodyPart", "Card", "CardNomination", "CardType",
    "Character", "GamePhase", "GameState", "MoveAction", "PlayCardAction",
    "TurnContinuation", "TurnPhase", "RuleConfig", "create_rules", "default_rules",
]
