"""Game constants"""

from .models import BodyPart, Character

CHARACTERS = [Character.NINJA, Character.PIRATE, Character.ZOMBIE, Character.ROBOT]
BODY_PARTS = [BodyPart.HEAD, BodyPart.TORSO, BodyPart.LEGS]

REQUIRED_CHARACTERS = frozenset(CHARACTERS)

PLAYER_ONE = "player1"
PLAYER_TWO = "player2"
PLAYER_IDS = [PLAYER_ONE, PLAYER_TWO]

NEW_STACK_ID = "new"
WILD_CARD_COUNT = len(CHARACTERS) + len(BODY_PARTS) + 1

# Rejection codes (reported, never raised)
ERROR_GAME_FINISHED = "GAME_FINISHED"
ERROR_WRONG_PHASE = "WRONG_PHASE"
ERROR_NOT_IN_HAND = "NOT_IN_HAND"
ERROR_STACK_NOT_FOUND = "STACK_NOT_FOUND"
ERROR_CARD_NOT_IN_PILE = "CARD_NOT_IN_PILE"
ERROR_NO_PENDING_MOVES = "NO_PENDING_MOVES"
ERROR_ILLEGAL_NOMINATION = "ILLEGAL_NOMINATION"
ERROR_PILE_UNRESOLVED = "PILE_UNRESOLVED"
ERROR_NOT_WILD = "NOT_WILD"
