# engine_py/src/npzr_engine/errors.py

import logging

logger = logging.getLogger(__name__)


class GameError(Exception):
    """Raised for programmer errors and broken invariants, never for gameplay rejections."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Programmer-error codes; gameplay rejection codes live in constants.py
WILD_NOT_SCORABLE = "WILD_NOT_SCORABLE"
INVARIANT_VIOLATION = "INVARIANT_VIOLATION"
UNKNOWN_PLAYER = "UNKNOWN_PLAYER"

def raise_error(code: str, message: str):
    logger.error(f"[{code}] {message}")
    raise GameError(code, message)
