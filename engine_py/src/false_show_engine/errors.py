# engine_py/src/false_show_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
INVALID_PLAYER = "INVALID_PLAYER"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
INVALID_PLAY = "INVALID_PLAY"
ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
NO_PENALTY_PENDING = "NO_PENALTY_PENDING"
INVALID_SETTINGS = "INVALID_SETTINGS"
INVALID_STATE = "INVALID_STATE"

# Helper function to raise common errors
def raise_error(code: str, message: str):
    raise GameError(code, message)
