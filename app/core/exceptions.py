class GameException(Exception):
    """Base exception for game-related errors."""
    pass


class InvalidConfiguration(GameException):
    """Raised when grid size, win length, marks or board shape are unusable."""
    pass


class IllegalMove(GameException):
    """Raised when a move targets a cell that cannot be played."""
    pass


class CellOccupied(IllegalMove):
    """Raised when trying to move to an occupied cell."""
    pass


class OutOfBounds(IllegalMove):
    """Raised when a move lies outside the grid."""
    pass


class GameEnded(GameException):
    """Raised when trying to move in an ended round."""
    pass


class NotYourTurn(GameException):
    """Raised when a mark is played out of turn."""
    pass
