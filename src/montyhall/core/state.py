from enum import Enum, IntEnum, auto

class DoorState(IntEnum):
    """State of each door in the observation vector."""

    CLOSED = 0  # Still in play & not held by the player
    GOAT = 1  # Revealed by the host, out of play
    CHOSEN = 2  # Still in play and currently held by the player
    CAR = 3  # Prize shown once the game is over


class Phase(Enum):
    """Progress phase of a game."""

    AWAITING_FIRST_PICK = auto()
    ACTIVE = auto()
    FINAL = auto()
