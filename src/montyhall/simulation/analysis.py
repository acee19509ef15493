from fractions import Fraction

import numpy as np


def expected_win_rate(strategy_name: str, door_count: int) -> Fraction:
    """Exact probability that a strategy wins a game with ``door_count`` doors.

    Args:
        strategy_name (str): One of ``AlwaysStay``, ``ChangeLastRound`` or ``ChangeAllTheTime``.
        door_count (int): Number of doors, at least 3.

    Returns:
        Fraction: the winning probability.

    Raises:
        ValueError: for fewer than 3 doors.
        KeyError: for an unknown strategy name.
    """
    if door_count < 3:
        raise ValueError("Monty Hall requires at least 3 doors.")

    match strategy_name:
        case "AlwaysStay":
            return Fraction(1, door_count)
        case "ChangeLastRound":
            return Fraction(door_count - 1, door_count)
        case "ChangeAllTheTime":
            # Holding the prize, a switch always loses it; otherwise the prize is
            # one of the (k - 2) other doors left after the reveal.
            win = Fraction(1, door_count)
            for open_before_reveal in range(door_count, 2, -1):
                win = (1 - win) / (open_before_reveal - 2)
            return win
        case _:
            raise KeyError(f"No closed form known for strategy {strategy_name!r}.")


def has_converged(win_rate: float, expected: float, tolerance: float = 0.01) -> bool:
    """Return ``True`` if an empirical win rate sits within ``tolerance`` of the exact one.

    Args:
        win_rate (float): Observed fraction of games won.
        expected (float): Exact winning probability.
        tolerance (float, optional): Largest accepted absolute gap. Defaults to ``0.01``.
    """
    return bool(np.isclose(win_rate, expected, rtol=0.0, atol=tolerance))
