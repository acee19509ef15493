"""doors.py

The per-game door model: which doors are still in play, where the prize is,
and which door the player currently holds.

"Open" here means *available*: an open door can still be picked or revealed.
A door revealed by the host is closed for the rest of the game.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from loguru import logger


class InvalidDoorCount(ValueError):
    """Raised when a game is set up with fewer than three doors."""


class EmptyChoiceSet(RuntimeError):
    """Raised when a reveal or a switch finds no eligible door to act on."""


@dataclass(frozen=True, slots=True)
class DoorSnapshot:
    """Read-only view of a :class:`DoorSet` handed to strategies.

    The winning door is deliberately left out, a player never knows it.
    """

    door_count: int
    open_mask: tuple[bool, ...]
    open_count: int
    player_pick: int

    def candidates(self) -> list[int]:
        """Open doors the player could switch to."""
        return [
            door for door, is_open in enumerate(self.open_mask)
            if is_open and door != self.player_pick
        ]


class DoorSet:
    def __init__(
        self,
        door_count: int,
        initial_pick: int,
        rng: np.random.Generator | None = None,
        *,
        winning_door: int | None = None,
    ) -> None:
        """Creates a fresh set of doors, all of them open.

        Args:
            door_count (int): Number of doors, fixed for the lifetime of the set.
            initial_pick (int): Door the player holds at the start.
            rng (np.random.Generator | None, optional): Source of randomness for the
              winning door. Defaults to None (a fresh unseeded generator).
            winning_door (int | None, optional): Forces the prize behind a given door,
              mostly useful for scripted scenarios. Defaults to None (uniformly random).

        Raises:
            InvalidDoorCount: if fewer than 3 doors are requested.
            ValueError: if ``initial_pick`` or ``winning_door`` is not a valid door id.
        """
        if door_count < 3:
            raise InvalidDoorCount(f"Monty Hall requires at least 3 doors, got {door_count}.")
        if not (0 <= initial_pick < door_count):
            raise ValueError(f"Initial pick {initial_pick!r} is not a door in [0, {door_count}).")

        rng = rng if rng is not None else np.random.default_rng()
        if winning_door is None:
            winning_door = int(rng.integers(door_count))
        elif not (0 <= winning_door < door_count):
            raise ValueError(f"Winning door {winning_door!r} is not a door in [0, {door_count}).")

        self.door_count = int(door_count)
        self.open_mask = np.ones(self.door_count, dtype=bool)
        self.open_count = self.door_count
        self.winning_door = int(winning_door)
        self.player_pick = int(initial_pick)

    def __repr__(self) -> str:
        return (
            f"DoorSet(door_count={self.door_count}, open={np.flatnonzero(self.open_mask).tolist()}, "
            f"winning_door={self.winning_door}, player_pick={self.player_pick})"
        )

    def is_open(self, door: int) -> bool:
        return bool(self.open_mask[door])

    def revealable(self) -> list[int]:
        """Doors the host may reveal: open, not held by the player, not the prize."""
        return [
            int(door) for door in np.flatnonzero(self.open_mask)
            if door != self.player_pick and door != self.winning_door
        ]

    def candidates(self) -> list[int]:
        """Open doors other than the current pick."""
        return [int(door) for door in np.flatnonzero(self.open_mask) if door != self.player_pick]

    def snapshot(self) -> DoorSnapshot:
        return DoorSnapshot(
            door_count=self.door_count,
            open_mask=tuple(bool(x) for x in self.open_mask),
            open_count=self.open_count,
            player_pick=self.player_pick,
        )

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 State transitions                                #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def close(self, door: int) -> None:
        """Takes a revealed door out of play.

        Raises:
            EmptyChoiceSet: if ``door`` is the prize or the player's pick.
            ValueError: if ``door`` is already closed.
        """
        if door == self.winning_door or door == self.player_pick:
            raise EmptyChoiceSet(f"Door {door} cannot be revealed: it is the prize or the pick.")
        if not self.open_mask[door]:
            raise ValueError(f"Door {door} is already closed.")

        self.open_mask[door] = False
        self.open_count -= 1
        logger.trace("Closed door {door}, {left} still open", door=door, left=self.open_count)

    def switch_to(self, door: int) -> None:
        """Moves the player's pick onto another open door."""
        if not (0 <= door < self.door_count) or not self.open_mask[door]:
            raise ValueError(f"Cannot switch to door {door!r}: it is not open.")
        self.player_pick = int(door)
