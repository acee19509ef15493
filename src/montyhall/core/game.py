"""game.py

One play-through of the multi-round Monty Hall game.

Every round the host reveals one door that is neither the prize nor the
player's pick, then the player's strategy may move the pick. The game ends
once only two doors are left open, after exactly ``door_count - 2`` rounds.
"""
from __future__ import annotations

import numpy as np
from loguru import logger

from .doors import DoorSet, EmptyChoiceSet
from .state import Phase
from .strategy import Strategy


def reveal_random_door(doors: DoorSet, rng: np.random.Generator) -> int:
    """Host move: closes one uniformly chosen revealable door and returns its id.

    Raises:
        EmptyChoiceSet: if no door can be revealed, which means the round loop
          ran past its end.
    """
    revealable = doors.revealable()
    if not revealable:
        raise EmptyChoiceSet(f"No door left to reveal in {doors!r}.")

    door = int(rng.choice(revealable))
    doors.close(door)
    return door


class Game:
    """Owns one :class:`DoorSet` and one strategy for the duration of a trial."""

    def __init__(
        self,
        door_count: int,
        strategy: Strategy,
        rng: np.random.Generator | None = None,
        *,
        initial_pick: int | None = None,
        winning_door: int | None = None,
    ) -> None:
        """Sets up a new game with all doors open.

        Args:
            door_count (int): Number of doors, at least 3.
            strategy (Strategy): Policy consulted after every reveal.
            rng (np.random.Generator | None, optional): Randomness for the prize, the
              initial pick, the reveals and the strategy. Defaults to None (fresh generator).
            initial_pick (int | None, optional): Forces the player's first door. Defaults to None.
            winning_door (int | None, optional): Forces the prize door. Defaults to None.

        Raises:
            InvalidDoorCount: if ``door_count < 3``.
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.strategy = strategy

        # The pick is drawn before the prize, both from the same generator
        if initial_pick is None and door_count >= 3:
            initial_pick = int(self.rng.integers(door_count))

        self.doors = DoorSet(door_count, initial_pick, self.rng, winning_door=winning_door)
        self.phase = Phase.ACTIVE
        self.revealed: list[int] = []
        self.switches: int = 0

    @property
    def rounds_played(self) -> int:
        return len(self.revealed)

    def advance_round(self) -> bool:
        """Plays one reveal-and-offer-switch round.

        Returns:
            bool: ``True`` while more than two doors remain open, ``False`` once the game is over.

        Raises:
            RuntimeError: if the game is already over.
        """
        if self.phase is Phase.FINAL:
            raise RuntimeError("Game is already over! Create a new one to play again.")

        self.revealed.append(reveal_random_door(self.doors, self.rng))

        new_pick = self.strategy.decide(self.doors.snapshot(), self.rng)
        if new_pick is not None:
            assert new_pick != self.doors.player_pick, "strategy switched to the door it already holds"
            self.doors.switch_to(new_pick)
            self.switches += 1

        assert self.doors.is_open(self.doors.winning_door)
        assert self.doors.is_open(self.doors.player_pick)

        if self.doors.open_count > 2:
            return True

        self.phase = Phase.FINAL
        return False

    def has_won(self) -> bool:
        """Player holds the prize door?"""
        assert self.doors.is_open(self.doors.winning_door), "the winning door was revealed"
        return self.doors.player_pick == self.doors.winning_door

    def play(self) -> bool:
        """Runs every remaining round and reports the outcome."""
        while self.advance_round():
            pass

        won = self.has_won()
        logger.trace(
            "{strategy} finished after {rounds} rounds ({switches} switches): {outcome}",
            strategy=self.strategy.name,
            rounds=self.rounds_played,
            switches=self.switches,
            outcome="won" if won else "lost",
        )
        return won


def run_one_trial(
    door_count: int,
    strategy: Strategy,
    rng: np.random.Generator | None = None,
) -> bool:
    """Simulates a full game with ``door_count`` doors and returns whether the player won."""
    return Game(door_count, strategy, rng).play()
