"""strategy.py

Player strategies: after every reveal the player is asked whether to keep the
current door or move to another open one.

Example:
    >>> import numpy as np
    >>> from montyhall.core.strategy import get_strategy
    >>> from montyhall.core.game import run_one_trial
    >>> run_one_trial(3, get_strategy("ChangeLastRound"), np.random.default_rng(0))
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from .doors import DoorSnapshot, EmptyChoiceSet


class Strategy(Protocol):
    """A stateless policy: ``None`` keeps the pick, a door id switches to it."""

    name: str

    def decide(self, snapshot: DoorSnapshot, rng: np.random.Generator) -> int | None:
        ...


@dataclass(frozen=True)
class AlwaysStay:
    """Pick once, stay with it."""

    name: str = "AlwaysStay"

    def decide(self, snapshot: DoorSnapshot, rng: np.random.Generator) -> int | None:
        return None


@dataclass(frozen=True)
class ChangeLastRound:
    """Holds the first pick and moves to the remaining door once only two are left."""

    name: str = "ChangeLastRound"

    def decide(self, snapshot: DoorSnapshot, rng: np.random.Generator) -> int | None:
        if snapshot.open_count != 2:
            return None

        others = snapshot.candidates()
        assert len(others) == 1, f"expected exactly one other open door, found {others}"
        return others[0]


@dataclass(frozen=True)
class ChangeAllTheTime:
    """Impatient player: moves to a random other open door after every reveal."""

    name: str = "ChangeAllTheTime"

    def decide(self, snapshot: DoorSnapshot, rng: np.random.Generator) -> int | None:
        others = snapshot.candidates()
        if not others:
            raise EmptyChoiceSet("No other open door to switch to.")
        return int(rng.choice(others))


STRATEGIES: dict[str, Strategy] = {
    strategy.name: strategy
    for strategy in (AlwaysStay(), ChangeLastRound(), ChangeAllTheTime())
}


def get_strategy(name: str) -> Strategy:
    """Looks up a registered strategy by name.

    Raises:
        KeyError: if no strategy is registered under ``name``.
    """
    try:
        return STRATEGIES[name]
    except KeyError:
        raise KeyError(f"Unknown strategy {name!r}, expected one of {sorted(STRATEGIES)}.") from None
