"""
A multi-round Monty Hall environment in Gymnasium: the host reveals one door per round and the
player may switch after every reveal, until two doors remain.
"""

from montyhall.core.doors import DoorSet, DoorSnapshot
from montyhall.core.game import reveal_random_door
from montyhall.core.state import DoorState, Phase
from montyhall.core.strategy import Strategy

from typing import Optional, Literal

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from gymnasium.envs.registration import register

class MontyHallRoundsEnv(gym.Env):
    """The multi-round Monty Hall game behind Gymnasium's API."""

    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 4,
    }

    _SYMBOLS = {
        DoorState.CLOSED: "[ ]",
        DoorState.GOAT: "[G]",
        DoorState.CHOSEN: "[*]",
        DoorState.CAR: "[C]",
    }

    def __init__(
        self,
        *,
        n_doors: int = 3,
        render_mode: Literal["ansi"] | None = None,
        seed: int | None = None,
    ) -> None:
        """Initialises the environment.

        Args:
            n_doors (int, optional): Number of total doors in the environment. Defaults to 3.
            render_mode (Literal or None): rendering mode of the environment. Defaults to None (no rendering).
            seed (int or None): controls the random number generation. Defaults to None (random seed).

        Raises:
            ValueError: for less than 3 doors or an invalid render mode
        """
        if n_doors < 3:
            raise ValueError("Monty Hall requires at least 3 doors.")
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode '{render_mode}'.")

        self.n_doors = int(n_doors)
        self.render_mode = render_mode

        # Observation: one DoorState per door; Action: the door to hold
        self.observation_space = spaces.MultiDiscrete(
            np.full(self.n_doors, len(DoorState), dtype=np.int64)
        )
        self.action_space = spaces.Discrete(self.n_doors)

        self.reset(seed=seed)

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Gymnasium API                                    #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def reset(self, *, seed: Optional[int] = None, options=None):
        """Starts a new episode, waiting for the player's first pick.

        Returns:
            Pair: 1D state vector of DoorStates, and info (dict) from _get_info()
        """
        super().reset(seed=seed)
        self._doors: DoorSet | None = None
        self._rounds = 0
        self._won: bool | None = None
        self._phase = Phase.AWAITING_FIRST_PICK
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        """Takes the player's door choice.

        The first action is the initial pick; every later action is the door held after the
        latest reveal (repeating the current pick means staying).

        Raises:
            RuntimeError: if an action is performed on an already completed episode.
            ValueError: if the action is not an open door.

        Returns:
            observation (1d Numpy): next observation of door states
            reward (float): 1.0 for finishing on the prize door, else 0.0
            terminated (bool): whether the episode is terminated
            truncated (bool): always False, the game ends by itself after n_doors - 1 steps
            info (dict): auxiliary information from _get_info()
        """
        if self._phase is Phase.FINAL:
            raise RuntimeError(
                "Episode is already completed! Call reset() to start a new one."
            )
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}.")
        action = int(action)

        reward = 0.0
        terminated = False

        if self._phase is Phase.AWAITING_FIRST_PICK:
            self._doors = DoorSet(self.n_doors, action, self.np_random)
            self._phase = Phase.ACTIVE
            self._reveal()
        else:
            if not self._doors.is_open(action):
                raise ValueError(f"Door {action} was already revealed.")
            if action != self._doors.player_pick:
                self._doors.switch_to(action)

            if self._doors.open_count > 2:
                self._reveal()
            else:
                self._won = self._doors.player_pick == self._doors.winning_door
                self._phase = Phase.FINAL
                terminated = True
                reward = 1.0 if self._won else 0.0

        return self._get_obs(), reward, terminated, False, self._get_info()

    def render(self):
        """Returns the doors as one line of text, e.g. ``[G] [*] [ ]``."""
        if self.render_mode is None:
            return None
        return " ".join(self._SYMBOLS[DoorState(s)] for s in self._get_obs())

    def door_snapshot(self) -> DoorSnapshot:
        """What a player sees of the doors right now (prize door excluded)."""
        if self._doors is None:
            raise RuntimeError("No doors yet, make the first pick with step().")
        return self._doors.snapshot()

    # ──────────────────────────────────────────────────────────────────────────────── #
    #                                 Private helpers                                  #
    # ──────────────────────────────────────────────────────────────────────────────── #
    def _reveal(self) -> None:
        reveal_random_door(self._doors, self.np_random)
        self._rounds += 1

    def _get_obs(self) -> np.ndarray:
        state = np.full(self.n_doors, DoorState.CLOSED, dtype=np.int64)
        if self._doors is None:
            return state

        state[~self._doors.open_mask] = DoorState.GOAT
        state[self._doors.player_pick] = DoorState.CHOSEN
        if self._phase is Phase.FINAL:
            state[self._doors.winning_door] = DoorState.CAR
        return state

    def _get_info(self):
        """Provides what the player is allowed to know about the running episode.

        Returns:
            dict: consisting of
              - the legal actions as a binary mask,
              - the chosen door,
              - the number of reveals so far,
              - the progress phase,
              - and the prize door, once the episode is over.
        """
        if self._doors is None:
            mask = np.ones(self.n_doors, dtype=np.int8)
        else:
            mask = self._doors.open_mask.astype(np.int8)

        info = {
            "action_mask": mask,
            "chosen_door": None if self._doors is None else self._doors.player_pick,
            "rounds_played": self._rounds,
            "phase": self._phase.name,
        }
        if self._phase is Phase.FINAL:
            info["car_door"] = self._doors.winning_door
        return info


def rollout(env: MontyHallRoundsEnv, strategy: Strategy, seed: int | None = None) -> float:
    """Plays one episode where every decision comes from ``strategy``.

    Args:
        env (MontyHallRoundsEnv): The environment, unwrapped.
        strategy (Strategy): Policy consulted after each reveal.
        seed (int | None, optional): Seed passed to ``env.reset``. Defaults to None.

    Returns:
        float: the final reward, 1.0 on a win.
    """
    env.reset(seed=seed)
    first_pick = int(env.np_random.integers(env.n_doors))
    _, reward, terminated, _, info = env.step(first_pick)

    while not terminated:
        new_pick = strategy.decide(env.door_snapshot(), env.np_random)
        action = info["chosen_door"] if new_pick is None else new_pick
        _, reward, terminated, _, info = env.step(action)

    return reward


# Register the environment to allow usage with `gym.make``
register(
    id="MontyHallRounds-v0",
    entry_point="montyhall.environments.env:MontyHallRoundsEnv",
)
