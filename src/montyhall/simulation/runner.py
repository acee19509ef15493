"""runner.py

Monte Carlo driver: plays many independent games per strategy and reports the
share of games won.

Example:
    >>> from montyhall.simulation.runner import SimulationConfig, compare_strategies
    >>> results = compare_strategies(SimulationConfig(trials=10_000, door_count=3))
"""
from __future__ import annotations

import multiprocessing as mp
import time
from dataclasses import dataclass

import numpy as np
from loguru import logger

from montyhall.core.game import run_one_trial
from montyhall.core.strategy import STRATEGIES, Strategy, get_strategy
from montyhall.simulation.analysis import expected_win_rate


@dataclass(slots=True)
class SimulationConfig:
    """Settings for a batch of Monte Carlo trials.

    Attributes:
        trials (int): Games played per strategy.
        door_count (int): Doors per game, at least 3.
        seed (int | None): Root seed. ``None`` draws fresh entropy on every run.
        workers (int): Processes sharing the trials. ``1`` plays everything in-process.
        batch_size (int): Games per independently seeded batch. Results for a
            given seed do not depend on ``workers``.
        strategies (tuple[str, ...]): Names of the strategies to compare.
        log_interval (int): Log progress every this many batches, ``0`` disables it.
    """
    trials: int = 100_000
    door_count: int = 10
    seed: int | None = 42
    workers: int = 1
    batch_size: int = 10_000
    strategies: tuple[str, ...] = tuple(STRATEGIES)
    log_interval: int = 0

    def __post_init__(self) -> None:
        if self.trials < 1:
            raise ValueError("trials must be a positive number of games.")
        if self.door_count < 3:
            raise ValueError("Monty Hall requires at least 3 doors.")
        if self.workers < 1:
            raise ValueError("workers must be at least 1.")
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1.")
        if self.log_interval < 0:
            raise ValueError("log_interval cannot be negative.")
        for name in self.strategies:
            get_strategy(name)


@dataclass(frozen=True, slots=True)
class TrialResult:
    strategy: str
    door_count: int
    trials: int
    wins: int

    @property
    def win_rate(self) -> float:
        return self.wins / self.trials

    @property
    def percentage(self) -> float:
        return self.win_rate * 100.0


def _play_batch(
    door_count: int,
    strategy: Strategy,
    games: int,
    seed: np.random.SeedSequence,
) -> int:
    """Plays ``games`` trials on one generator and returns the number won."""
    rng = np.random.default_rng(seed)
    return sum(run_one_trial(door_count, strategy, rng) for _ in range(games))


def _batches(config: SimulationConfig) -> list[int]:
    full, rest = divmod(config.trials, config.batch_size)
    return [config.batch_size] * full + ([rest] if rest else [])


def run_trials(strategy: Strategy | str, config: SimulationConfig) -> TrialResult:
    """Plays ``config.trials`` games with one strategy.

    Every batch of games draws from its own child of the root ``SeedSequence``,
    so batches can run in separate processes without sharing a generator.

    Args:
        strategy (Strategy | str): The strategy, or its registered name.
        config (SimulationConfig): Trial settings.

    Returns:
        TrialResult: wins over trials for this strategy.
    """
    if isinstance(strategy, str):
        strategy = get_strategy(strategy)
    log = logger.bind(component="TrialRunner", strategy=strategy.name)

    sizes = _batches(config)
    seeds = np.random.SeedSequence(config.seed).spawn(len(sizes))
    jobs = [(config.door_count, strategy, size, seed) for size, seed in zip(sizes, seeds)]

    start_time = time.perf_counter()
    if config.workers > 1:
        with mp.Pool(processes=config.workers) as pool:
            wins = sum(pool.starmap(_play_batch, jobs))
    else:
        wins = 0
        for batch_idx, job in enumerate(jobs, 1):
            wins += _play_batch(*job)
            if config.log_interval and batch_idx % config.log_interval == 0:
                log.info(
                    "Batch {idx:>4d}/{total} | wins so far: {wins}",
                    idx=batch_idx,
                    total=len(jobs),
                    wins=wins,
                )

    log.debug(
        "{trials} games in {t:.2f}s",
        trials=config.trials,
        t=time.perf_counter() - start_time,
    )
    return TrialResult(strategy.name, config.door_count, config.trials, wins)


def compare_strategies(config: SimulationConfig) -> list[TrialResult]:
    """Runs every configured strategy and logs one line per strategy."""
    log = logger.bind(component="TrialRunner")
    results: list[TrialResult] = []

    for name in config.strategies:
        result = run_trials(name, config)
        expected = float(expected_win_rate(name, config.door_count)) * 100.0
        log.success(
            "==> {name:<16} {pct:6.2f}% (expected {exp:6.2f}%)",
            name=name,
            pct=result.percentage,
            exp=expected,
        )
        results.append(result)

    return results


def main() -> None:
    compare_strategies(SimulationConfig())


if __name__ == "__main__":
    main()
