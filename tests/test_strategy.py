import numpy as np
import pytest

from montyhall.core.doors import DoorSnapshot, EmptyChoiceSet
from montyhall.core.strategy import (
    STRATEGIES,
    AlwaysStay,
    ChangeAllTheTime,
    ChangeLastRound,
    get_strategy,
)


def make_snapshot(open_mask, pick):
    return DoorSnapshot(
        door_count=len(open_mask),
        open_mask=tuple(open_mask),
        open_count=sum(open_mask),
        player_pick=pick,
    )


def test_always_stay_never_switches(rng):
    assert AlwaysStay().decide(make_snapshot([True, True, True, True], 0), rng) is None
    assert AlwaysStay().decide(make_snapshot([True, False, True], 2), rng) is None


def test_change_last_round_waits_for_two_doors(rng):
    strategy = ChangeLastRound()
    assert strategy.decide(make_snapshot([True, True, False, True], 1), rng) is None


def test_change_last_round_moves_to_the_remaining_door(rng):
    strategy = ChangeLastRound()
    assert strategy.decide(make_snapshot([False, True, False, True], 1), rng) == 3
    assert strategy.decide(make_snapshot([True, False, True], 2), rng) == 0


def test_change_all_the_time_picks_another_open_door():
    rng = np.random.default_rng(7)
    strategy = ChangeAllTheTime()
    snapshot = make_snapshot([True, False, True, True, True], 2)

    picks = {strategy.decide(snapshot, rng) for _ in range(200)}
    assert picks == {0, 3, 4}


def test_change_all_the_time_without_candidates(rng):
    snapshot = DoorSnapshot(door_count=3, open_mask=(False, True, False), open_count=1, player_pick=1)
    with pytest.raises(EmptyChoiceSet):
        ChangeAllTheTime().decide(snapshot, rng)


def test_strategies_are_stateless():
    assert ChangeAllTheTime() == ChangeAllTheTime()
    with pytest.raises(AttributeError):
        AlwaysStay().name = "Other"


def test_registry_lookup():
    assert set(STRATEGIES) == {"AlwaysStay", "ChangeLastRound", "ChangeAllTheTime"}
    assert isinstance(get_strategy("ChangeLastRound"), ChangeLastRound)


def test_registry_unknown_name():
    with pytest.raises(KeyError, match="AlwaysSwitch"):
        get_strategy("AlwaysSwitch")
