from fractions import Fraction

import pytest

from montyhall.simulation.analysis import expected_win_rate, has_converged


def test_classic_three_doors():
    assert expected_win_rate("AlwaysStay", 3) == Fraction(1, 3)
    assert expected_win_rate("ChangeLastRound", 3) == Fraction(2, 3)
    assert expected_win_rate("ChangeAllTheTime", 3) == Fraction(2, 3)


def test_more_doors():
    assert expected_win_rate("AlwaysStay", 10) == Fraction(1, 10)
    assert expected_win_rate("ChangeLastRound", 10) == Fraction(9, 10)
    # 1/4 -> (3/4)/2 = 3/8 -> (5/8)/1
    assert expected_win_rate("ChangeAllTheTime", 4) == Fraction(5, 8)


def test_switching_every_round_never_beats_switching_last():
    for door_count in range(3, 15):
        assert expected_win_rate("ChangeAllTheTime", door_count) <= expected_win_rate(
            "ChangeLastRound", door_count
        )


def test_rejects_bad_input():
    with pytest.raises(ValueError):
        expected_win_rate("AlwaysStay", 2)
    with pytest.raises(KeyError):
        expected_win_rate("Coin", 3)


def test_has_converged():
    assert has_converged(0.334, 1 / 3)
    assert not has_converged(0.36, 1 / 3)
    assert has_converged(0.36, 1 / 3, tolerance=0.05)
