from unittest import mock

import pytest

from hexcells_solver.env import Env, SolverTimeout


def test_zero_budget_times_out_immediately():
    env = Env(0)
    with pytest.raises(SolverTimeout):
        env.check_timeout()


def test_timeout_message():
    assert str(SolverTimeout()) == "Timeout"


def test_budget_boundary_and_reset():
    clock = iter([100.0, 104.0, 105.0, 200.0, 204.0, 205.5])
    with mock.patch("hexcells_solver.env.monotonic", side_effect=lambda: next(clock)):
        env = Env(5)
        assert env.check_timeout() is None
        with pytest.raises(SolverTimeout):
            env.check_timeout()
        env.reset_timer()
        assert env.check_timeout() is None
        with pytest.raises(SolverTimeout):
            env.check_timeout()


def test_large_budget_does_not_time_out():
    env = Env(3600 * 24 * 30)
    assert env.check_timeout() is None
    assert env.max_duration == 3600 * 24 * 30