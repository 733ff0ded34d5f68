import threading

import pytest

from pity_sim.config import DEFAULT_CONFIG
from pity_sim.errors import SimulationBusyError
from pity_sim.runner import SimulationRunner

QUICK_CONFIG = DEFAULT_CONFIG.replace(base_rate_rare=1.0, target_total_pulls=3)


def test_run_returns_result():
    runner = SimulationRunner(rng=lambda: 0.0)
    result = runner.run(QUICK_CONFIG)
    assert result.stats.total_sessions == 3
    assert not runner.busy


def test_second_submit_while_running_is_rejected():
    started = threading.Event()
    release = threading.Event()

    def blocking_rng():
        started.set()
        release.wait(5)
        return 0.0

    runner = SimulationRunner(rng=blocking_rng)
    try:
        future = runner.submit(QUICK_CONFIG)
        assert started.wait(5)
        assert runner.busy
        with pytest.raises(SimulationBusyError):
            runner.submit(QUICK_CONFIG)
        with pytest.raises(SimulationBusyError):
            runner.run(QUICK_CONFIG)

        release.set()
        assert future.result(timeout=5).stats.total_sessions == 3
        assert not runner.busy
    finally:
        release.set()
        runner.shutdown()


def test_busy_flag_cleared_after_failure():
    def broken_rng():
        raise RuntimeError("rng failed")

    runner = SimulationRunner(rng=broken_rng)
    with pytest.raises(RuntimeError, match="rng failed"):
        runner.run(QUICK_CONFIG)
    assert not runner.busy
