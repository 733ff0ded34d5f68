import logging
import time
from dataclasses import dataclass

import numpy as np
import pandas as pd

from pity_sim.simulator import PitySimulator

logger = logging.getLogger(__name__)

DISTRIBUTION_COLUMNS = ['pulls', 'count', 'percent', 'cumulative_percent']
FILLER_STEP = 10  # always keep every 10th pull count so charts stay smooth


@dataclass(frozen=True)
class SummaryStats:
    total_sessions: int
    total_pulls: int
    mean_pulls: float
    median_pulls: int
    guarantee_triggered: int
    guarantee_rate: float
    max_pulls: int

    @property
    def empty(self):
        return self.total_sessions == 0


@dataclass(frozen=True)
class DistributionResult:
    """Output of one aggregation run.

    distribution is the sparse record handed to the display layer,
    counts is the full frequency mapping (pull count -> sessions) it was built from.
    """
    distribution: pd.DataFrame
    counts: pd.Series
    stats: SummaryStats

    def pulls_for_probability(self, percent):
        """Smallest listed pull count whose cumulative percent reaches `percent`."""
        reached = self.distribution[self.distribution['cumulative_percent'] >= percent]
        if reached.empty:
            return None
        return int(reached['pulls'].iloc[0])

    def percentiles(self, levels=(50, 90)):
        return {level: self.pulls_for_probability(level) for level in levels}


def median_pulls(samples):
    """Sample median taking the element at index n // 2 of the sorted samples."""
    if len(samples) == 0:
        return 0
    ordered = np.sort(np.asarray(samples))
    return int(ordered[len(ordered) // 2])


def build_distribution(counts, session_count, target_guarantee=0):
    if session_count == 0:
        return pd.DataFrame(columns=DISTRIBUTION_COLUMNS)

    max_pull = max(counts)
    chart_max = max(max_pull, target_guarantee)

    rows = []
    running = 0
    for pulls in range(1, chart_max + 1):
        count = counts.get(pulls, 0)
        running += count

        if count > 0 or pulls <= target_guarantee or pulls % FILLER_STEP == 0:
            rows.append({
                'pulls': pulls,
                'count': count,
                'percent': round(count / session_count * 100, 3),
                'cumulative_percent': round(running / session_count * 100, 2),
            })

    return pd.DataFrame(rows, columns=DISTRIBUTION_COLUMNS)


def run_distribution(config, rng=None, simulator=None):
    """Simulate sessions until config.target_total_pulls pulls are spent and summarise them.

    The last session may overshoot the budget; it is kept as is.
    """
    if simulator is None:
        simulator = PitySimulator(config, rng=rng)

    logger.info("Starting simulation, budget %s pulls", config.target_total_pulls)
    started = time.perf_counter()

    total_pulls = 0
    counts = {}
    all_pulls = []
    triggered = 0

    while total_pulls < config.target_total_pulls:
        result = simulator.simulate_session()
        total_pulls += result.pulls
        counts[result.pulls] = counts.get(result.pulls, 0) + 1
        all_pulls.append(result.pulls)
        if result.triggered_guarantee:
            triggered += 1

    session_count = len(all_pulls)
    distribution = build_distribution(counts, session_count, config.target_guarantee)
    count_series = pd.Series(counts, dtype='int64', name='count').sort_index()
    count_series.index.name = 'pulls'

    if session_count == 0:
        logger.warning("Budget %s ran no sessions, returning an empty result", config.target_total_pulls)
        stats = SummaryStats(
            total_sessions=0,
            total_pulls=0,
            mean_pulls=0.0,
            median_pulls=0,
            guarantee_triggered=0,
            guarantee_rate=0.0,
            max_pulls=0,
        )
    else:
        stats = SummaryStats(
            total_sessions=session_count,
            total_pulls=total_pulls,
            mean_pulls=total_pulls / session_count,
            median_pulls=median_pulls(all_pulls),
            guarantee_triggered=triggered,
            guarantee_rate=triggered / session_count,
            max_pulls=max(counts),
        )

    logger.info(
        "Simulation done: %d sessions, %d pulls in %.2fs",
        stats.total_sessions, stats.total_pulls, time.perf_counter() - started
    )
    return DistributionResult(distribution=distribution, counts=count_series, stats=stats)
