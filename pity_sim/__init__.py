from pity_sim.config import DEFAULT_CONFIG, SimulationConfig
from pity_sim.simulator import PitySimulator, SessionResult, simulate_session
from pity_sim.aggregator import DistributionResult, SummaryStats, run_distribution

__all__ = [
    'DEFAULT_CONFIG',
    'SimulationConfig',
    'PitySimulator',
    'SessionResult',
    'simulate_session',
    'DistributionResult',
    'SummaryStats',
    'run_distribution',
]
