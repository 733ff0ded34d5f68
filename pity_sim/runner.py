import logging
import threading
from concurrent.futures import ThreadPoolExecutor

from pity_sim.aggregator import run_distribution
from pity_sim.errors import SimulationBusyError

logger = logging.getLogger(__name__)


class SimulationRunner:
    """Run trigger for a display layer.

    Only one run may be in flight at a time. submit() hands the run to a worker
    thread so the caller can show its busy indicator before the work starts.
    Runs cannot be cancelled.
    """

    def __init__(self, rng=None):
        self.rng = rng
        self._lock = threading.Lock()
        self._busy = False
        self._executor = None

    @property
    def busy(self):
        return self._busy

    def _acquire(self):
        with self._lock:
            if self._busy:
                raise SimulationBusyError("a simulation is already running")
            self._busy = True

    def _release(self):
        with self._lock:
            self._busy = False

    def _run_and_release(self, config):
        try:
            return run_distribution(config, rng=self.rng)
        finally:
            self._release()

    def run(self, config):
        self._acquire()
        return self._run_and_release(config)

    def submit(self, config):
        self._acquire()
        logger.debug("Submitting run with budget %s pulls", config.target_total_pulls)
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='pity-sim')
        try:
            return self._executor.submit(self._run_and_release, config)
        except RuntimeError:
            self._release()
            raise

    def shutdown(self, wait=True):
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None
