import logging
import math
from dataclasses import dataclass, fields, replace as _replace

from pity_sim.errors import ConfigError

logger = logging.getLogger(__name__)

RATE_FIELDS = ('base_rate_rare', 'base_rate_common', 'pity_increment_rare')


@dataclass(frozen=True)
class SimulationConfig:
    """Pity scheme and simulation budget.

    Rates are probabilities in [0, 1]. Counters are pull counts.
    A target_guarantee of 0 turns the session guarantee off.
    """
    base_rate_rare: float = 0.008
    base_rate_common: float = 0.08
    pity_start_rare: int = 65          # escalation starts on the draw after this many misses
    pity_increment_rare: float = 0.05
    hard_pity_rare: int = 80
    hard_pity_common: int = 10
    target_guarantee: int = 120
    target_total_pulls: int = 500000

    @classmethod
    def from_percent(cls, base_rate_rare=0.8, base_rate_common=8.0, pity_increment_rare=5.0, **kwargs):
        """Build a config from rates given in percent, the way the input form takes them."""
        return cls(
            base_rate_rare=base_rate_rare / 100,
            base_rate_common=base_rate_common / 100,
            pity_increment_rare=pity_increment_rare / 100,
            **kwargs
        )

    def replace(self, **changes):
        return _replace(self, **changes)

    def as_dict(self):
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def validate(self):
        """Caller-side check: every field finite and non-negative, rates at most 1.

        The simulator itself never calls this.
        """
        for name, value in self.as_dict().items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")
            if math.isnan(value) or value < 0:
                raise ConfigError(f"{name} must be a non-negative number, got {value!r}")
            if math.isinf(value) and name != 'hard_pity_rare':
                raise ConfigError(f"{name} must be finite, got {value!r}")

        for name in RATE_FIELDS:
            if name != 'pity_increment_rare' and getattr(self, name) > 1:
                raise ConfigError(f"{name} is a probability and must be <= 1, got {getattr(self, name)!r}")

        if self.hard_pity_common < 1:
            raise ConfigError(f"hard_pity_common must be >= 1, got {self.hard_pity_common!r}")
        if self.target_total_pulls <= 0:
            raise ConfigError(f"target_total_pulls must be > 0, got {self.target_total_pulls!r}")

        # Nothing can end a session: no guarantee and the rare chance never leaves 0
        if (self.target_guarantee == 0 and math.isinf(self.hard_pity_rare)
                and self.base_rate_rare == 0 and self.pity_increment_rare == 0):
            raise ConfigError("sessions can never end: rare rate stays at 0 with no hard pity and no guarantee")

        if self.hard_pity_rare <= self.pity_start_rare:
            logger.warning(
                "hard_pity_rare (%s) <= pity_start_rare (%s): escalation never applies",
                self.hard_pity_rare, self.pity_start_rare
            )
        return self


DEFAULT_CONFIG = SimulationConfig()
