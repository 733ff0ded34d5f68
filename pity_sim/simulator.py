from dataclasses import dataclass

import numpy as np

TARGET_RATIO = 0.5  # chance that a rare-tier hit is the target


@dataclass(frozen=True)
class SessionResult:
    pulls: int
    triggered_guarantee: bool


@dataclass
class SessionState:
    pulls: int = 0
    rare_pity: int = 0      # pulls since last rare-tier hit
    common_pity: int = 0    # pulls since last common-tier hit
    got_target: bool = False


class PitySimulator:
    """Runs single sessions: pull until the target drops or the guarantee fires.

    rng is any zero-argument callable returning a uniform float in [0, 1).
    """

    def __init__(self, config, rng=None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng().random

    def rare_rate(self, rare_pity):
        cfg = self.config
        rate = cfg.base_rate_rare

        # Soft pity
        if rare_pity > cfg.pity_start_rare:
            rate += (rare_pity - cfg.pity_start_rare) * cfg.pity_increment_rare
        rate = min(1.0, rate)

        # Hard pity
        if rare_pity >= cfg.hard_pity_rare:
            rate = 1.0
        return rate

    def common_rate(self, common_pity):
        if common_pity >= self.config.hard_pity_common:
            return 1.0
        return self.config.base_rate_common

    def simulate_session(self):
        cfg = self.config
        state = SessionState()

        while not state.got_target:
            state.pulls += 1
            state.rare_pity += 1
            state.common_pity += 1

            # Session guarantee, checked before any roll
            if cfg.target_guarantee > 0 and state.pulls == cfg.target_guarantee:
                return SessionResult(pulls=state.pulls, triggered_guarantee=True)

            rare_rate = self.rare_rate(state.rare_pity)
            roll = self.rng()

            # Check for rare tier
            if roll < rare_rate:
                state.rare_pity = 0
                if self.rng() < TARGET_RATIO:
                    state.got_target = True
                # Off-target rare hit: keep pulling, no common check this pull
                continue

            # Common tier takes the slice right above the rare one
            if roll < rare_rate + self.common_rate(state.common_pity):
                state.common_pity = 0

        return SessionResult(pulls=state.pulls, triggered_guarantee=False)

    def sample(self, n):
        return np.array([self.simulate_session().pulls for _ in range(n)], dtype=np.int64)


def simulate_session(config, rng=None):
    return PitySimulator(config, rng=rng).simulate_session()
