import argparse
import logging
import sys

import numpy as np

from pity_sim.config import DEFAULT_CONFIG, SimulationConfig
from pity_sim.errors import PitySimError
from pity_sim.report import format_summary, save_charts
from pity_sim.runner import SimulationRunner

logger = logging.getLogger(__name__)


def pull_count(value):
    """Pull-count option: a whole number, or "inf" for no limit."""
    if value.strip().lower() in ("inf", "infinity"):
        return float("inf")
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number or 'inf', got {value!r}")


def build_parser():
    d = DEFAULT_CONFIG
    parser = argparse.ArgumentParser(
        prog='pity-sim',
        description="Monte Carlo estimate of how many pulls a pity banner takes to give the target"
    )
    rates = parser.add_argument_group('rates (percent)')
    rates.add_argument('--rare-rate', type=float, default=d.base_rate_rare * 100, help="rare-tier base rate in %%")
    rates.add_argument('--common-rate', type=float, default=d.base_rate_common * 100, help="common-tier base rate in %%")
    rates.add_argument('--pity-increment', type=float, default=d.pity_increment_rare * 100,
                       help="rare rate added per pull past the soft pity start, in %%")

    pity = parser.add_argument_group('pity')
    pity.add_argument('--pity-start', type=int, default=d.pity_start_rare)
    pity.add_argument('--hard-pity', type=pull_count, default=d.hard_pity_rare, help="'inf' for no rare hard pity")
    pity.add_argument('--common-hard-pity', type=int, default=d.hard_pity_common)
    pity.add_argument('--guarantee', type=int, default=d.target_guarantee, help="0 disables the session guarantee")

    run = parser.add_argument_group('run')
    run.add_argument('--total-pulls', type=int, default=d.target_total_pulls)
    run.add_argument('--seed', type=int, default=None)
    run.add_argument('--plot-dir', default=None, help="write distribution.png and cdf.png here")
    run.add_argument('--show', action='store_true', help="open the charts after saving them")
    run.add_argument('-v', '--verbose', action='store_true')
    return parser


def config_from_args(args):
    return SimulationConfig.from_percent(
        base_rate_rare=args.rare_rate,
        base_rate_common=args.common_rate,
        pity_increment_rare=args.pity_increment,
        pity_start_rare=args.pity_start,
        hard_pity_rare=args.hard_pity,
        hard_pity_common=args.common_hard_pity,
        target_guarantee=args.guarantee,
        target_total_pulls=args.total_pulls,
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    rng = None
    if args.seed is not None:
        rng = np.random.default_rng(args.seed).random

    runner = SimulationRunner(rng=rng)
    try:
        config = config_from_args(args).validate()
        result = runner.run(config)
    except PitySimError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print("\nResults:")
    print(format_summary(result, config))

    if args.plot_dir:
        for path in save_charts(result, config, args.plot_dir, show=args.show):
            logger.info("Saved %s", path)
    return 0


if __name__ == '__main__':
    sys.exit(main())
