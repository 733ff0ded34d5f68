import os

import matplotlib.pyplot as plt
import seaborn as sns

GUARANTEE_COLOR = '#ef4444'
SOFT_PITY_COLOR = '#818cf8'
BASE_COLOR = '#cbd5e1'
MEAN_COLOR = '#3b82f6'
CDF_COLOR = '#10b981'
REFERENCE_COLOR = '#f59e0b'


def format_summary(result, config):
    stats = result.stats
    if stats.empty:
        return "No sessions were simulated (pull budget too small)."

    budget = result.percentiles((50, 90))
    lines = [
        f"Sessions (targets obtained): {stats.total_sessions:,}",
        f"Pulls consumed:              {stats.total_pulls / 10000:.1f} x 10k",
        f"Average pulls:               {stats.mean_pulls:.2f}",
        f"Median pulls:                {stats.median_pulls}",
        f"Max pulls:                   {stats.max_pulls}",
    ]
    if config.target_guarantee > 0:
        lines.append(
            f"Hit the {config.target_guarantee}-pull guarantee: {stats.guarantee_rate * 100:.2f}%"
            f" ({stats.guarantee_triggered:,} sessions)"
        )
    lines.append(f"Pulls for 50% chance:        {budget[50]}")
    lines.append(f"Pulls for 90% chance:        {budget[90]}")
    return "\n".join(lines)


def _bar_colors(distribution, config):
    colors = []
    for pulls in distribution['pulls']:
        if config.target_guarantee > 0 and pulls == config.target_guarantee:
            colors.append(GUARANTEE_COLOR)
        elif pulls > config.pity_start_rare:
            colors.append(SOFT_PITY_COLOR)
        else:
            colors.append(BASE_COLOR)
    return colors


def plot_distribution(result, config, ax=None):
    sns.set_style("whitegrid")
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))

    dist = result.distribution
    ax.bar(dist['pulls'], dist['count'], width=1.0, color=_bar_colors(dist, config))

    if config.target_guarantee > 0:
        ax.axvline(x=config.target_guarantee, color=GUARANTEE_COLOR, linestyle='--',
                   label=f'Guarantee ({config.target_guarantee})')
    if not result.stats.empty:
        ax.axvline(x=result.stats.mean_pulls, color=MEAN_COLOR, linestyle='--',
                   label=f'Average: {result.stats.mean_pulls:.1f}')

    ax.set_title('Distribution of Pulls Required for the Target')
    ax.set_xlabel('Number of Pulls')
    ax.set_ylabel('Sessions')
    ax.legend()
    ax.grid(True, alpha=0.3)
    return ax


def plot_cumulative(result, ax=None):
    sns.set_style("whitegrid")
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))

    dist = result.distribution
    ax.plot(dist['pulls'], dist['cumulative_percent'], color=CDF_COLOR, linewidth=2, label='Cumulative')
    ax.fill_between(dist['pulls'], dist['cumulative_percent'], color=CDF_COLOR, alpha=0.3)
    ax.axhline(y=50, color=REFERENCE_COLOR, linestyle=':', label='50% Chance')
    ax.axhline(y=90, color=REFERENCE_COLOR, linestyle='--', label='90% Chance')

    ax.set_ylim(0, 100)
    ax.set_title('Cumulative Probability of Obtaining the Target')
    ax.set_xlabel('Pulls Spent')
    ax.set_ylabel('Cumulative Probability (%)')
    ax.legend()
    ax.grid(True, alpha=0.3)
    return ax


def save_charts(result, config, out_dir, show=False):
    sns.set_style("whitegrid")
    os.makedirs(out_dir, exist_ok=True)
    paths = []

    for name, draw in (
        ('distribution.png', lambda ax: plot_distribution(result, config, ax=ax)),
        ('cdf.png', lambda ax: plot_cumulative(result, ax=ax)),
    ):
        fig, ax = plt.subplots(figsize=(12, 6))
        draw(ax)
        path = os.path.join(out_dir, name)
        fig.savefig(path)
        paths.append(path)
        if show:
            plt.show()
        plt.close(fig)

    return paths
