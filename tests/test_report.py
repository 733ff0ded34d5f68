import os

import matplotlib.pyplot as plt

from pity_sim.aggregator import run_distribution
from pity_sim.config import DEFAULT_CONFIG
from pity_sim.report import format_summary, plot_cumulative, plot_distribution, save_charts
from pity_sim.simulator import SessionResult


def scripted_result(scripted, config):
    sim = scripted([SessionResult(60, False), SessionResult(70, False), SessionResult(120, True)])
    return run_distribution(config, simulator=sim)


def test_summary_text(scripted):
    config = DEFAULT_CONFIG.replace(target_total_pulls=250)
    text = format_summary(scripted_result(scripted, config), config)
    assert "Sessions (targets obtained): 3" in text
    assert "Average pulls:               83.33" in text
    assert "Median pulls:                70" in text
    assert "Hit the 120-pull guarantee: 33.33% (1 sessions)" in text
    assert "Pulls for 50% chance:        70" in text
    assert "Pulls for 90% chance:        120" in text


def test_summary_without_guarantee_omits_rate(scripted):
    config = DEFAULT_CONFIG.replace(target_total_pulls=250, target_guarantee=0)
    text = format_summary(scripted_result(scripted, config), config)
    assert "guarantee" not in text


def test_summary_empty_run():
    config = DEFAULT_CONFIG.replace(target_total_pulls=0)
    assert "No sessions" in format_summary(run_distribution(config), config)


def test_plots_draw_every_listed_pull(scripted):
    config = DEFAULT_CONFIG.replace(target_total_pulls=250)
    result = scripted_result(scripted, config)

    ax = plot_distribution(result, config)
    assert len(ax.patches) == len(result.distribution)
    plt.close(ax.figure)

    ax = plot_cumulative(result)
    assert ax.get_ylim() == (0, 100)
    plt.close(ax.figure)


def test_save_charts(scripted, tmp_path):
    config = DEFAULT_CONFIG.replace(target_total_pulls=250)
    paths = save_charts(scripted_result(scripted, config), config, str(tmp_path / 'charts'))
    assert [os.path.basename(p) for p in paths] == ['distribution.png', 'cdf.png']
    for path in paths:
        assert (tmp_path / 'charts' / os.path.basename(path)).stat().st_size > 0


def test_save_charts_styles_axes_before_drawing(scripted, tmp_path, monkeypatch):
    import seaborn as sns
    from matplotlib.colors import to_rgba

    sns.set_style("ticks")
    figures = []
    monkeypatch.setattr(plt, 'close', figures.append)

    config = DEFAULT_CONFIG.replace(target_total_pulls=250)
    save_charts(scripted_result(scripted, config), config, str(tmp_path))

    edge_colors = [fig.axes[0].spines['left'].get_edgecolor() for fig in figures]
    monkeypatch.undo()
    for fig in figures:
        plt.close(fig)

    assert edge_colors == [to_rgba('.8')] * 2
