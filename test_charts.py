#!/usr/bin/env python3
"""
Test script for the chart techniques. Renders each chart off-screen and checks
the marks that were drawn.
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

# Add the current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from chartgallery.data.loaders import MissingColumnError, load_dataset, load_game_logs
from chartgallery.data.reshape import calendar_frame, played_games, points_per_game
from chartgallery.charts import (
    Annotation,
    annotate_extreme,
    calendar_matrix,
    category_order,
    density_curve,
    plot_annotated_line,
    plot_bean,
    plot_calendar_heatmap,
    plot_density,
    plot_dumbbell,
    plot_faceted,
    plot_lollipop,
    plot_ridgeline,
    plot_strip,
)


def _games() -> pd.DataFrame:
    return played_games(load_game_logs())


def test_category_order():
    df = pd.DataFrame({'g': ['b', 'a', 'b', 'c']})
    assert category_order(df, 'g') == ['b', 'a', 'c']
    assert category_order(df, 'g', order=['c', 'a']) == ['c', 'a']
    df['g'] = pd.Categorical(df['g'], categories=['c', 'b', 'a', 'z'])
    assert category_order(df, 'g') == ['c', 'b', 'a']


def test_strip():
    plants = load_dataset('plant_growth')
    fig = plot_strip(plants, x='group', y='weight', title='Strip')
    fig.canvas.draw()
    ax = fig.axes[0]
    assert ax.get_title() == 'Strip'
    # one mean bar per group
    assert len([c for c in ax.collections if c.__class__.__name__ == 'LineCollection']) == 3
    assert [t.get_text() for t in ax.get_xticklabels()] == ['ctrl', 'trt1', 'trt2']
    plt.close(fig)

    try:
        plot_strip(plants, x='group', y='height')
    except MissingColumnError:
        pass
    else:
        raise AssertionError("expected MissingColumnError")


def test_bean():
    plants = load_dataset('plant_growth')
    fig = plot_bean(plants, x='group', y='weight')
    ax = fig.axes[0]
    polys = [c for c in ax.collections if c.__class__.__name__ in ('PolyCollection', 'FillBetweenPolyCollection')]
    assert len(polys) == 3
    assert [t.get_text() for t in ax.get_xticklabels()] == ['ctrl', 'trt1', 'trt2']
    plt.close(fig)


def test_bean_single_value_group():
    df = pd.DataFrame({'g': ['a', 'a', 'a', 'b', 'b'], 'v': [1.0, 2.0, 3.0, 5.0, 5.0]})
    fig = plot_bean(df, x='g', y='v')
    ax = fig.axes[0]
    polys = [c for c in ax.collections if c.__class__.__name__ in ('PolyCollection', 'FillBetweenPolyCollection')]
    # 'b' has a single distinct value: beans but no outline
    assert len(polys) == 1
    plt.close(fig)


def test_density_and_ridgeline():
    games = _games()
    fig = plot_density(games, x='points', hue='player', show_stats=True)
    assert len(fig.axes[0].lines) >= 2
    plt.close(fig)

    fig = plot_ridgeline(games, x='points', by='player')
    labels = [t.get_text() for t in fig.axes[0].get_yticklabels()]
    assert sorted(labels) == sorted(games['player'].unique())
    plt.close(fig)

    grid, density = density_curve([1.0, 2.0, 2.5, 4.0], grid_size=50)
    assert grid.shape == (50,) and density.shape == (50,)
    assert (density >= 0).all()

    try:
        density_curve([3.0, 3.0, np.nan])
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError for a constant sample")


def test_annotation():
    ppg = points_per_game(load_game_logs())
    note = annotate_extreme(ppg, 'game_number', 'ppg')
    assert note.y == ppg['ppg'].max()
    assert note.text.startswith('Max')

    low = annotate_extreme(ppg, 'game_number', 'ppg', which='min', label='low')
    assert low.y == ppg['ppg'].min() and low.text == 'low'

    try:
        annotate_extreme(ppg, 'game_number', 'ppg', which='mean')
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError for which='mean'")

    fig = plot_annotated_line(
        ppg[ppg['season'] == '2023-24'], x='game_number', y='ppg', hue='player',
        annotations=[note, Annotation(x=3, y=20.0, text='plain', arrow=False)],
        hline=20.0, hline_label='twenty', shade=(1, 5), label_ends=True, highlight='Avery Brooks',
    )
    ax = fig.axes[0]
    texts = [t.get_text() for t in ax.texts]
    assert note.text in texts and 'plain' in texts and 'twenty' in texts
    # direct labels replace the legend
    assert 'Avery Brooks' in texts
    assert ax.get_legend() is None
    plt.close(fig)


def test_faceted_kinds():
    ppg = points_per_game(load_game_logs())
    ppg = ppg[ppg['season'] == '2023-24']
    n_players = ppg['player'].nunique()
    monthly = (
        ppg.assign(month=ppg['date'].dt.to_period('M').astype(str))
        .groupby(['player', 'month'], as_index=False)['points'].mean()
    )
    cases = (
        ('step', ppg, 'game_number', 'cum_points'),
        ('area', ppg, 'game_number', 'ppg'),
        ('bar', monthly, 'month', 'points'),
    )
    for kind, data, x, y in cases:
        fig = plot_faceted(data, x=x, y=y, facet='player', kind=kind, title=kind)
        assert len(fig.axes) == n_players
        titles = sorted(ax.get_title() for ax in fig.axes)
        assert titles == sorted(ppg['player'].unique())
        plt.close(fig)

    try:
        plot_faceted(ppg, x='game_number', y='ppg', facet='player', kind='pie')
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError for an unknown kind")


def test_dumbbell():
    frame = pd.DataFrame({'player': ['A', 'B', 'C'], 'start': [10.0, 20.0, 15.0], 'end': [12.0, 18.0, 25.0]})
    fig = plot_dumbbell(frame, 'player', sort_by='change', show_change=True)
    ax = fig.axes[0]
    # sorted by change: B (-2), A (+2), C (+10)
    assert [t.get_text() for t in ax.get_yticklabels()] == ['B', 'A', 'C']
    assert '+10.0' in [t.get_text() for t in ax.texts]
    plt.close(fig)


def test_lollipop():
    df = pd.DataFrame({'team': ['x', 'y', 'z'], 'score': [3.0, 9.0, 5.0]})
    fig = plot_lollipop(df, 'team', 'score', show_values=True, highlight='y')
    ax = fig.axes[0]
    # ascending bottom-to-top so the largest value is drawn at the top
    assert [t.get_text() for t in ax.get_yticklabels()] == ['x', 'z', 'y']
    assert [t.get_text() for t in ax.texts] == ['3.0', '5.0', '9.0']
    plt.close(fig)

    fig = plot_lollipop(df, 'team', 'score', horizontal=False)
    assert [t.get_text() for t in fig.axes[0].get_xticklabels()] == ['y', 'z', 'x']
    plt.close(fig)


def test_calendar():
    games = _games()
    avery = games[games['player'] == 'Avery Brooks']
    fig = plot_calendar_heatmap(avery, date='date', value='points', title='cal')
    years = sorted(avery['date'].dt.year.unique())
    # one panel per year plus the shared colorbar
    assert len(fig.axes) == len(years) + 1
    plt.close(fig)

    frame = calendar_frame(avery, 'date', 'points')
    grid = calendar_matrix(frame, years[0])
    assert grid.shape == (7, 54)
    n_days = frame[(frame['year'] == years[0])]['value'].notna().sum()
    assert np.isfinite(grid).sum() == n_days

    empty = avery.assign(points=np.nan)
    try:
        plot_calendar_heatmap(empty, date='date', value='points')
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError when every value is missing")


def main():
    """Run chart tests."""
    tests = [
        test_category_order,
        test_strip,
        test_bean,
        test_bean_single_value_group,
        test_density_and_ridgeline,
        test_annotation,
        test_faceted_kinds,
        test_dumbbell,
        test_lollipop,
        test_calendar,
    ]
    for test in tests:
        test()
        print(f"✓ {test.__name__}")
    print("\nChart tests passed!")


if __name__ == "__main__":
    main()
