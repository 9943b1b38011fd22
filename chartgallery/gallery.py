# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

from __future__ import annotations

import sys
import argparse
import pandas as pd
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
from tqdm import tqdm

from chartgallery.config import GalleryConfig, load_config
from chartgallery.export import save_figure
from chartgallery.theme import apply_theme
from chartgallery.data.loaders import attach_roster, attach_schedule, load_dataset, load_game_logs
from chartgallery.data.reshape import (
    dumbbell_frame,
    played_games,
    points_per_game,
    rolling_points_per_game,
    season_averages,
)
from chartgallery.charts import (
    annotate_extreme,
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


BuildFn = Callable[[GalleryConfig], Figure]


@dataclass
class GallerySection:
    name: str
    title: str
    build: BuildFn
    description: str = ''
    tags: List[str] = field(default_factory=list)


class ChartGallery:
    """Registry of independent chart sections that can be rendered to image files.

    - Register sections via GallerySection
    - Each section loads and reshapes its own data, then returns a Figure
    - `render_all` keeps going past a failing section and records it in `failures`
    """

    def __init__(self, config: Optional[GalleryConfig] = None):
        self.config = config or GalleryConfig()
        self.output_dir = Path(self.config.output_dir)
        self.verbose = bool(self.config.verbose)
        self.sections: Dict[str, GallerySection] = {}
        self.failures: Dict[str, str] = {}

    # -----------
    # Registration
    # -----------
    def register_section(self, section: GallerySection):
        if section.name in self.sections:
            raise ValueError(f"Section '{section.name}' is already registered")
        self.sections[section.name] = section
        if self.verbose:
            print(f"Registered section: {section.name}")

    def section_names(self) -> List[str]:
        return list(self.sections)

    # ---------
    # Rendering
    # ---------
    def build(self, name: str):
        if name not in self.sections:
            raise KeyError(f"Unknown section '{name}'. Available: {', '.join(self.sections)}")
        apply_theme(self.config.palette)
        return self.sections[name].build(self.config)

    def render(self, name: str) -> List[Path]:
        """Build and save one section; every figure it opened is closed, even on failure."""
        open_before = set(plt.get_fignums())
        try:
            fig = self.build(name)
            return save_figure(fig, self.output_dir / name, formats=self.config.formats,
                               dpi=self.config.dpi, close=False, verbose=self.verbose)
        finally:
            for num in set(plt.get_fignums()) - open_before:
                plt.close(num)

    def render_all(self, names: Optional[Sequence[str]] = None) -> Dict[str, List[Path]]:
        names = list(names) if names else self.section_names()
        unknown = [n for n in names if n not in self.sections]
        if unknown:
            raise KeyError(f"Unknown section(s): {', '.join(unknown)}")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.failures = {}
        results: Dict[str, List[Path]] = {}
        for name in tqdm(names, desc="Rendering sections", unit="chart", disable=not self.verbose):
            try:
                results[name] = self.render(name)
                if self.verbose:
                    print(f"[ok] {name} -> {', '.join(str(p) for p in results[name])}")
            except Exception as e:
                self.failures[name] = str(e)
                print(f"[warn] section '{name}' failed: {e}")
        return results


# ------------------
# Section data setup
# ------------------
def _games(config: GalleryConfig) -> pd.DataFrame:
    games = load_game_logs(config.game_logs_dir, verbose=config.verbose)
    games = attach_roster(games, load_dataset('roster'))
    return attach_schedule(games, load_dataset('schedule'))


def _latest_season(games: pd.DataFrame) -> pd.DataFrame:
    return games[games['season'] == games['season'].max()]


# --------------
# Section builds
# --------------
def build_strip(config: GalleryConfig):
    plants = load_dataset('plant_growth')
    fig = plot_strip(plants, x='group', y='weight', jitter=0.15, figsize=config.figsize,
                     title='Dried plant weight by treatment')
    fig.axes[0].set_ylabel('Weight (g)')
    return fig


def build_bean(config: GalleryConfig):
    games = played_games(_latest_season(_games(config)))
    season = games['season'].iloc[0]
    return plot_bean(games, x='player', y='points', palette=config.palette, figsize=config.figsize,
                     title=f'Points per game, {season}')


def build_density(config: GalleryConfig):
    games = played_games(_latest_season(_games(config)))
    return plot_density(games, x='points', hue='player', figsize=config.figsize,
                        title='Scoring distribution by player')


def build_ridgeline(config: GalleryConfig):
    games = played_games(_games(config))
    games = games.assign(player_season=games['player'] + ' ' + games['season'])
    return plot_ridgeline(games.sort_values(['player', 'season']), x='points', by='player_season',
                          palette=config.palette, figsize=config.figsize,
                          title='Scoring distribution by player and season')


def build_annotation(config: GalleryConfig):
    games = _latest_season(_games(config))
    ppg = points_per_game(games)
    focus = ppg[(ppg['player'] == config.focus_player) & (ppg['game_number'] > config.rolling_window)]
    notes = []
    if not focus.empty:
        notes.append(annotate_extreme(focus, 'game_number', 'ppg', label=f"{config.focus_player} peaks"))
    league_avg = played_games(games)['points'].mean()
    return plot_annotated_line(
        ppg, x='game_number', y='ppg', hue='player',
        annotations=notes,
        hline=league_avg, hline_label=f'Group average {league_avg:.1f}',
        shade=(1, config.rolling_window), shade_label='Small-sample noise',
        label_ends=True, highlight=config.focus_player, palette=config.palette,
        figsize=config.figsize, title='Cumulative points per game',
    )


def build_facet_bar(config: GalleryConfig):
    games = played_games(_latest_season(_games(config)))
    monthly = (
        games.assign(month=games['date'].dt.to_period('M').astype(str))
        .groupby(['player', 'month'], as_index=False)['points'].mean()
        .sort_values(['player', 'month'])
    )
    return plot_faceted(monthly, x='month', y='points', facet='player', kind='bar',
                        title='Average points by month')


def build_facet_step(config: GalleryConfig):
    ppg = points_per_game(_latest_season(_games(config)))
    return plot_faceted(ppg, x='game_number', y='cum_points', facet='player', kind='step',
                        title='Season points, running total')


def build_facet_area(config: GalleryConfig):
    rolling = rolling_points_per_game(_latest_season(_games(config)), window=config.rolling_window)
    return plot_faceted(rolling, x='game_number', y='rolling_ppg', facet='player', kind='area',
                        title=f'{config.rolling_window}-game rolling points per game')


def build_dumbbell(config: GalleryConfig):
    averages = season_averages(_games(config))
    seasons = sorted(averages['season'].unique())
    frame = dumbbell_frame(averages, category='player', group='season', value='ppg',
                           start=seasons[0], end=seasons[-1])
    fig = plot_dumbbell(frame, category='player', sort_by='change', start_label=seasons[0],
                        end_label=seasons[-1], show_change=True, figsize=config.figsize,
                        title='Points per game, season over season')
    fig.axes[0].set_xlabel('Points per game')
    return fig


def build_lollipop(config: GalleryConfig):
    averages = season_averages(_latest_season(_games(config)))
    return plot_lollipop(averages, category='player', value='ppg', highlight=config.focus_player,
                         show_values=True, figsize=config.figsize,
                         title=f"Points per game, {averages['season'].iloc[0]}")


def build_calendar(config: GalleryConfig):
    games = played_games(_games(config))
    games = games[games['player'] == config.focus_player]
    if games.empty:
        raise ValueError(f"No games found for player '{config.focus_player}'")
    return plot_calendar_heatmap(games, date='date', value='points', colorbar_label='Points',
                                 title=f'{config.focus_player}: points by game day')


DEFAULT_SECTIONS = [
    GallerySection('strip', 'Strip chart', build_strip,
                   'Every observation as a jittered dot, with group means.', ['distribution']),
    GallerySection('bean', 'Bean plot', build_bean,
                   'Density outline, individual observations and group means in one mark.', ['distribution']),
    GallerySection('density', 'Density plot', build_density,
                   'Overlaid kernel density curves per group.', ['distribution']),
    GallerySection('ridgeline', 'Ridgeline plot', build_ridgeline,
                   'Stacked density curves for many groups.', ['distribution']),
    GallerySection('annotation', 'Annotated line chart', build_annotation,
                   'Callouts, reference line, shaded span and direct labels.', ['annotation']),
    GallerySection('facet_bar', 'Faceted bar chart', build_facet_bar,
                   'Small multiples of monthly averages.', ['facets']),
    GallerySection('facet_step', 'Faceted step chart', build_facet_step,
                   'Running totals that change in discrete jumps.', ['facets']),
    GallerySection('facet_area', 'Faceted area chart', build_facet_area,
                   'Rolling averages as filled areas.', ['facets']),
    GallerySection('dumbbell', 'Dumbbell plot', build_dumbbell,
                   'Two-period comparison per category.', ['comparison']),
    GallerySection('lollipop', 'Lollipop chart', build_lollipop,
                   'Ranked values with a highlighted category.', ['comparison']),
    GallerySection('calendar', 'Calendar heat map', build_calendar,
                   'Daily values on a weekday by week grid.', ['time']),
]


def build_default_gallery(config: Optional[GalleryConfig] = None) -> ChartGallery:
    gallery = ChartGallery(config)
    for section in DEFAULT_SECTIONS:
        gallery.register_section(section)
    return gallery


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Render the chart gallery to image files')
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a YAML config file (default: configs/gallery.yaml)')
    parser.add_argument('--output_dir', type=str, default=None, help='Output directory')
    parser.add_argument('--sections', type=str, nargs='*', default=None,
                        help='Sections to render (default: all)')
    parser.add_argument('--format', dest='formats', type=str, nargs='*', default=None,
                        help='Image formats, e.g. png svg pdf')
    parser.add_argument('--dpi', type=int, default=None, help='Resolution of raster images')
    parser.add_argument('--data_path', type=str, default=None,
                        help='Directory of season_*.csv game logs (default: bundled sample data)')
    parser.add_argument('--list', action='store_true', help='List available sections and exit')
    parser.add_argument('--verbose', action='store_true', help='Enable verbose logging')
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}")
        return 1
    config = config.with_overrides(
        output_dir=args.output_dir,
        formats=args.formats or None,
        dpi=args.dpi,
        game_logs_dir=args.data_path,
        sections=args.sections or None,
        verbose=True if args.verbose else None,
    )

    gallery = build_default_gallery(config)
    if args.list:
        for section in gallery.sections.values():
            print(f"{section.name:<12} {section.title} - {section.description}")
        return 0

    try:
        results = gallery.render_all(config.sections)
    except KeyError as e:
        print(f"[error] {e.args[0]}")
        return 1

    print(f"Rendered {len(results)} section(s) to {gallery.output_dir}")
    if gallery.failures:
        print(f"{len(gallery.failures)} section(s) failed: {', '.join(gallery.failures)}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
