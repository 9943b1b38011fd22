# %% [markdown]
# # A gallery of chart techniques
#
# Each section below is self-contained: it loads a small table, reshapes it with
# a handful of pandas verbs, maps columns to visual channels and renders one
# chart type. Charts are written to `gallery_out/` with `save_figure`.
#
# Two sample datasets ship with the package:
#
# - `plant_growth`: dried plant weights for a control group and two treatments
# - basketball game logs, one CSV per season, plus a roster and a team schedule

# %%
from pathlib import Path

import pandas as pd

from chartgallery import apply_theme, save_figure
from chartgallery.data import (
    attach_roster,
    attach_schedule,
    calendar_frame,
    dumbbell_frame,
    list_datasets,
    load_dataset,
    load_game_logs,
    played_games,
    points_per_game,
    rolling_points_per_game,
    season_averages,
    summarize_by,
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

OUT = Path("gallery_out")
apply_theme("husl")
list_datasets()

# %% [markdown]
# ## Loading the sports data
#
# The game logs arrive as one file per season. `load_game_logs` reads every
# `season_*.csv` in the directory, tags each row with the season taken from the
# file name and stacks them. We then join the roster by player name and the team
# schedule by date.

# %%
games = load_game_logs(verbose=True)
games = attach_roster(games, load_dataset("roster"))
games = attach_schedule(games, load_dataset("schedule"))
games.head()

# %% [markdown]
# Rows with an empty `points` cell are games the player sat out. Every per-game
# metric below uses `played_games`, so those rows never count as zero-point games.

# %%
games["points"].isna().groupby(games["season"]).sum()

# %% [markdown]
# ## Strip charts
#
# With ten observations per group, a box plot mostly draws whiskers around
# nothing. A strip chart shows every point; jitter keeps ties apart and a bar
# marks each group mean.

# %%
plants = load_dataset("plant_growth")
summarize_by(plants, "group", "weight")

# %%
fig = plot_strip(plants, x="group", y="weight", jitter=0.15, title="Dried plant weight by treatment")
save_figure(fig, OUT / "strip")

# %% [markdown]
# ## Bean plots
#
# A bean plot adds the shape of each distribution to the strip chart. The
# mirrored outline is a kernel density estimate. Each short line is one game,
# the thick bar is the player's mean and the dashed line is the mean over everyone.
# Use it when you need shape, raw data and centre in the same picture.

# %%
latest = games[games["season"] == games["season"].max()]
fig = plot_bean(played_games(latest), x="player", y="points", title="Points per game, latest season")
save_figure(fig, OUT / "bean")

# %% [markdown]
# ## Density plots
#
# Overlaid density curves compare distribution shapes directly. Normalising each
# curve separately (`common_norm=False`) stops the player with the most games from
# dominating.

# %%
fig = plot_density(played_games(latest), x="points", hue="player", title="Scoring distribution by player")
save_figure(fig, OUT / "density")

# %% [markdown]
# Once there are more than three or four groups the overlaid curves get hard to
# read. Stacking them as ridges keeps a shared x axis without the overlap.

# %%
played = played_games(games)
played = played.assign(player_season=played["player"] + " " + played["season"])
fig = plot_ridgeline(played.sort_values(["player", "season"]), x="points", by="player_season",
                     title="Scoring distribution by player and season")
save_figure(fig, OUT / "ridgeline")

# %% [markdown]
# ## Points per game, cumulative and rolling
#
# Cumulative points per game after game *n* is the running total divided by *n*.
# The rolling version averages only the last few games, so it reacts faster to a
# hot or cold streak.

# %%
ppg = points_per_game(latest)
rolling = rolling_points_per_game(latest, window=5)
ppg[["player", "date", "points", "game_number", "cum_points", "ppg"]].head(8)

# %% [markdown]
# ## Annotation
#
# A chart that explains itself does not need a caption. Here we highlight one
# player and grey out the rest. We point at that player's peak with a callout,
# draw the group average as a reference line and shade the first games, where the
# average is noisy. Labelling the lines at their ends makes the legend redundant.

# %%
focus = ppg[(ppg["player"] == "Avery Brooks") & (ppg["game_number"] > 5)]
peak = annotate_extreme(focus, "game_number", "ppg", label="Avery Brooks peaks")
average = played_games(latest)["points"].mean()

fig = plot_annotated_line(
    ppg, x="game_number", y="ppg", hue="player",
    annotations=[peak],
    hline=average, hline_label=f"Group average {average:.1f}",
    shade=(1, 5), shade_label="Small-sample noise",
    label_ends=True, highlight="Avery Brooks",
    title="Cumulative points per game",
)
save_figure(fig, OUT / "annotation")

# %% [markdown]
# ## Faceted bar, step and area charts
#
# Small multiples repeat one chart per group on shared scales, so the eye
# compares panels rather than untangling overlapping marks.
#
# Bars suit a categorical x axis, here the calendar month:

# %%
monthly = (
    played_games(latest)
    .assign(month=lambda d: d["date"].dt.to_period("M").astype(str))
    .groupby(["player", "month"], as_index=False)["points"].mean()
)
fig = plot_faceted(monthly, x="month", y="points", facet="player", kind="bar", title="Average points by month")
save_figure(fig, OUT / "facet_bar")

# %% [markdown]
# A running total only changes when a game is played, so a step line is more
# honest than a sloped one:

# %%
fig = plot_faceted(ppg, x="game_number", y="cum_points", facet="player", kind="step",
                   title="Season points, running total")
save_figure(fig, OUT / "facet_step")

# %% [markdown]
# Filled areas give the rolling average visual weight:

# %%
fig = plot_faceted(rolling, x="game_number", y="rolling_ppg", facet="player", kind="area",
                   title="5-game rolling points per game")
save_figure(fig, OUT / "facet_area")

# %% [markdown]
# ## Dumbbell plots
#
# For a before/after comparison the interesting quantity is the gap. A dumbbell
# puts both values on one line and sorts the rows by the size of the change.

# %%
averages = season_averages(games)
seasons = sorted(averages["season"].unique())
change = dumbbell_frame(averages, category="player", group="season", value="ppg",
                        start=seasons[0], end=seasons[-1])
change

# %%
fig = plot_dumbbell(change, category="player", sort_by="change", start_label=seasons[0],
                    end_label=seasons[-1], show_change=True, title="Points per game, season over season")
save_figure(fig, OUT / "dumbbell")

# %% [markdown]
# ## Lollipop charts
#
# When several bars would have nearly the same length, a thin stem with a dot
# carries the same information with less ink. Highlighting one category turns a
# ranking into a story.

# %%
latest_averages = season_averages(latest)
fig = plot_lollipop(latest_averages, category="player", value="ppg", highlight="Avery Brooks",
                    show_values=True, title="Points per game, latest season")
save_figure(fig, OUT / "lollipop")

# %% [markdown]
# ## Calendar heat maps
#
# A calendar heat map lays daily values out on a weekday-by-week grid, one row
# per year. Weekly rhythm and runs over a season both show up at a glance.
# Days without a game stay blank.

# %%
avery = played_games(games)
avery = avery[avery["player"] == "Avery Brooks"]
calendar_frame(avery, "date", "points").dropna().head()

# %%
fig = plot_calendar_heatmap(avery, date="date", value="points", colorbar_label="Points",
                            title="Avery Brooks: points by game day")
save_figure(fig, OUT / "calendar")

# %% [markdown]
# ## Rendering everything at once
#
# The same sections are registered in `chartgallery.gallery`, so the whole
# gallery can be rebuilt from the command line:
#
# ```
# python run_gallery.py --output_dir gallery_out --format png svg
# python run_gallery.py --list
# ```

# %%
pd.Series(sorted(p.name for p in OUT.glob("*.png")))
