# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

from .loaders import (
    MissingColumnError,
    require_columns,
    load_table,
    list_datasets,
    load_dataset,
    get_game_log_files,
    load_game_logs,
    attach_roster,
    attach_schedule,
)
from .reshape import (
    played_games,
    summarize_by,
    cumulative_by_group,
    points_per_game,
    rolling_points_per_game,
    season_averages,
    dumbbell_frame,
    calendar_frame,
    month_starts,
    top_n,
)

__all__ = [
    'MissingColumnError',
    'require_columns',
    'load_table',
    'list_datasets',
    'load_dataset',
    'get_game_log_files',
    'load_game_logs',
    'attach_roster',
    'attach_schedule',
    'played_games',
    'summarize_by',
    'cumulative_by_group',
    'points_per_game',
    'rolling_points_per_game',
    'season_averages',
    'dumbbell_frame',
    'calendar_frame',
    'month_starts',
    'top_n',
]
