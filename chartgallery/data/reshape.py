# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import pandas as pd
from typing import Iterable, List, Optional, Sequence, Union

from chartgallery.data.loaders import require_columns


SUPPORTED_STATS = ('mean', 'median', 'min', 'max', 'std', 'sum', 'count')


def _as_list(by: Union[str, Iterable[str], None]) -> List[str]:
    if by is None:
        return []
    if isinstance(by, str):
        return [by]
    return list(by)


def played_games(games: pd.DataFrame, value: str = 'points') -> pd.DataFrame:
    """Drop did-not-play rows, i.e. rows without a value for `value`."""
    require_columns(games, [value], context='played_games')
    return games[games[value].notna()].copy()


def summarize_by(df: pd.DataFrame,
                 by: Union[str, Sequence[str]],
                 value: str,
                 stats: Sequence[str] = ('mean', 'median', 'count')) -> pd.DataFrame:
    """
    Group-wise summary of a single numeric column.

    Args:
        df: Input table
        by: Grouping column(s)
        value: Column to summarize
        stats: Statistics to compute, one output column each

    Returns:
        One row per group with the grouping columns followed by one column per statistic
    """
    keys = _as_list(by)
    require_columns(df, keys + [value], context='summarize_by')
    unknown = [s for s in stats if s not in SUPPORTED_STATS]
    if unknown:
        raise ValueError(f"Unsupported statistic(s): {', '.join(unknown)}; expected {SUPPORTED_STATS}")

    grouped = df.groupby(keys, sort=False)[value]
    out = grouped.agg(list(stats)).reset_index()
    return out


def cumulative_by_group(df: pd.DataFrame,
                        by: Union[str, Sequence[str], None],
                        value: str,
                        order_by: str,
                        name: Optional[str] = None) -> pd.DataFrame:
    """Add a running sum of `value` within each group, in `order_by` order.

    With no grouping columns the running sum covers the whole table.
    """
    keys = _as_list(by)
    require_columns(df, keys + [value, order_by], context='cumulative_by_group')
    name = name or f"cum_{value}"

    out = df.sort_values(keys + [order_by], kind='mergesort').copy()
    if keys:
        out[name] = out.groupby(keys, sort=False)[value].cumsum()
    else:
        out[name] = out[value].cumsum()
    return out.reset_index(drop=True)


def points_per_game(games: pd.DataFrame,
                    by: Sequence[str] = ('player', 'season'),
                    value: str = 'points') -> pd.DataFrame:
    """
    Cumulative points-per-game over a season.

    DNP rows are excluded, so `game_number` counts games actually played and
    `ppg` after game n is the mean of the first n played games.
    """
    keys = _as_list(by)
    require_columns(games, keys + ['date', value], context='points_per_game')

    out = cumulative_by_group(played_games(games, value), keys, value, 'date', name=f"cum_{value}")
    out['game_number'] = out.groupby(keys, sort=False).cumcount() + 1
    out['ppg'] = out[f"cum_{value}"] / out['game_number']
    return out


def rolling_points_per_game(games: pd.DataFrame,
                            window: int = 5,
                            by: Sequence[str] = ('player', 'season'),
                            value: str = 'points',
                            min_periods: int = 1) -> pd.DataFrame:
    """Trailing mean of `value` over the last `window` played games of each group."""
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    keys = _as_list(by)
    require_columns(games, keys + ['date', value], context='rolling_points_per_game')

    out = played_games(games, value).sort_values(keys + ['date'], kind='mergesort').reset_index(drop=True)
    out['game_number'] = out.groupby(keys, sort=False).cumcount() + 1
    out['rolling_ppg'] = (
        out.groupby(keys, sort=False)[value]
        .transform(lambda s: s.rolling(window, min_periods=min(min_periods, window)).mean())
    )
    return out


def season_averages(games: pd.DataFrame) -> pd.DataFrame:
    """Per-player, per-season totals and per-game averages."""
    require_columns(games, ['player', 'season', 'points', 'rebounds', 'assists', 'minutes'],
                    context='season_averages')
    played = played_games(games, 'points')
    out = (
        played.groupby(['player', 'season'])
        .agg(games=('points', 'size'),
             points=('points', 'sum'),
             ppg=('points', 'mean'),
             rpg=('rebounds', 'mean'),
             apg=('assists', 'mean'),
             mpg=('minutes', 'mean'))
        .reset_index()
    )
    return out


def dumbbell_frame(df: pd.DataFrame,
                   category: str,
                   group: str,
                   value: str,
                   start,
                   end) -> pd.DataFrame:
    """
    Reshape long data into one row per category with a start and an end value.

    Args:
        df: Long table with one row per (category, group)
        category: Column naming the rows of the dumbbell chart
        group: Column whose values contain `start` and `end`
        value: Numeric column to compare
        start: Group value for the left end of each dumbbell
        end: Group value for the right end of each dumbbell

    Returns:
        Columns: category, start, end, change
    """
    require_columns(df, [category, group, value], context='dumbbell_frame')
    present = set(df[group].unique())
    missing = [g for g in (start, end) if g not in present]
    if missing:
        raise ValueError(f"Group value(s) {missing} not found in column '{group}'")

    wide = (
        df[df[group].isin([start, end])]
        .pivot_table(index=category, columns=group, values=value, aggfunc='mean')
    )
    out = pd.DataFrame({
        category: wide.index,
        'start': wide[start].to_numpy(),
        'end': wide[end].to_numpy(),
    })
    out['change'] = out['end'] - out['start']
    return out.reset_index(drop=True)


def calendar_frame(df: pd.DataFrame, date: str, value: str, agg: str = 'sum') -> pd.DataFrame:
    """
    Daily values laid out on a weekday x week grid, one grid per year.

    Every day of every year touched by the data gets a row; days without data
    have NaN `value`. `weekday` is 0 for Monday. `week` is the grid column, with
    week 0 holding January 1st and new weeks starting on Mondays.
    """
    require_columns(df, [date, value], context='calendar_frame')
    data = df.dropna(subset=[date, value])
    if data.empty:
        raise ValueError(f"calendar_frame needs at least one row with a '{value}' value")

    dates = pd.to_datetime(data[date]).dt.normalize()
    daily = data.assign(**{date: dates}).groupby(date)[value].agg(agg)

    years = sorted(dates.dt.year.unique())
    full = pd.date_range(f"{years[0]}-01-01", f"{years[-1]}-12-31", freq='D')
    full = full[full.year.isin(years)]

    out = pd.DataFrame({'date': full})
    out['value'] = daily.reindex(full).to_numpy()
    out['year'] = out['date'].dt.year
    out['month'] = out['date'].dt.month
    out['weekday'] = out['date'].dt.weekday
    jan1_weekday = pd.to_datetime(out['year'].astype(str) + '-01-01').dt.weekday
    out['week'] = (out['date'].dt.dayofyear - 1 + jan1_weekday) // 7
    return out


def top_n(df: pd.DataFrame, value: str, n: int = 10, by: Union[str, Sequence[str], None] = None) -> pd.DataFrame:
    """Largest `n` rows by `value`, optionally within each group."""
    keys = _as_list(by)
    require_columns(df, keys + [value], context='top_n')
    ordered = df.sort_values(value, ascending=False, kind='mergesort')
    if keys:
        ordered = ordered.groupby(keys, sort=False).head(n)
    else:
        ordered = ordered.head(n)
    return ordered.reset_index(drop=True)


def month_starts(frame: pd.DataFrame) -> pd.DataFrame:
    """First grid week of each month in a `calendar_frame` result, for axis labels."""
    require_columns(frame, ['year', 'month', 'week'], context='month_starts')
    firsts = frame.groupby(['year', 'month'], as_index=False)['week'].min()
    firsts['label'] = pd.to_datetime(
        pd.DataFrame({'year': firsts['year'], 'month': firsts['month'], 'day': 1})
    ).dt.strftime('%b')
    return firsts
