# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import warnings
import pandas as pd
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
from tqdm import tqdm


DATASET_DIR = Path(__file__).resolve().parent / 'datasets'
GAME_LOGS_DIR = DATASET_DIR / 'game_logs'

GAME_LOG_COLUMNS = ['player', 'date', 'minutes', 'points', 'rebounds', 'assists']
ROSTER_COLUMNS = ['player', 'team', 'position']
SCHEDULE_COLUMNS = ['team', 'date', 'opponent', 'home', 'result']

# Columns parsed as datetimes when a bundled dataset is loaded by name
DATASET_DATE_COLUMNS: Dict[str, List[str]] = {
    'schedule': ['date'],
}

_READERS = {
    '.csv': lambda path, **kw: pd.read_csv(path, **kw),
    '.tsv': lambda path, **kw: pd.read_csv(path, sep='\t', **kw),
    '.xlsx': lambda path, **kw: pd.read_excel(path, engine='openpyxl', **kw),
}


class MissingColumnError(KeyError):
    """Raised when a table lacks columns a chart or verb refers to."""

    def __init__(self, missing: List[str], available: Iterable[str], context: Optional[str] = None):
        self.missing = list(missing)
        self.available = list(available)
        self.context = context
        where = f" in {context}" if context else ''
        super().__init__(
            f"Missing column(s){where}: {', '.join(self.missing)} "
            f"(available: {', '.join(map(str, self.available))})"
        )

    def __str__(self) -> str:
        return self.args[0]


def require_columns(df: pd.DataFrame, columns: Iterable[str], context: Optional[str] = None) -> pd.DataFrame:
    """Check that every name in `columns` is a column of `df`.

    Returns `df` unchanged so the call can be chained.
    """
    missing = [c for c in columns if c is not None and c not in df.columns]
    if missing:
        raise MissingColumnError(missing, df.columns, context)
    return df


def load_table(path: Union[str, Path],
               columns: Optional[Iterable[str]] = None,
               parse_dates: Optional[List[str]] = None,
               sheet_name: Union[int, str] = 0,
               **kwargs) -> pd.DataFrame:
    """
    Load a flat table from a CSV, TSV or Excel file.

    Args:
        path: File to read
        columns: Columns that must be present in the loaded table
        parse_dates: Columns to convert to datetimes after loading
        sheet_name: Worksheet to read for Excel files
        **kwargs: Passed through to the pandas reader

    Returns:
        The loaded DataFrame

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file type is not supported
        MissingColumnError: If a required column is absent
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file does not exist: {path}")

    suffix = path.suffix.lower()
    reader = _READERS.get(suffix)
    if reader is None:
        raise ValueError(
            f"Unsupported file type '{suffix}' for {path}; "
            f"expected one of {', '.join(sorted(_READERS))}"
        )
    if suffix == '.xlsx':
        kwargs['sheet_name'] = sheet_name

    df = reader(path, **kwargs)
    if columns is not None:
        require_columns(df, columns, context=path.name)
    for col in parse_dates or []:
        require_columns(df, [col], context=path.name)
        df[col] = pd.to_datetime(df[col])
    return df


def list_datasets() -> List[str]:
    """Names of the sample datasets shipped with the package."""
    return sorted(p.stem for p in DATASET_DIR.glob('*.csv'))


def load_dataset(name: str) -> pd.DataFrame:
    """Load a bundled sample dataset by name (e.g. 'plant_growth')."""
    available = list_datasets()
    if name not in available:
        raise ValueError(f"Unknown dataset '{name}'. Available: {', '.join(available)}")
    return load_table(DATASET_DIR / f"{name}.csv", parse_dates=DATASET_DATE_COLUMNS.get(name))


def _season_from_file(file_path: Path) -> str:
    # season_2022-23.csv -> 2022-23
    stem = file_path.stem
    return stem.split('_', 1)[1] if '_' in stem else stem


def _read_game_log(file_path: Path) -> pd.DataFrame:
    df = load_table(file_path, columns=GAME_LOG_COLUMNS)
    df['date'] = pd.to_datetime(df['date'])
    df['season'] = _season_from_file(file_path)
    df['source_file'] = file_path.name
    return df


def get_game_log_files(data_path: Union[str, Path, None] = None, pattern: str = 'season_*.csv') -> List[Path]:
    """
    Get the list of game-log files without loading them.

    Raises:
        FileNotFoundError: If data_path doesn't exist
        ValueError: If no files match the pattern
    """
    data_path = Path(data_path) if data_path is not None else GAME_LOGS_DIR
    if not data_path.exists():
        raise FileNotFoundError(f"Data path does not exist: {data_path}")

    files = sorted(data_path.glob(pattern))
    if not files:
        raise ValueError(f"No files matching '{pattern}' found in {data_path}")
    return files


def load_game_logs(data_path: Union[str, Path, None] = None,
                   pattern: str = 'season_*.csv',
                   skip_bad_files: bool = False,
                   verbose: bool = False) -> pd.DataFrame:
    """
    Load every per-season game-log file in a directory into one table.

    Each row is tagged with the `season` parsed from its file name and the
    `source_file` it came from. The result is sorted by player and date.

    Args:
        data_path: Directory holding the season files (defaults to the bundled logs)
        pattern: Glob pattern selecting the files
        skip_bad_files: Warn about and skip unreadable files instead of raising
        verbose: Print progress information

    Returns:
        Concatenated game logs
    """
    files = get_game_log_files(data_path, pattern)

    frames = []
    failed_files = []
    if verbose:
        print(f"Loading {len(files)} game log files...")
    for file_path in tqdm(files, desc="Loading game logs", unit="files", disable=not verbose):
        try:
            frames.append(_read_game_log(file_path))
        except (KeyError, ValueError, pd.errors.ParserError) as e:
            if not skip_bad_files:
                raise
            failed_files.append((file_path, str(e)))
            warnings.warn(f"Failed to load {file_path}: {e}")

    if failed_files and verbose:
        print(f"Warning: {len(failed_files)} files failed to load")
    if not frames:
        raise ValueError(f"None of the {len(files)} game log files could be loaded")

    games = pd.concat(frames, ignore_index=True)
    before = len(games)
    # a row exported into two season files keeps the season of the first file
    games = games.drop_duplicates(subset=GAME_LOG_COLUMNS, keep='first')
    if verbose and len(games) < before:
        print(f"Dropped {before - len(games)} duplicate rows")

    return games.sort_values(['player', 'date'], kind='mergesort').reset_index(drop=True)


def attach_roster(games: pd.DataFrame, roster: pd.DataFrame, how: str = 'left', verbose: bool = False) -> pd.DataFrame:
    """Join roster attributes (team, position, ...) onto game rows by player name."""
    require_columns(games, ['player'], context='games')
    require_columns(roster, ROSTER_COLUMNS, context='roster')

    unmatched = sorted(set(games['player']) - set(roster['player']))
    if unmatched:
        warnings.warn(f"No roster entry for: {', '.join(unmatched)}")
    merged = games.merge(roster, on='player', how=how, validate='many_to_one')
    if verbose:
        print(f"Joined roster: {len(merged)} rows, {merged['player'].nunique()} players")
    return merged


def attach_schedule(games: pd.DataFrame, schedule: pd.DataFrame) -> pd.DataFrame:
    """Join opponent, venue and result onto game rows by team and date."""
    require_columns(games, ['team', 'date'], context='games')
    require_columns(schedule, SCHEDULE_COLUMNS, context='schedule')

    schedule = schedule.copy()
    schedule['date'] = pd.to_datetime(schedule['date'])
    return games.merge(schedule, on=['team', 'date'], how='left', validate='many_to_one')
