# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

import yaml
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = ROOT / 'configs' / 'gallery.yaml'


@dataclass
class GalleryConfig:
    output_dir: str = 'gallery_out'
    formats: List[str] = field(default_factory=lambda: ['png'])
    dpi: int = 150
    palette: str = 'husl'
    figsize: Tuple[float, float] = (10, 6)
    game_logs_dir: Optional[str] = None
    focus_player: str = 'Avery Brooks'
    rolling_window: int = 5
    sections: Optional[List[str]] = None
    verbose: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GalleryConfig':
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")
        if 'figsize' in data and data['figsize'] is not None:
            data['figsize'] = tuple(data['figsize'])
        if isinstance(data.get('formats'), str):
            data['formats'] = [data['formats']]
        cfg = cls(**data)
        if cfg.rolling_window < 1:
            raise ValueError(f"rolling_window must be >= 1, got {cfg.rolling_window}")
        return cfg

    def with_overrides(self, **overrides) -> 'GalleryConfig':
        """Copy of this config with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config(path: Union[str, Path, None] = None) -> GalleryConfig:
    """
    Load a gallery config from YAML.

    With no path, the repository's configs/gallery.yaml is used if present,
    otherwise the defaults.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return GalleryConfig()
        path = DEFAULT_CONFIG_PATH
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return GalleryConfig.from_dict(data)
