# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

from .config import GalleryConfig, load_config
from .export import save_figure
from .theme import apply_theme
from .gallery import ChartGallery, GallerySection, build_default_gallery

__version__ = '0.1.0'

__all__ = [
    'GalleryConfig',
    'load_config',
    'save_figure',
    'apply_theme',
    'ChartGallery',
    'GallerySection',
    'build_default_gallery',
]
