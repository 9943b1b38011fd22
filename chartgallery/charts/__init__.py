# Licensed under the MIT License.
# Copyright (c) Microsoft Corporation.

from .strip import plot_strip, category_order
from .bean import plot_bean
from .density import plot_density, plot_ridgeline, density_curve
from .annotate import Annotation, annotate_extreme, plot_annotated_line
from .facets import plot_faceted, FACET_KINDS
from .dumbbell import plot_dumbbell
from .lollipop import plot_lollipop
from .calendar import plot_calendar_heatmap, calendar_matrix

__all__ = [
    'plot_strip',
    'category_order',
    'plot_bean',
    'plot_density',
    'plot_ridgeline',
    'density_curve',
    'Annotation',
    'annotate_extreme',
    'plot_annotated_line',
    'plot_faceted',
    'FACET_KINDS',
    'plot_dumbbell',
    'plot_lollipop',
    'plot_calendar_heatmap',
    'calendar_matrix',
]
