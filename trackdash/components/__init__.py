"""Reusable components for the track dashboard.

This package contains modular components organized by layer:
- visualization: Plotly figure builders for the three linked views
- widgets: Reusable UI widgets (track inspector, selection summary)
"""

# Session state keys (constants for consistency)
SESSION_SELECTION = "selection"
SESSION_LAST_HEATMAP_EVENT = "last_heatmap_event"
SESSION_LAST_SCATTER_EVENT = "last_scatter_event"

# Plotly chart widget keys
HEATMAP_CHART_KEY = "heatmap_chart"
SCATTER_CHART_KEY = "scatter_chart"

__version__ = "0.1.0"
