"""Focus scatter: track popularity vs. artist followers (log10).

Marker color encodes album type and marker symbol encodes the explicit flag
(triangle = explicit). The highlighted track stays opaque while every other
point fades.
"""

import math
from typing import Any, List, Optional, Set

import plotly.graph_objects as go

from trackdash.components.visualization.color_palette import (
    GRID_COLOR,
    album_type_color,
)
from trackdash.components.visualization.events import event_points
from trackdash.pipeline.aggregate import count_by_album_type
from trackdash.pipeline.config import SCATTER_MAX_POINTS, TRANSITION_MS
from trackdash.pipeline.preprocess import TrackRecord
from trackdash.pipeline.selection import SelectionState, filter_records, is_highlighted

POINT_TRACE_NAME = "tracks"
BASE_OPACITY = 0.65
HIGHLIGHT_OPACITY = 0.95
FADED_OPACITY = 0.08


def _is_plottable(r: TrackRecord) -> bool:
    return math.isfinite(r.followers_log) and math.isfinite(r.track_popularity)


def scatter_subset(
    records: List[TrackRecord],
    state: SelectionState,
    top: Optional[Set[str]] = None,
    max_points: int = SCATTER_MAX_POINTS,
) -> List[TrackRecord]:
    """Tracks shown in the scatter for the current selection (capped)."""
    rows = [r for r in records if _is_plottable(r)]
    rows = filter_records(rows, state, top=top)
    return rows[:max_points]


def build_hover_text(r: TrackRecord) -> str:
    """Build hover text for a single track.

    Args:
        r: Track to describe

    Returns:
        HTML-formatted hover text
    """
    year = r.release_year if r.release_year is not None else "?"
    return (
        f"<b>{r.track_name or '(unknown track)'}</b><br>"
        f"Artist: {r.artist_name or '(unknown)'}<br>"
        f"Popularity: {r.track_popularity:g}<br>"
        f"Followers(log10): {r.followers_log:.2f}<br>"
        f"Year: {year}<br>"
        f"Genre: {r.genre_top}"
    )


def legend_album_types(records: List[TrackRecord], limit: int = 6) -> List[str]:
    """Album types, most frequent first, capped for legend space."""
    return list(count_by_album_type(records).index[:limit])


def point_opacity(r: TrackRecord, state: SelectionState) -> float:
    if state.hovered_id is None:
        return BASE_OPACITY
    return HIGHLIGHT_OPACITY if is_highlighted(state, r.track_id) else FADED_OPACITY


def build_scatter_figure(
    records: List[TrackRecord],
    state: Optional[SelectionState] = None,
    height: int = 720,
) -> go.Figure:
    """Create the focus scatter plot.

    Args:
        records: Tracks to plot (already filtered, see scatter_subset)
        state: Current selection, used for hover emphasis
        height: Figure height in pixels

    Returns:
        Plotly Figure object
    """
    state = state or SelectionState()
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=[r.followers_log for r in records],
            y=[r.track_popularity for r in records],
            mode="markers",
            name=POINT_TRACE_NAME,
            marker=dict(
                size=8,
                color=[album_type_color(r.album_type) for r in records],
                symbol=["triangle-up" if r.explicit else "circle" for r in records],
                opacity=[point_opacity(r, state) for r in records],
                line=dict(
                    color="white",
                    width=[1.5 if is_highlighted(state, r.track_id) else 0.5 for r in records],
                ),
            ),
            customdata=[r.track_id for r in records],
            text=[build_hover_text(r) for r in records],
            hovertemplate="%{text}<extra></extra>",
            showlegend=False,
        )
    )

    # Legend entries only (no data)
    for album_type in legend_album_types(records):
        fig.add_trace(
            go.Scatter(
                x=[None],
                y=[None],
                mode="markers",
                name=album_type,
                legendgroup="album_type",
                legendgrouptitle_text="album_type",
                marker=dict(size=10, color=album_type_color(album_type), symbol="square"),
            )
        )
    for label, symbol in (("false", "circle"), ("true", "triangle-up")):
        fig.add_trace(
            go.Scatter(
                x=[None],
                y=[None],
                mode="markers",
                name=label,
                legendgroup="explicit",
                legendgrouptitle_text="explicit",
                marker=dict(size=10, color="#666666", symbol=symbol, line=dict(color="#333333", width=1)),
            )
        )

    fig.update_xaxes(title_text="Artist Followers (log10)", gridcolor=GRID_COLOR, zeroline=False)
    fig.update_yaxes(title_text="Track Popularity", range=[0, 100], gridcolor=GRID_COLOR, zeroline=False)
    fig.update_layout(
        height=height,
        margin=dict(t=10, l=10, r=10, b=10),
        clickmode="event+select",
        plot_bgcolor="white",
        legend=dict(x=0.01, y=0.99, bgcolor="rgba(255,255,255,0.8)"),
        transition=dict(duration=TRANSITION_MS, easing="cubic-in-out"),
    )
    return fig


def hovered_track_from_event(event: Any) -> Optional[str]:
    """Track id of the clicked scatter point, or None when nothing is selected."""
    for point in event_points(event):
        custom = point.get("customdata")
        if isinstance(custom, (list, tuple)):
            custom = custom[0] if custom else None
        if custom:
            return str(custom)
    return None
