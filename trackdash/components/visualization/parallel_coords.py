"""Parallel coordinates: multivariate profile of the most popular tracks.

Each polyline is one track across the PARALLEL_DIMENSIONS axes. Every axis is
min-max scaled to [0, 1] independently; a constant axis is padded by +/-1 so
its lines sit in the middle instead of collapsing onto the bottom edge.
"""

from typing import Dict, List, Optional, Set, Tuple

import numpy as np
import pandas as pd
import plotly.graph_objects as go
from sklearn.preprocessing import MinMaxScaler

from trackdash.components.visualization.color_palette import album_type_color
from trackdash.pipeline.aggregate import count_by_album_type
from trackdash.pipeline.config import PARALLEL_DIMENSIONS, PARALLEL_MAX_LINES, TRANSITION_MS
from trackdash.pipeline.preprocess import TrackRecord, records_to_dataframe
from trackdash.pipeline.selection import SelectionState, filter_records, is_highlighted

BASE_OPACITY = 0.22
HIGHLIGHT_OPACITY = 0.85
FADED_OPACITY = 0.06


def parallel_subset(
    records: List[TrackRecord],
    state: SelectionState,
    top: Optional[Set[str]] = None,
    max_lines: int = PARALLEL_MAX_LINES,
) -> List[TrackRecord]:
    """Most popular tracks matching the selection that have a duration."""
    rows = [r for r in records if r.duration_min is not None]
    rows = filter_records(rows, state, top=top)
    rows = sorted(rows, key=lambda r: r.track_popularity, reverse=True)
    return rows[:max_lines]


def axis_domains(df: pd.DataFrame, dims: Tuple[str, ...] = PARALLEL_DIMENSIONS) -> Dict[str, Tuple[float, float]]:
    """(min, max) per dimension, padded when the column is constant or empty."""
    domains = {}
    for dim in dims:
        col = pd.to_numeric(df[dim], errors="coerce").dropna() if dim in df else pd.Series(dtype=float)
        if col.empty:
            domains[dim] = (0.0, 1.0)
            continue
        lo, hi = float(col.min()), float(col.max())
        domains[dim] = (lo - 1, hi + 1) if lo == hi else (lo, hi)
    return domains


def scale_dimensions(
    df: pd.DataFrame,
    domains: Dict[str, Tuple[float, float]],
    dims: Tuple[str, ...] = PARALLEL_DIMENSIONS,
) -> np.ndarray:
    """Scale each dimension into [0, 1] using the given domains."""
    lows = [domains[d][0] for d in dims]
    highs = [domains[d][1] for d in dims]

    scaler = MinMaxScaler()
    scaler.fit(np.array([lows, highs], dtype=float))

    values = df[list(dims)].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
    if len(values) == 0:
        return np.empty((0, len(dims)))
    return scaler.transform(values)


def line_style(r: TrackRecord, state: SelectionState) -> Tuple[float, float]:
    """(opacity, width) for one polyline."""
    if state.hovered_id is None:
        return BASE_OPACITY, 1.0
    if is_highlighted(state, r.track_id):
        return HIGHLIGHT_OPACITY, 2.0
    return FADED_OPACITY, 1.0


def build_parallel_figure(
    records: List[TrackRecord],
    state: Optional[SelectionState] = None,
    height: int = 420,
) -> go.Figure:
    """Create the parallel coordinates plot.

    Args:
        records: Tracks to draw (see parallel_subset)
        state: Current selection, used for hover emphasis
        height: Figure height in pixels

    Returns:
        Plotly Figure object
    """
    state = state or SelectionState()
    dims = PARALLEL_DIMENSIONS
    xs = list(range(len(dims)))

    df = records_to_dataframe(records)
    domains = axis_domains(df, dims)
    scaled = scale_dimensions(df, domains, dims)

    fig = go.Figure()

    # Highlighted line drawn last so it sits on top
    order = sorted(range(len(records)), key=lambda i: is_highlighted(state, records[i].track_id))
    for i in order:
        r = records[i]
        opacity, width = line_style(r, state)
        fig.add_trace(
            go.Scatter(
                x=xs,
                y=scaled[i],
                mode="lines",
                line=dict(color=album_type_color(r.album_type), width=width),
                opacity=opacity,
                name=r.album_type,
                hovertemplate=f"<b>{r.track_name}</b><br>{r.artist_name}<extra></extra>",
                showlegend=False,
            )
        )

    # Legend entries only
    for album_type in count_by_album_type(records).index:
        fig.add_trace(
            go.Scatter(
                x=[None],
                y=[None],
                mode="lines",
                name=album_type,
                line=dict(color=album_type_color(album_type), width=4),
                legendgroup="album_type",
                legendgrouptitle_text="album_type",
            )
        )

    # Axis lines with min/max labels in original units
    for x, dim in zip(xs, dims):
        lo, hi = domains[dim]
        fig.add_shape(type="line", x0=x, x1=x, y0=0, y1=1, line=dict(color="#dddddd", width=1))
        fig.add_annotation(x=x, y=1.02, text=f"{hi:.1f}", showarrow=False, yanchor="bottom", font=dict(size=9))
        fig.add_annotation(x=x, y=-0.02, text=f"{lo:.1f}", showarrow=False, yanchor="top", font=dict(size=9))

    fig.update_xaxes(
        tickmode="array",
        tickvals=xs,
        ticktext=list(dims),
        tickangle=-20,
        range=[-0.4, len(dims) - 0.6],
        showgrid=False,
        zeroline=False,
    )
    fig.update_yaxes(visible=False, range=[-0.1, 1.1])
    fig.update_layout(
        height=height,
        margin=dict(t=20, l=10, r=10, b=10),
        plot_bgcolor="white",
        legend=dict(x=0.72, y=1.0, font=dict(size=9), bgcolor="rgba(255,255,255,0.8)"),
        transition=dict(duration=TRANSITION_MS, easing="cubic-in-out"),
    )
    return fig
