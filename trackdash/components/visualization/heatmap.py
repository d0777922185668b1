"""Overview heatmap: track counts per release year x primary genre.

Cells are drawn by a go.Heatmap trace. A transparent marker layer sits on top
of the cells and carries (year, genre, count) as customdata, which is what
hover tooltips and click selection read.
"""

from typing import Any, Optional, Tuple

import plotly.graph_objects as go

from trackdash.components.visualization.color_palette import (
    DIM_OVERLAY_COLOR,
    HEATMAP_COLORSCALE,
    SELECTION_COLOR,
)
from trackdash.components.visualization.events import event_points
from trackdash.pipeline.aggregate import YearGenreMatrix
from trackdash.pipeline.config import TOP_K_GENRES
from trackdash.pipeline.selection import SelectionState, has_cell_selection, is_selected_cell

CELL_TRACE_NAME = "cells"


def _year_tick_step(n_years: int) -> int:
    """Show every Nth year label when there are many years."""
    return -(-n_years // 10) if n_years > 12 else 1


def build_heatmap_figure(
    matrix: YearGenreMatrix,
    state: Optional[SelectionState] = None,
    height: int = 420,
) -> go.Figure:
    """Create the year x genre heatmap.

    Args:
        matrix: Aggregated counts from build_year_genre_matrix
        state: Current selection; the selected cell is outlined and the
            rest dimmed
        height: Figure height in pixels

    Returns:
        Plotly Figure object
    """
    state = state or SelectionState()
    years = [str(y) for y in matrix.years]
    grid = matrix.to_grid()

    fig = go.Figure()
    fig.add_trace(
        go.Heatmap(
            z=grid,
            x=years,
            y=matrix.genres,
            colorscale=HEATMAP_COLORSCALE,
            zmin=0,
            zmax=matrix.max_count,
            xgap=1,
            ygap=1,
            hoverinfo="skip",
            colorbar=dict(title="Count", thickness=10, len=0.6),
        )
    )

    if has_cell_selection(state):
        dim = [
            [None if is_selected_cell(state, y, g) else 1 for y in matrix.years]
            for g in matrix.genres
        ]
        fig.add_trace(
            go.Heatmap(
                z=dim,
                x=years,
                y=matrix.genres,
                colorscale=[[0, DIM_OVERLAY_COLOR], [1, DIM_OVERLAY_COLOR]],
                showscale=False,
                xgap=1,
                ygap=1,
                hoverinfo="skip",
            )
        )
        if state.selected_genre in matrix.genres and state.selected_year in matrix.years:
            xi = matrix.years.index(state.selected_year)
            yi = matrix.genres.index(state.selected_genre)
            fig.add_shape(
                type="rect",
                x0=xi - 0.5,
                x1=xi + 0.5,
                y0=yi - 0.5,
                y1=yi + 0.5,
                line=dict(color=SELECTION_COLOR, width=2.5),
            )

    # Hit layer for tooltips and clicks
    cell_x, cell_y, custom = [], [], []
    for g in matrix.genres:
        for y in matrix.years:
            cell_x.append(str(y))
            cell_y.append(g)
            custom.append([y, g, matrix.count(g, y)])

    fig.add_trace(
        go.Scatter(
            x=cell_x,
            y=cell_y,
            mode="markers",
            name=CELL_TRACE_NAME,
            marker=dict(symbol="square", size=14, opacity=0),
            selected=dict(marker=dict(opacity=0)),
            unselected=dict(marker=dict(opacity=0)),
            customdata=custom,
            hovertemplate=(
                "<b>%{customdata[1]}</b><br>"
                "Year: <b>%{customdata[0]}</b><br>"
                "Count: <b>%{customdata[2]}</b><br>"
                "<i>(Click to filter)</i><extra></extra>"
            ),
            showlegend=False,
        )
    )

    step = _year_tick_step(len(years))
    fig.update_xaxes(
        type="category",
        categoryorder="array",
        categoryarray=years,
        tickmode="array",
        tickvals=years[::step],
        tickangle=-45,
        title_text="Release Year",
        showgrid=False,
    )
    fig.update_yaxes(
        type="category",
        categoryorder="array",
        categoryarray=matrix.genres,
        autorange="reversed",
        title_text=f"Primary Genre (Top {TOP_K_GENRES} + Other)",
        showgrid=False,
    )
    fig.update_layout(
        height=height,
        margin=dict(t=10, l=10, r=10, b=10),
        clickmode="event+select",
        dragmode=False,
        plot_bgcolor="white",
    )
    return fig


def selected_cell_from_event(event: Any) -> Optional[Tuple[int, str]]:
    """Extract the clicked (year, genre) from a Streamlit chart selection event.

    Returns None when the event carries no cell point.
    """
    for point in event_points(event):
        custom = point.get("customdata")
        if custom and len(custom) >= 2:
            return int(custom[0]), str(custom[1])
        if point.get("x") is not None and point.get("y") is not None:
            return int(point["x"]), str(point["y"])
    return None
