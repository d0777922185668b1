"""Track Metadata Dashboard - Linked Views

Main entry point for exploring the merged track dataset:

- Focus: track popularity vs. artist followers (scatter)
- Overview: tracks per release year x primary genre (heatmap)
- Advanced: multivariate profile of the most popular tracks (parallel coordinates)

Click a heatmap cell to filter the scatter and parallel coordinates by
(year, genre); click it again to clear. Click a scatter point to highlight
that track in every view.

Run with:
    streamlit run trackdash/interactive_dashboard.py
"""

import logging
import sys
from pathlib import Path
from typing import List

# Add project root to path
current_dir = Path(__file__).resolve().parent
project_root = current_dir.parent
if str(project_root) not in sys.path:
    sys.path.append(str(project_root))

import streamlit as st

from trackdash.components import (
    HEATMAP_CHART_KEY,
    SCATTER_CHART_KEY,
    SESSION_LAST_HEATMAP_EVENT,
    SESSION_LAST_SCATTER_EVENT,
    SESSION_SELECTION,
)
from trackdash.components.visualization import heatmap, parallel_coords, scatter
from trackdash.components.visualization.events import event_signature
from trackdash.components.widgets import track_inspector
from trackdash.pipeline import config
from trackdash.pipeline.aggregate import build_year_genre_matrix
from trackdash.pipeline.loader import LoadResult, LoadStatus, load_dashboard_data, load_sources
from trackdash.pipeline.preprocess import TrackRecord
from trackdash.pipeline.selection import (
    INITIAL_STATE,
    SelectionState,
    clear_selection,
    hover,
    select_cell,
)

logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title="Track Metadata Dashboard",
    page_icon="🎵",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS - Compact design with tighter padding
st.markdown(
    """
<style>
    .main-header {
        font-size: 2rem;
        font-weight: bold;
        color: #1DB954;
        margin-bottom: 0.25rem;
    }

    /* Card titles above each view */
    .view-title {
        font-size: 0.95rem;
        font-weight: 700;
        margin-bottom: 0;
    }

    /* Reduce container padding */
    .block-container {
        padding-top: 1.5rem;
        padding-bottom: 1rem;
        padding-left: 1.5rem;
        padding-right: 1.5rem;
    }

    /* Less rounded plotly charts */
    .js-plotly-plot {
        border-radius: 0.25rem;
    }
</style>
""",
    unsafe_allow_html=True,
)


def setup_logging():
    """Configure console logging once per process."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


@st.cache_data(show_spinner=False)
def load_records(path_a: str, path_b: str) -> List[TrackRecord]:
    return load_sources(path_a, path_b)


def load_data(path_a: str, path_b: str) -> LoadResult:
    # DataLoadError propagates out of load_records, so failures are never cached
    return load_dashboard_data(path_a, path_b, loader=load_records)


def get_selection() -> SelectionState:
    if SESSION_SELECTION not in st.session_state:
        st.session_state[SESSION_SELECTION] = INITIAL_STATE
    return st.session_state[SESSION_SELECTION]


def set_selection(state: SelectionState) -> None:
    st.session_state[SESSION_SELECTION] = state


def heatmap_key(state: SelectionState) -> str:
    # A fresh widget per selection, so clicking the active cell again is a new event
    return f"{HEATMAP_CHART_KEY}_{state.selected_year}_{state.selected_genre}"


def scatter_key(state: SelectionState) -> str:
    return f"{SCATTER_CHART_KEY}_{state.hovered_id}"


def _new_event(chart_key: str, last_key: str):
    """Return the chart event if it has not been applied yet."""
    event = st.session_state.get(chart_key)
    signature = event_signature(event)
    if signature is None:
        return None
    if st.session_state.get(last_key) == (chart_key, signature):
        return None
    st.session_state[last_key] = (chart_key, signature)
    return event


def apply_chart_events() -> None:
    """Apply pending heatmap/scatter clicks to the selection state."""
    state = get_selection()

    event = _new_event(heatmap_key(state), SESSION_LAST_HEATMAP_EVENT)
    cell = heatmap.selected_cell_from_event(event) if event else None
    if cell is not None:
        state = select_cell(state, *cell)
        logger.debug(f"Heatmap cell selected: {cell} -> {state}")

    event = _new_event(scatter_key(state), SESSION_LAST_SCATTER_EVENT)
    track_id = scatter.hovered_track_from_event(event) if event else None
    if track_id is not None:
        state = hover(state, track_id)

    set_selection(state)


def view_title(text: str) -> None:
    st.markdown(f'<div class="view-title">{text}</div>', unsafe_allow_html=True)


def main():
    setup_logging()

    st.markdown('<div class="main-header">🎵 Track Metadata Dashboard</div>', unsafe_allow_html=True)

    # Sidebar: Settings
    with st.sidebar:
        st.header("⚙️ Settings")
        path_a = st.text_input(
            "Source A (preferred)",
            value=config.SOURCE_A_PATH,
            help="Fields from this file win when both sources describe the same track_id",
        )
        path_b = st.text_input(
            "Source B (fallback)",
            value=config.SOURCE_B_PATH,
            help="Fills in fields missing from source A",
        )

    with st.spinner(LoadResult(status=LoadStatus.LOADING).message):
        result = load_data(path_a, path_b)

    if not result.ok:
        st.error(f"❌ {result.message}")
        st.info("Check the source paths in the sidebar (or TRACKDASH_SOURCE_A / TRACKDASH_SOURCE_B).")
        st.stop()

    records = result.records
    st.caption(result.message)

    apply_chart_events()
    state = get_selection()

    matrix = build_year_genre_matrix(records, k=config.TOP_K_GENRES)
    scatter_rows = scatter.scatter_subset(records, state, top=matrix.top)
    parallel_rows = parallel_coords.parallel_subset(records, state, top=matrix.top)

    if track_inspector.render_selection_summary(state, len(scatter_rows)):
        set_selection(hover(clear_selection(state), None))
        st.rerun()

    left, right = st.columns([2, 1])

    with left:
        view_title("Focus: Track Popularity vs. Artist Followers")
        st.plotly_chart(
            scatter.build_scatter_figure(scatter_rows, state),
            use_container_width=True,
            key=scatter_key(state),
            on_select="rerun",
            selection_mode="points",
        )
        st.caption(
            "Each mark is a track. Hover shows a tooltip; click a point to highlight it "
            "(linked to the parallel coordinates). Click a heatmap cell to filter this view "
            "by release year and genre."
        )

        highlighted = track_inspector.find_track(records, state.hovered_id)
        if highlighted:
            track_inspector.render_track_details(highlighted)

    with right:
        view_title("Overview: Tracks by Year and Genre (Count)")
        st.plotly_chart(
            heatmap.build_heatmap_figure(matrix, state),
            use_container_width=True,
            key=heatmap_key(state),
            on_select="rerun",
            selection_mode="points",
        )
        st.caption(
            f"Number of tracks in each release year x primary genre (Top {config.TOP_K_GENRES} + Other). "
            "Click a cell to filter, click it again to clear."
        )

        view_title("Advanced: Multivariate Profile (Parallel Coordinates)")
        st.plotly_chart(
            parallel_coords.build_parallel_figure(parallel_rows, state),
            use_container_width=True,
        )
        st.caption(
            f"Each polyline is one of the {config.PARALLEL_MAX_LINES} most popular tracks in the "
            "current filter. The highlighted scatter track is emphasized."
        )


if __name__ == "__main__":
    main()
