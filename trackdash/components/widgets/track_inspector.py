"""Track inspector widgets - details of the highlighted track and the active filter.

This module provides the sidebar selection summary and the detail card shown
under the scatter when a track is highlighted.
"""

import streamlit as st
from typing import Dict, List, Optional

from trackdash.components.visualization.color_palette import album_type_color
from trackdash.pipeline.preprocess import TrackRecord
from trackdash.pipeline.selection import SelectionState, has_cell_selection


def find_track(records: List[TrackRecord], track_id: Optional[str]) -> Optional[TrackRecord]:
    """Look up a track by id (None if absent)."""
    if not track_id:
        return None
    return next((r for r in records if r.track_id == track_id), None)


def selection_label(state: SelectionState) -> str:
    if not has_cell_selection(state):
        return "All tracks"
    return f"{state.selected_genre} · {state.selected_year}"


def render_selection_summary(state: SelectionState, n_visible: int) -> bool:
    """Render the current filter in the sidebar.

    Args:
        state: Current selection
        n_visible: Number of tracks in the filtered scatter

    Returns:
        True if the user clicked "Clear selection"
    """
    st.sidebar.markdown("---")
    st.sidebar.subheader("🎯 Selection")
    st.sidebar.metric("Filter", selection_label(state))
    st.sidebar.metric("Tracks in view", n_visible)

    return st.sidebar.button(
        "✖️ Clear selection",
        use_container_width=True,
        disabled=not has_cell_selection(state) and state.hovered_id is None,
    )


def track_detail_rows(track: TrackRecord) -> Dict[str, str]:
    duration = f"{track.duration_min:.2f} min" if track.duration_min is not None else "?"
    return {
        "Artist": track.artist_name or "(unknown)",
        "Popularity": f"{track.track_popularity:g}",
        "Artist popularity": f"{track.artist_popularity:g}",
        "Followers": f"{track.artist_followers:,}",
        "Followers (log10)": f"{track.followers_log:.2f}",
        "Year": str(track.release_year) if track.release_year is not None else "?",
        "Genre": track.genre_top,
        "Album type": track.album_type,
        "Duration": duration,
        "Explicit": "yes" if track.explicit else "no",
    }


def render_track_details(track: TrackRecord) -> None:
    """Render detailed view of the highlighted track.

    Args:
        track: Highlighted track
    """
    st.markdown("---")
    st.markdown(
        f"**🎵 {track.track_name or '(unknown track)'}** "
        f"<span style='color:{album_type_color(track.album_type)}'>■</span>",
        unsafe_allow_html=True,
    )

    details = track_detail_rows(track)
    col1, col2 = st.columns(2)
    items = list(details.items())
    half = (len(items) + 1) // 2

    with col1:
        for label, value in items[:half]:
            st.write(f"{label}: {value}")

    with col2:
        for label, value in items[half:]:
            st.write(f"{label}: {value}")
