"""Helpers for reading Streamlit plotly_chart selection events.

st.plotly_chart(..., on_select="rerun") returns a dict-like state of the form
{"selection": {"points": [...], "point_indices": [...], ...}}. Each point
carries x/y and, when the trace defines it, customdata.
"""

from typing import Any, Dict, List, Optional, Tuple


def event_points(event: Any) -> List[Dict[str, Any]]:
    """Return the selected points of a chart event (empty if none)."""
    if not event or not hasattr(event, "get"):
        return []
    selection = event.get("selection") or {}
    return list(selection.get("points") or [])


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def event_signature(event: Any) -> Optional[Tuple]:
    """Hashable summary of an event, used to ignore re-delivered events on rerun."""
    points = event_points(event)
    if not points:
        return None
    return tuple(
        (p.get("curve_number"), p.get("point_index", p.get("point_number")), _freeze(p.get("customdata")))
        for p in points
    )
