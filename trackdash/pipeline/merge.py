#!/usr/bin/env python3
"""Merge two track sources by track_id.

Source A overrides source B field by field; fields only B supplies are
retained. Merging happens on raw rows (before normalization) so that a
column missing from A does not get coerced to a fallback that would then
shadow B's real value.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from trackdash.pipeline.config import KEY_COLUMN
from trackdash.pipeline.preprocess import TrackRecord, is_absent, preprocess_tracks

logger = logging.getLogger(__name__)


def clean_raw_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop absent cells so the row only carries what its source supplied."""
    return {k: v for k, v in row.items() if not is_absent(v)}


def _row_key(row: Mapping[str, Any], key: str) -> Optional[str]:
    value = row.get(key)
    if is_absent(value):
        return None
    value = str(value).strip()
    return value or None


def merge_rows(
    rows_a: Iterable[Mapping[str, Any]],
    rows_b: Iterable[Mapping[str, Any]],
    key: str = KEY_COLUMN,
) -> Dict[str, Dict[str, Any]]:
    """Merge two row sequences into a key -> row mapping.

    Args:
        rows_a: Preferred rows (their fields win)
        rows_b: Fallback rows (seed the mapping)
        key: Column holding the unique identifier

    Returns:
        New mapping of identifier to merged row. Iteration order is insertion
        order and should not be relied on.
    """
    merged: Dict[str, Dict[str, Any]] = {}
    skipped = 0

    for row in rows_b:
        k = _row_key(row, key)
        if k is None:
            skipped += 1
            continue
        merged[k] = dict(row)

    for row in rows_a:
        k = _row_key(row, key)
        if k is None:
            skipped += 1
            continue
        merged[k] = {**merged.get(k, {}), **row}

    if skipped:
        logger.warning(f"Skipped {skipped} rows without a {key}")
    logger.info(f"Merged into {len(merged)} unique tracks")
    return merged


def build_dataset(
    rows_a: Iterable[Mapping[str, Any]],
    rows_b: Iterable[Mapping[str, Any]],
    current_year: Optional[int] = None,
) -> List[TrackRecord]:
    """Clean, merge and normalize both sources into the canonical dataset."""
    merged = merge_rows(
        (clean_raw_row(r) for r in rows_a),
        (clean_raw_row(r) for r in rows_b),
    )
    return preprocess_tracks(merged.values(), current_year)
