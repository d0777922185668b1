#!/usr/bin/env python3
"""Load both CSV sources and build the canonical dataset.

The two files are read concurrently and joined before the merge/normalize
pass runs. Loading is all-or-nothing: if either source fails the whole load
fails, with no retry and no partial result.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from trackdash.pipeline.config import REQUIRED_COLUMNS
from trackdash.pipeline.merge import build_dataset
from trackdash.pipeline.preprocess import TrackRecord

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """A data source could not be read."""

    def __init__(self, source: str, path: str, reason: str):
        self.source = source
        self.path = path
        super().__init__(f"Failed to load source {source} ({path}): {reason}")


class LoadStatus(Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class LoadResult:
    status: LoadStatus
    records: List[TrackRecord] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.READY

    @property
    def message(self) -> str:
        """User-facing status line."""
        if self.status is LoadStatus.LOADING:
            return "Loading…"
        if self.status is LoadStatus.FAILED:
            return f"Load failed: {self.error}"
        return f"Loaded {len(self.records):,} tracks"


def load_csv(path: str) -> List[Dict[str, Any]]:
    """Read a CSV file as raw text rows.

    Args:
        path: CSV file path

    Returns:
        One dict per row in file order; empty cells are None
    """
    df = pd.read_csv(path, dtype=str)

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        logger.warning(f"{path} is missing columns {missing}; values will fall back")

    df = df.astype(object).where(df.notna(), None)
    rows = df.to_dict(orient="records")
    logger.info(f"Loaded {len(rows)} rows from {path}")
    return rows


def _read_source(source: str, path: str) -> List[Dict[str, Any]]:
    if not Path(path).exists():
        raise DataLoadError(source, path, "file not found")
    try:
        return load_csv(path)
    except (OSError, ValueError) as e:
        raise DataLoadError(source, path, str(e)) from e


def load_sources(path_a: str, path_b: str) -> List[TrackRecord]:
    """Read both sources concurrently, then merge (A wins) and normalize.

    Raises:
        DataLoadError: If either source cannot be read
    """
    raw: Dict[str, List[Dict[str, Any]]] = {}

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = {
            pool.submit(_read_source, "A", path_a): "A",
            pool.submit(_read_source, "B", path_b): "B",
        }
        for fut in as_completed(futures):
            raw[futures[fut]] = fut.result()

    records = build_dataset(raw["A"], raw["B"])
    logger.info(f"✓ Canonical dataset: {len(records)} tracks")
    return records


def load_dashboard_data(
    path_a: str,
    path_b: str,
    loader: Callable[[str, str], List[TrackRecord]] = load_sources,
) -> LoadResult:
    """Load the dataset, reporting failure as a FAILED result instead of raising.

    Args:
        path_a: Preferred source
        path_b: Fallback source
        loader: Reads and merges both sources. A caching wrapper can be passed
            here; since failures surface as DataLoadError, only successful
            loads end up cached.
    """
    try:
        records = loader(path_a, path_b)
    except DataLoadError as e:
        logger.error(str(e))
        return LoadResult(status=LoadStatus.FAILED, error=str(e))
    return LoadResult(status=LoadStatus.READY, records=records)
