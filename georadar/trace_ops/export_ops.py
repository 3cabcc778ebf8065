"""
CSV export of a trace file's geo-referenced logical entries.

Pure functions that receive the geo-data sequence (never raw sample
buffers) and the along-path distances, as exposed by TraceFile.
"""

import csv
from pathlib import Path
import logging

import numpy as np

logger = logging.getLogger(__name__)


def write_geo_data_profile(
    csv_path: Path,
    geo_data: list,
    distances: np.ndarray | None = None,
    title: str = "",
    nodata: int = -999
) -> Path:
    """
    Write one row per logical entry.

    Columns: logical index, trace index (nodata for synthetic entries),
    latitude, longitude, distance along path.

    Notes
    -----
    - Coordinate precision: 8 decimal places
    - Distance precision: 3 decimal places
    - Missing values: written as nodata value (default -999)
    """
    csv_path = Path(csv_path)
    if distances is not None:
        distances = np.asarray(distances)
        if distances.ndim != 1:
            logger.error(f"Distances must be 1D array, got shape {distances.shape}")
            raise ValueError(f"Distances must be 1D array, got shape {distances.shape}")
        if len(distances) != len(geo_data):
            logger.error(f"Length mismatch: {len(geo_data)} entries, distances has {len(distances)} values")
            raise ValueError(f"Length mismatch: {len(geo_data)} entries, distances has {len(distances)} values")

    with open(csv_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        if title:
            writer.writerow([title])
        writer.writerow(['index', 'trace', 'latitude', 'longitude', 'distance'])
        for i, entry in enumerate(geo_data):
            trace_index = getattr(entry, "trace_index", None)
            trace_str = str(nodata) if trace_index is None else str(trace_index)
            dist = None if distances is None else distances[i]
            writer.writerow([
                i,
                trace_str,
                _format_value(entry.latitude, nodata, 8),
                _format_value(entry.longitude, nodata, 8),
                _format_value(dist, nodata, 3),
            ])

    logger.info(f"Exported geo-data profile to .csv: {csv_path.name} ({len(geo_data)} entries)")
    return csv_path


def _format_value(value, nodata, digits):
    if value is None or np.isnan(value):
        return str(nodata)
    return f"{float(value):.{digits}f}"
