"""
Along-path distance of a trace file's logical entries.

Distances are cumulative, in metres, one value per logical entry, and are
stored on the file as ``trace_file.distances``.
"""
import logging

import numpy as np
from scipy.ndimage import uniform_filter1d

from ..config import con_dict  # live shared dict
from .coordinates import haversine_m, position_array

logger = logging.getLogger(__name__)


def calculate_distances(trace_file) -> np.ndarray:
    """
    Compute cumulative distance per logical entry from current positions.

    The first entry is at 0. A step touching a missing position counts as
    zero length.
    """
    positions = position_array(trace_file)
    n = positions.shape[0]
    steps = np.zeros(n, dtype=float)
    if n > 1:
        d = haversine_m(positions[:-1, 0], positions[:-1, 1],
                        positions[1:, 0], positions[1:, 1])
        steps[1:] = np.nan_to_num(d, nan=0.0)
    trace_file.distances = np.cumsum(steps)
    total = float(trace_file.distances[-1]) if n else 0.0
    logger.debug(f"Distances calculated for {n} entries, total {total:.2f} m")
    return trace_file.distances


def smooth_distances(trace_file, window=None):
    """
    Smooth ``trace_file.distances`` in place.

    Step lengths are averaged over a moving window and re-accumulated, so the
    result still starts at 0 and never decreases. No-op if distances were
    not calculated or there are fewer than three entries.
    """
    distances = trace_file.distances
    if distances is None or len(distances) < 3:
        return
    if window is None:
        window = con_dict["distance_smoothing_window"]

    steps = np.diff(np.asarray(distances, dtype=float))
    window = max(1, min(int(window), steps.shape[0]))
    smoothed = uniform_filter1d(steps, size=window, mode="nearest")
    trace_file.distances = np.concatenate(([0.0], np.cumsum(smoothed)))
    logger.debug(f"Distances smoothed with window {window}")
