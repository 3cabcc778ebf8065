"""
Detection and repair of degenerate positioning.

Positioning receivers often update slower than the radar captures traces,
leaving runs of entries that share one fix, or entries with no fix at all.
Along-path distance is then degenerate and the coordinates must be spread
between distinct fixes.
"""
import logging

import numpy as np

from ..config import con_dict  # live shared dict
from .coordinates import apply_positions, position_array

logger = logging.getLogger(__name__)


def _degenerate_steps(positions: np.ndarray) -> np.ndarray:
    # step i -> i+1 is degenerate if the target is missing or repeats the source
    missing = np.isnan(positions).any(axis=1)
    same = np.all(positions[1:] == positions[:-1], axis=1)
    return missing[1:] | same


def is_spreading_necessary(trace_file, ratio=None) -> bool:
    """
    Return True if coordinate spreading is required for ``trace_file``.

    Spreading is necessary when the share of degenerate steps reaches
    ``ratio`` (default ``con_dict['spreading_duplicate_ratio']``). Files
    with fewer than two entries, or with no position at all, never need it.
    """
    if ratio is None:
        ratio = con_dict["spreading_duplicate_ratio"]
    positions = position_array(trace_file)
    n = positions.shape[0]
    if n < 2:
        return False
    if np.isnan(positions).any(axis=1).all():
        return False

    degenerate = _degenerate_steps(positions)
    fraction = float(degenerate.sum()) / (n - 1)
    logger.debug(f"Degenerate steps: {int(degenerate.sum())} of {n - 1}")
    return fraction >= ratio


def spread_coordinates(trace_file) -> bool:
    """
    Interpolate positions linearly between distinct fixes.

    Every first entry of a run of identical valid positions is taken as a
    fix. Entries between fixes are placed evenly on the segment joining
    them; entries after the last fix keep its position. Distances are
    recalculated afterwards.

    Returns
    -------
    bool
        False (and nothing changed) if there are fewer than two fixes.
    """
    positions = position_array(trace_file)
    n = positions.shape[0]
    valid = ~np.isnan(positions).any(axis=1)

    anchors = []
    for i in range(n):
        if not valid[i]:
            continue
        if i > 0 and valid[i - 1] and np.array_equal(positions[i], positions[i - 1]):
            continue
        anchors.append(i)

    if len(anchors) < 2:
        logger.warning(f"Cannot spread coordinates: only {len(anchors)} distinct fixes")
        return False

    idx = np.arange(n)
    spread = np.empty_like(positions)
    spread[:, 0] = np.interp(idx, anchors, positions[anchors, 0])
    spread[:, 1] = np.interp(idx, anchors, positions[anchors, 1])
    apply_positions(trace_file, spread)
    logger.info(f"Spread coordinates of {n} entries over {len(anchors)} fixes")

    trace_file.update_trace_distances()
    return True
