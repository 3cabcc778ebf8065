"""
High-level utility functions for loading, cropping, marking and exporting.
Used by UI pages and scripts to manipulate TraceFile objects.
"""
import logging
from pathlib import Path

from .. import config
from ..models import ArrayTraceFile
from ..models.aux_elements import mark_indices
from ..trace_ops import export_ops

logger = logging.getLogger(__name__)

#======Getting and setting app configs ========================================


def get_config():
    """
    Loads the config dictionary - a single mutable dictionary of config
    values used across the package
    """
    return config.get_all()

def modify_config(key, value):
    """
    Sets user selected values in the config dictionary
    """
    config.set_value(key, value)

#==== Data loading helper functions ===========================================

def load(path, context=None):
    """
    Open a trace archive with its sidecar metadata.

    If ``context`` is given the file is registered there and made active.
    Returns the created TraceFile, or None if ``path`` is empty or not a file.
    """
    if not path:
        return None

    p = Path(path)
    if not p.is_file():
        return None
    tf = ArrayTraceFile.from_path(p)
    if context is not None:
        context.open(tf)
    return tf

#======= Logical-view editing =================================================


def crop_traces(tf, start, stop):
    """
    Restrict the logical view to entries ``start:stop`` without touching
    raw samples.

    Only metadata entries are filtered. Derived per-entry artifacts
    (distances, profiles, scans) no longer line up and are cleared.

    Raises
    ------
    ValueError
        If the file has no metadata or the window is empty.
    """
    if tf.meta_file is None:
        raise ValueError("Cannot crop a trace file without metadata")
    values = tf.meta_file.values[start:stop]
    if not values:
        raise ValueError(f"Crop window [{start}:{stop}] selects no entries")

    tf.meta_file.values = values
    tf.distances = None
    tf.profiles = None
    tf.ground_profile = None
    tf.algo_scan = None
    tf.ampl_scan = None
    logger.info(f"Cropped logical view to {len(values)} entries")
    return tf


def sync_marks_from_aux_elements(tf):
    """
    Set each raw trace's mark flag from the FoundPlace markers on the file.

    Run before ``save_meta`` so markers added or removed by the user end up
    in the saved mark set.
    """
    indices = mark_indices(tf.aux_elements)
    for trace in tf.raw_traces:
        trace.marked = trace.index in indices
    return indices

#======= Export ===============================================================


def export_geo_data(tf, csv_path, title=""):
    """
    Write the file's geo-data entries and distances to CSV.

    Raises
    ------
    ValueError
        If the file has no geo-data (no metadata attached).
    """
    geo_data = tf.get_geo_data()
    if not geo_data:
        raise ValueError("Trace file has no geo-data to export")
    distances = tf.distances
    if distances is not None and len(distances) != len(geo_data):
        logger.warning("Distances are stale, exporting without them")
        distances = None
    return export_ops.write_geo_data_profile(
        csv_path=Path(csv_path),
        geo_data=geo_data,
        distances=distances,
        title=title,
        nodata=config.con_dict["export_nodata"],
    )
