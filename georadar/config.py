"""
Global configuration dictionary and default parameters used across georadar.

Stores propagation speeds, edge and spreading thresholds, smoothing window
and sidecar naming rules shared by the models and the trace operations.
"""

con_dict = {
    # propagation speed of the radar wave in vacuum, cm per ns
    "speed_cm_ns_vacuum": 30.0,

    # edge detection: minimum half-wave amplitude as a fraction of trace peak
    "edge_threshold": 0.05,

    # coordinate spreading: share of degenerate steps that triggers spreading
    "spreading_duplicate_ratio": 0.5,

    # distance smoothing window, in traces
    "distance_smoothing_window": 5,

    # sidecar metadata: <stem>_<meta_suffix><meta_ext>
    "meta_suffix": "meta",
    "meta_ext": ".json",

    # csv export
    "export_nodata": -999,
}


def set_value(key, value):
    if key not in con_dict:
        raise KeyError(key)
    # naive cast
    ty = type(con_dict[key])
    con_dict[key] = ty(value)


def get_all():
    return con_dict
