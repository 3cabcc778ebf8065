"""
Coordinate helpers: degree-fraction encoding, great-circle distance and
access to the positions behind a trace file's logical view.
"""
import numpy as np

EARTH_RADIUS_M = 6371000.0


def to_decimal_degrees(raw: float) -> float:
    """
    Convert the file encoding ``degrees*100 + minutes`` to decimal degrees.

    The integer degree part is truncated toward zero, so the conversion is
    only an approximate inverse of :func:`to_raw_encoding`.
    E.g. 4530.0 (45 deg 30 min) gives approximately 45.5.
    """
    v = raw / 100.0
    dgr = int(v)
    fract = v - dgr
    return dgr + fract / 60.0 * 100.0


def to_raw_encoding(decimal: float) -> float:
    """Convert decimal degrees back to ``degrees*100 + minutes``."""
    dgr = int(decimal)
    fr = decimal - dgr
    fr2 = fr * 60.0 / 100.0
    return 100.0 * (dgr + fr2)


def haversine_m(lat1, lon1, lat2, lon2):
    """
    Great-circle distance in metres between points given in degrees.

    Accepts scalars or equally shaped arrays.
    """
    lat1_rad, lon1_rad = np.deg2rad(lat1), np.deg2rad(lon1)
    lat2_rad, lon2_rad = np.deg2rad(lat2), np.deg2rad(lon2)
    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad
    a = np.sin(dlat / 2.0) ** 2 + np.cos(lat1_rad) * np.cos(lat2_rad) * np.sin(dlon / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_M * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


def _position_holders(trace_file):
    # metadata entries when present, else the raw traces (identity view)
    if trace_file.meta_file is not None:
        return trace_file.get_geo_data()
    return trace_file.raw_traces


def position_array(trace_file) -> np.ndarray:
    """
    Positions of every logical entry as an (N, 2) array of lat, lon.

    Missing coordinates are NaN.
    """
    holders = _position_holders(trace_file)
    positions = np.full((len(holders), 2), np.nan, dtype=float)
    for i, h in enumerate(holders):
        if h.latitude is not None and h.longitude is not None:
            positions[i, 0] = h.latitude
            positions[i, 1] = h.longitude
    return positions


def apply_positions(trace_file, positions: np.ndarray):
    """
    Write an (N, 2) lat, lon array back to the logical entries.

    With metadata, trace-backed entries also pass their position on to the
    raw trace they reference.
    """
    holders = _position_holders(trace_file)
    if positions.shape != (len(holders), 2):
        raise ValueError(
            f"Positions shape {positions.shape} does not match {len(holders)} logical entries"
        )
    raw = trace_file.raw_traces
    for h, (lat, lon) in zip(holders, positions):
        if np.isnan(lat) or np.isnan(lon):
            lat = lon = None
        else:
            lat, lon = float(lat), float(lon)
        h.latitude, h.longitude = lat, lon

        trace_index = getattr(h, "trace_index", None)
        if trace_index is not None:
            raw[trace_index].latitude = lat
            raw[trace_index].longitude = lon
