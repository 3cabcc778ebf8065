"""
georadar test configuration and fixtures.
"""
import logging

import numpy as np
import pytest

from georadar.models import ArrayTraceFile

logging.getLogger("numba").setLevel(logging.CRITICAL)
logging.getLogger("georadar").setLevel(logging.DEBUG)

# ============================================================================
# TEST CONFIGURATION
# ============================================================================

# 0.001 deg of latitude along a meridian
LAT_STEP = 0.001
LAT_STEP_M = 111.19492664455873

SAMPLE_COUNTS = [10, 12, 8]


def make_samples(counts, seed=0):
    rng = np.random.default_rng(seed)
    return [rng.normal(0.0, 100.0, n) for n in counts]


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def main_path(tmp_path):
    """Main file path inside a scratch directory; the file itself is not created."""
    return tmp_path / "line01.npz"


@pytest.fixture
def plain_file():
    """Three traces of 10, 12 and 8 samples, no path, no metadata."""
    return ArrayTraceFile.from_arrays(make_samples(SAMPLE_COUNTS))


@pytest.fixture
def make_file(main_path):
    """
    Factory for files with a main path.

    ``positions`` is a list of (lat, lon) tuples or None per trace.
    """
    def _make(n=5, counts=None, positions=None, marked=None, with_meta=False):
        counts = counts or [16] * n
        lats = lons = None
        if positions is not None:
            lats = [None if p is None else p[0] for p in positions]
            lons = [None if p is None else p[1] for p in positions]
        tf = ArrayTraceFile.from_arrays(
            make_samples(counts),
            latitudes=lats,
            longitudes=lons,
            marked=marked,
            file=main_path,
        )
        if with_meta:
            tf.load_meta()
        return tf
    return _make


@pytest.fixture
def meridian_positions():
    """Five positions 0.001 deg apart along the prime meridian."""
    return [(i * LAT_STEP, 0.0) for i in range(5)]
