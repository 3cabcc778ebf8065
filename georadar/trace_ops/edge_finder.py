"""
Edge detection over the raw traces of a trace file.

Edges are not maintained incrementally; the whole raw sequence is
reprocessed every time the file's traces are replaced.
"""
import logging

from numba import jit
import numpy as np

from ..config import con_dict  # live shared dict

logger = logging.getLogger(__name__)

EDGE_NONE = 0
EDGE_POSITIVE = 1
EDGE_NEGATIVE = 2


@jit(nopython=True)
def half_wave_peaks(values, threshold):
    """
    Classify the strongest sample of every half-wave of a trace.

    A half-wave is a run of samples with the same sign (zero counts as
    positive). Its strongest sample is marked EDGE_POSITIVE or EDGE_NEGATIVE
    when its magnitude reaches ``threshold`` times the trace peak magnitude.

    Parameters
    ----------
    values : ndarray, shape (N,)
        Trace amplitudes (float).
    threshold : float
        Fraction of the trace peak magnitude, 0..1.

    Returns
    -------
    ndarray, shape (N,), int8
        0 everywhere except at half-wave peaks.
    """
    n = values.shape[0]
    edges = np.zeros(n, dtype=np.int8)
    if n == 0:
        return edges

    peak = 0.0
    for i in range(n):
        a = abs(values[i])
        if a > peak:
            peak = a
    if peak == 0.0:
        return edges
    limit = threshold * peak

    start = 0
    for i in range(1, n + 1):
        if i == n or (values[i] >= 0.0) != (values[start] >= 0.0):
            best = start
            for j in range(start + 1, i):
                if abs(values[j]) > abs(values[best]):
                    best = j
            v = values[best]
            if v != 0.0 and abs(v) >= limit:
                if v > 0.0:
                    edges[best] = 1
                else:
                    edges[best] = 2
            start = i
    return edges


def find_edges(trace_file, listener=None, threshold=None):
    """
    Recompute ``edges`` for every raw trace of ``trace_file``.

    Parameters
    ----------
    trace_file : TraceFile
        File whose raw traces are processed in place.
    listener : callable, optional
        Progress callback, called with a status message when done.
    threshold : float, optional
        Overrides ``con_dict['edge_threshold']``.
    """
    if threshold is None:
        threshold = con_dict["edge_threshold"]
    traces = trace_file.raw_traces
    for trace in traces:
        values = np.ascontiguousarray(trace.samples, dtype=np.float64)
        trace.edges = half_wave_peaks(values, float(threshold))
    logger.debug(f"Edges recomputed for {len(traces)} traces")
    if listener is not None:
        listener(f"Edges found for {len(traces)} traces")
