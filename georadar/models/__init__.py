"""
georadar models package.

Core data structures for representing and editing GPR trace files.

Classes
-------
Trace
    One physically captured sample sequence with its physical index and mark.
GeoData, TraceGeoData, SyntheticGeoData
    Geo-referenced metadata entries, with or without a physical trace behind.
MetaFile
    Sidecar metadata: logical ordering, sample range and marks.
TraceFile
    Abstract trace file owning raw traces, metadata and derived artifacts.
TraceList
    Lazy logical view from metadata order to physical traces.
ArrayTraceFile
    TraceFile stored as a NumPy ``.npz`` archive.
CurrentContext
    Shared application context passed to markers and tools.

Notes
-----
The raw traces are never copied to build the logical view: reordering,
filtering or extending a file only edits its metadata entries.
"""

from .array_trace_file import ArrayTraceFile
from .aux_elements import FoundPlace, TraceKey
from .context import CurrentContext
from .geo_data import GeoData, SyntheticGeoData, TraceGeoData
from .meta_file import MetaFile, SampleRange
from .profiles import HorizontalProfile, ScanProfile
from .trace import Trace
from .trace_file import Range, TraceFile, TraceList, UnbackedEntryError

__all__ = [
    "Trace",
    "GeoData",
    "TraceGeoData",
    "SyntheticGeoData",
    "MetaFile",
    "SampleRange",
    "TraceFile",
    "TraceList",
    "Range",
    "UnbackedEntryError",
    "ArrayTraceFile",
    "HorizontalProfile",
    "ScanProfile",
    "FoundPlace",
    "TraceKey",
    "CurrentContext",
]
