"""
Abstract GPR trace file: raw trace storage, its metadata-driven logical
view and the derivation pipeline kept in step with both.
"""
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any

import numpy as np

from ..config import con_dict  # live shared dict
from ..trace_ops import distances as dist
from ..trace_ops import spread_coordinates as spread
from ..trace_ops.edge_finder import find_edges
from .aux_elements import FoundPlace, TraceKey
from .geo_data import TraceGeoData
from .meta_file import MetaFile, max_sample_range
from .profiles import HorizontalProfile, ScanProfile

logger = logging.getLogger(__name__)


class UnbackedEntryError(RuntimeError):
    """
    A logical position resolved to a metadata entry with no physical trace.

    Raised when sample data is requested for a synthetic entry, which means
    the metadata and the raw traces are out of sync.
    """


@dataclass
class Range:
    """Inclusive range of logical trace indices."""
    min: int
    max: int

    def __post_init__(self):
        if self.min > self.max:
            raise ValueError(f"Invalid range [{self.min}, {self.max}]")

    def __len__(self) -> int:
        return self.max - self.min + 1


class TraceList(Sequence):
    """
    Read-only logical view over a TraceFile's raw traces.

    Maps a logical position to a physical Trace through the file's metadata
    when present, else position i is raw trace i. Nothing is cached: every
    call reads the current state of the owning file.
    """

    def __init__(self, trace_file: "TraceFile"):
        self._file = trace_file

    def __len__(self) -> int:
        meta = self._file.meta_file
        if meta is None:
            return len(self._file.raw_traces)
        return len(meta.values)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]

        raw = self._file.raw_traces
        meta = self._file.meta_file
        if meta is None:
            return raw[index]

        value = meta.values[index]
        if isinstance(value, TraceGeoData):
            return raw[value.trace_index]
        raise UnbackedEntryError(
            f"Logical index {index} holds a {type(value).__name__} entry with no physical trace"
        )

    def __repr__(self):
        return f"TraceList(len={len(self)})"


@dataclass(eq=False)
class TraceFile(ABC):
    """
    Abstract container for one GPR trace file.

    Owns the raw traces (physical order) and the optional sidecar metadata,
    and exposes the logical view (``traces``) that indirects through the
    metadata. Concrete file formats implement the calibration and
    persistence extension points.

    Attributes
    ----------
    file : Path | None
        Main file path; the sidecar metadata path is derived from it.
    meta_file : MetaFile | None
        Geo-referenced metadata, None for files opened without it.
    aux_elements : list
        Markers and other auxiliary elements placed on the file.
    ground_profile_source : Any
        External position source the ground profile is derived from.
    profiles : list[HorizontalProfile] | None
        Horizontal cohesive lines of edges.
    ground_profile : HorizontalProfile | None
    algo_scan : ScanProfile | None
        Hyperbola probability per trace.
    ampl_scan : ScanProfile | None
        Amplitude per trace.
    spread_coordinates_necessary : bool
        Result of the latest spreading check in update_trace_distances.
    distances : np.ndarray | None
        Cumulative along-path distance in metres per logical entry.
    """
    # defaults; calibration reads con_dict["speed_cm_ns_vacuum"] at call time
    SPEED_CM_NS_VACUUM = 30.0
    SPEED_CM_NS_SOIL = SPEED_CM_NS_VACUUM / 3.0

    file: Path | None = None
    _traces: list = field(default_factory=list, repr=False)
    meta_file: MetaFile | None = None
    aux_elements: list = field(default_factory=list, repr=False)
    ground_profile_source: Any = None
    profiles: list | None = field(default=None, repr=False)
    ground_profile: HorizontalProfile | None = field(default=None, repr=False)
    algo_scan: ScanProfile | None = field(default=None, repr=False)
    ampl_scan: ScanProfile | None = field(default=None, repr=False)
    spread_coordinates_necessary: bool = False
    distances: np.ndarray | None = field(default=None, repr=False)

    def __post_init__(self):
        if self.file is not None:
            self.file = Path(self.file)

    # ---- metadata ----
    def load_meta(self, traces=None):
        """
        Load the sidecar metadata, or initialise it from ``traces``.

        ``traces`` defaults to the raw sequence. Mark flags (and positions
        of trace-backed entries) are pushed onto the traces afterwards in
        both cases.

        Raises
        ------
        ValueError
            If the file has no main path.
        OSError
            If an existing sidecar cannot be read, or references traces the
            file does not have. The attached metadata is left unchanged.
        """
        if self.file is None:
            raise ValueError("Cannot load metadata: trace file has no path")
        if traces is None:
            traces = self._traces

        meta_path = MetaFile.get_meta_path(self.file)
        meta_file = MetaFile()
        if meta_path.exists():
            # load existing meta
            meta_file.load(meta_path)
            missing = meta_file.missing_trace_indices(len(traces))
            if missing:
                logger.error(
                    f"Metadata {meta_path.name} references {len(missing)} traces missing from "
                    f"{self.file.name} ({len(traces)} traces), first {missing[0]}"
                )
                raise OSError(f"Metadata {meta_path} does not match {self.file}: missing traces {missing}")
        else:
            # init meta
            meta_file.init(traces)
            logger.info(f"No metadata found for {self.file.name}, initialised from {len(traces)} traces")

        meta_file.init_traces(traces)
        self.meta_file = meta_file

    def save_meta(self):
        """
        Refresh sample range and marks from current state, then write the
        sidecar metadata.

        Raises
        ------
        ValueError
            If there is no metadata or no main path.
        OSError
            If the sidecar cannot be written.
        UnbackedEntryError
            If the logical view holds a synthetic entry.
        """
        if self.meta_file is None:
            raise ValueError("Cannot save metadata: no metadata attached")
        if self.file is None:
            raise ValueError("Cannot save metadata: trace file has no path")

        traces = self.traces
        # update sample range
        self.meta_file.sample_range = max_sample_range(traces)
        # update marks
        self.meta_file.set_marks(trace.index for trace in traces if trace.marked)

        self.meta_file.save(MetaFile.get_meta_path(self.file))

    def update_traces_from_meta(self):
        if self.meta_file is not None:
            self.meta_file.init_traces(self._traces)

    def get_meta_file(self) -> MetaFile | None:
        return self.meta_file

    # ---- raw traces and the logical view ----
    @property
    def traces(self) -> TraceList:
        """Logical view; a fresh projection on every access."""
        return TraceList(self)

    @property
    def raw_traces(self) -> list:
        """Raw traces in physical order."""
        return self._traces

    def set_traces(self, traces):
        """Replace the raw sequence and recompute edges over it."""
        self._traces = list(traces)
        self.update_traces()
        find_edges(self, None)

    def update_traces(self):
        """Reassign physical indices to raw positions 0..n-1."""
        for i, trace in enumerate(self._traces):
            trace.index = i

    def num_traces(self) -> int:
        return len(self.traces)

    def get_max_samples(self) -> int:
        """
        Sample count of the first logical trace.

        Raises
        ------
        ValueError
            If the logical view is empty.
        """
        traces = self.traces
        if len(traces) == 0:
            raise ValueError("Cannot get max samples: trace file has no traces")
        return traces[0].num_samples

    def get_geo_data(self) -> list:
        """Geo-data entries in logical order; empty without metadata."""
        if self.meta_file is None:
            return []
        return self.meta_file.values

    # ---- derivation pipeline ----
    def update_trace_distances(self):
        """
        Recalculate distances, check spreading necessity, then smooth.

        Stages run in this order with no rollback: if a later stage fails,
        the distances from the first stage stay in place.
        """
        dist.calculate_distances(self)
        self.spread_coordinates_necessary = spread.is_spreading_necessary(self)
        dist.smooth_distances(self)

    def copy_marked_traces_to_aux_elements(self, context):
        """
        Add a FoundPlace marker to ``aux_elements`` for every mark.

        With metadata, markers come from the stored mark set only. Without
        metadata (legacy formats), every raw trace flagged as marked gets a
        marker. Raw flags are never consulted when metadata exists.
        """
        if self.meta_file is not None:
            indices = sorted(self.meta_file.marks)
        else:
            indices = [trace.index for trace in self._traces if trace.marked]

        for mark_index in indices:
            trace_key = TraceKey(self, mark_index)
            self.aux_elements.append(FoundPlace(trace_key, context))
        logger.debug(f"Copied {len(indices)} marks to aux elements")

    # ---- propagation speeds ----
    @staticmethod
    def speed_cm_ns_vacuum() -> float:
        return float(con_dict["speed_cm_ns_vacuum"])

    @classmethod
    def speed_cm_ns_soil(cls) -> float:
        return cls.speed_cm_ns_vacuum() / 3.0

    # ---- format extension points ----
    @abstractmethod
    def get_sample_interval(self) -> int:
        """Sample interval in picoseconds."""

    @abstractmethod
    def get_samples_to_cm_grn(self) -> float:
        """Depth in cm per sample for ground propagation."""

    @abstractmethod
    def get_samples_to_cm_air(self) -> float:
        """Depth in cm per sample for air propagation."""

    @abstractmethod
    def save(self, file, range: Range):
        """Write the logical traces in ``range`` to ``file``."""

    @abstractmethod
    def copy(self) -> "TraceFile":
        pass

    @abstractmethod
    def normalize(self):
        pass

    @abstractmethod
    def denormalize(self):
        pass
