"""
Trace file stored as a NumPy ``.npz`` archive.

Archive layout
--------------
samples : (N, S) float
    Trace amplitudes, zero-padded to the longest trace.
lengths : (N,) int
    Real sample count of each trace.
positions : (N, 2) float
    Latitude, longitude per trace; NaN when unknown.
marked : (N,) bool
sample_interval : () int
    Sample interval in picoseconds.
"""
from dataclasses import dataclass
import logging
from pathlib import Path

import numpy as np

from ..trace_ops.coordinates import position_array
from .meta_file import MetaFile
from .trace import Trace
from .trace_file import Range, TraceFile

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ArrayTraceFile(TraceFile):
    """
    Reference TraceFile format backed by a ``.npz`` archive.

    Attributes
    ----------
    sample_interval : int
        Sample interval in picoseconds.
    amplitude_scale : float
        Divisor applied by ``normalize``; 1.0 when not normalized.
    normalized : bool
        True while samples are scaled to [-1, 1].
    """
    sample_interval: int = 100
    amplitude_scale: float = 1.0
    normalized: bool = False

    @classmethod
    def from_arrays(cls, samples, sample_interval=100, latitudes=None, longitudes=None,
                    marked=None, file=None):
        """
        Build a file from in-memory sample sequences.

        ``samples`` is any iterable of 1D amplitude sequences; traces may
        differ in length. No metadata is attached.
        """
        samples = [np.asarray(s, dtype=float) for s in samples]
        n = len(samples)
        latitudes = [None] * n if latitudes is None else list(latitudes)
        longitudes = [None] * n if longitudes is None else list(longitudes)
        marked = [False] * n if marked is None else list(marked)

        traces = [
            Trace(index=i, samples=s, marked=bool(m), latitude=lat, longitude=lon)
            for i, (s, lat, lon, m) in enumerate(zip(samples, latitudes, longitudes, marked))
        ]
        tf = cls(file=file, sample_interval=int(sample_interval))
        tf.set_traces(traces)
        return tf

    @classmethod
    def from_path(cls, path, with_meta=True):
        """
        Open an archive and attach its sidecar metadata.

        The metadata is loaded if present, otherwise initialised from the
        traces. Pass ``with_meta=False`` to open a file the legacy way, with
        per-trace marks and positions only.

        Raises
        ------
        OSError
            If the archive cannot be read.
        ValueError
            If the archive does not hold the expected arrays.
        """
        p = Path(path)
        with np.load(p, allow_pickle=False) as npz:
            missing = {"samples", "lengths"} - set(npz.files)
            if missing:
                raise ValueError(f"{p.name} is not a trace archive, missing {sorted(missing)}")
            data = npz["samples"]
            lengths = npz["lengths"]
            positions = npz["positions"] if "positions" in npz.files else None
            marked = npz["marked"] if "marked" in npz.files else None
            sample_interval = int(npz["sample_interval"]) if "sample_interval" in npz.files else 100

        traces = []
        for i in range(data.shape[0]):
            lat = lon = None
            if positions is not None and not np.isnan(positions[i]).any():
                lat, lon = float(positions[i, 0]), float(positions[i, 1])
            traces.append(Trace(
                index=i,
                samples=np.array(data[i, :int(lengths[i])], dtype=float),
                marked=bool(marked[i]) if marked is not None else False,
                latitude=lat,
                longitude=lon,
            ))

        tf = cls(file=p, sample_interval=sample_interval)
        tf.set_traces(traces)
        if with_meta:
            tf.load_meta()
        logger.info(f"Opened trace file: {p.name} ({len(traces)} traces)")
        return tf

    # ---- calibration ----
    def get_sample_interval(self) -> int:
        return self.sample_interval

    def get_samples_to_cm_grn(self) -> float:
        # two-way travel time
        return self.sample_interval / 1000.0 * self.speed_cm_ns_soil() / 2.0

    def get_samples_to_cm_air(self) -> float:
        return self.sample_interval / 1000.0 * self.speed_cm_ns_vacuum() / 2.0

    # ---- persistence ----
    def save(self, file, range: Range | None = None):
        """
        Write logical traces ``range.min..range.max`` (inclusive) to ``file``.

        Samples are written at full amplitude even while the file is
        normalized. Positions come from the logical entries. The whole
        logical view is written if ``range`` is None.
        """
        traces = self.traces
        if range is None:
            if len(traces) == 0:
                raise ValueError("Cannot save an empty trace file")
            range = Range(0, len(traces) - 1)
        if range.min < 0 or range.max >= len(traces):
            raise ValueError(f"Range [{range.min}, {range.max}] outside 0..{len(traces) - 1}")

        selected = traces[range.min:range.max + 1]
        width = max(t.num_samples for t in selected)
        data = np.zeros((len(selected), width), dtype=float)
        for i, trace in enumerate(selected):
            data[i, :trace.num_samples] = self._stored_samples(trace)
        # positions of the logical entries
        positions = position_array(self)[range.min:range.max + 1]

        path = Path(file)
        # np.savez appends .npz to bare names; write through a handle instead
        with open(path, "wb") as f:
            np.savez_compressed(
                f,
                samples=data,
                lengths=np.array([t.num_samples for t in selected], dtype=int),
                positions=positions,
                marked=np.array([t.marked for t in selected], dtype=bool),
                sample_interval=np.array(self.sample_interval),
            )
        logger.info(f"Saved {len(selected)} traces to {path.name}")

    def _stored_samples(self, trace) -> np.ndarray:
        if self.normalized:
            return trace.samples * self.amplitude_scale
        return trace.samples

    def copy(self) -> "ArrayTraceFile":
        """
        Deep copy of traces, metadata and derived distances.

        Markers are not copied since they address this file.
        """
        return ArrayTraceFile(
            file=self.file,
            _traces=[t.copy() for t in self._traces],
            meta_file=None if self.meta_file is None else self.meta_file.copy(),
            ground_profile_source=self.ground_profile_source,
            spread_coordinates_necessary=self.spread_coordinates_necessary,
            distances=None if self.distances is None else self.distances.copy(),
            sample_interval=self.sample_interval,
            amplitude_scale=self.amplitude_scale,
            normalized=self.normalized,
        )

    # ---- amplitude scaling ----
    def normalize(self):
        """Scale all raw samples to [-1, 1] by the file's peak magnitude."""
        if self.normalized:
            return
        peak = 0.0
        for trace in self._traces:
            if trace.num_samples:
                peak = max(peak, float(np.max(np.abs(trace.samples))))
        self.amplitude_scale = peak if peak > 0.0 else 1.0
        for trace in self._traces:
            trace.samples = trace.samples.astype(float) / self.amplitude_scale
        self.normalized = True
        logger.debug(f"Normalized by peak amplitude {self.amplitude_scale}")

    def denormalize(self):
        if not self.normalized:
            return
        for trace in self._traces:
            trace.samples = trace.samples * self.amplitude_scale
        self.amplitude_scale = 1.0
        self.normalized = False

    @property
    def meta_path(self) -> Path | None:
        return None if self.file is None else MetaFile.get_meta_path(self.file)
