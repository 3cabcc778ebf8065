"""
Sidecar metadata for a trace file.

The metadata holds the geo-referenced logical ordering of a file's traces,
a summary of the sample range and the set of marked physical traces. It is
stored as JSON next to the main file and can be loaded or saved independently
of the sample data.
"""
from dataclasses import dataclass, field
import json
import logging
from pathlib import Path

from .. import config
from .geo_data import GeoData, TraceGeoData

logger = logging.getLogger(__name__)


@dataclass
class SampleRange:
    """
    Sample offsets in use across traces.

    ``min`` is the first sample offset (always 0 here) and ``max`` is the
    longest trace's sample count, one past the last offset in use.
    """
    min: int = 0
    max: int = 0

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max}

    @classmethod
    def from_dict(cls, d: dict) -> "SampleRange":
        return cls(min=int(d["min"]), max=int(d["max"]))


def max_sample_range(traces) -> SampleRange:
    """Return the range covering the longest trace in ``traces``."""
    longest = 0
    for trace in traces:
        longest = max(longest, trace.num_samples)
    return SampleRange(0, longest)


@dataclass
class MetaFile:
    """
    Geo-referenced metadata of one trace file.

    Attributes
    ----------
    values : list[GeoData]
        Entries in logical order. TraceGeoData entries reference a physical
        trace by its index at the time the metadata was created.
    sample_range : SampleRange | None
        Sample range summary, refreshed on every save of the owning file.
    marks : set[int]
        Physical indices of marked traces.
    """
    values: list = field(default_factory=list)
    sample_range: SampleRange | None = None
    marks: set = field(default_factory=set)

    @staticmethod
    def get_meta_path(source) -> Path:
        """
        Derive the sidecar path for a main file path.

        ``survey/line01.npz`` -> ``survey/line01_meta.json``. Pure, no I/O.
        """
        source = Path(source)
        suffix = config.con_dict["meta_suffix"]
        ext = config.con_dict["meta_ext"]
        return source.parent / f"{source.stem}_{suffix}{ext}"

    # ---- building and syncing against raw traces ----
    def init(self, traces):
        """
        Initialise fresh metadata with one TraceGeoData per trace, in order.

        Trace positions and mark flags are carried over, so legacy files
        keep what they recorded per trace.
        """
        self.values = [
            TraceGeoData(
                latitude=trace.latitude,
                longitude=trace.longitude,
                trace_index=trace.index,
            )
            for trace in traces
        ]
        self.sample_range = max_sample_range(traces)
        self.marks = {trace.index for trace in traces if trace.marked}
        logger.debug(f"Initialised metadata for {len(self.values)} traces")

    def init_traces(self, traces):
        """Push mark flags and trace-backed positions onto raw traces."""
        for trace in traces:
            trace.marked = trace.index in self.marks
        for value in self.values:
            if isinstance(value, TraceGeoData) and value.has_position:
                trace = traces[value.trace_index]
                trace.latitude = value.latitude
                trace.longitude = value.longitude

    def missing_trace_indices(self, count) -> list[int]:
        """Trace indices referenced by entries but outside ``0..count-1``."""
        return sorted({
            value.trace_index for value in self.values
            if isinstance(value, TraceGeoData) and not 0 <= value.trace_index < count
        })

    def set_marks(self, marks):
        self.marks = set(marks)

    # ---- disk I/O ----
    def load(self, path):
        """
        Replace this metadata with the content of the sidecar at ``path``.

        Raises
        ------
        OSError
            If the file cannot be read or does not hold valid metadata.
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
            values = [GeoData.from_dict(v) for v in data.get("values", [])]
            sample_range = data.get("sample_range")
            sample_range = SampleRange.from_dict(sample_range) if sample_range else None
            marks = {int(m) for m in data.get("marks", [])}
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error(f"Invalid metadata in {path.name}: {e}")
            raise OSError(f"Cannot read metadata from {path}: {e}") from e

        self.values = values
        self.sample_range = sample_range
        self.marks = marks
        logger.info(f"Loaded metadata: {path.name} ({len(values)} entries, {len(marks)} marks)")

    def save(self, path):
        path = Path(path)
        data = {
            "values": [v.to_dict() for v in self.values],
            "sample_range": self.sample_range.to_dict() if self.sample_range else None,
            "marks": sorted(self.marks),
        }
        text = json.dumps(data, indent=2)
        path.write_text(text, encoding="utf-8")
        logger.info(f"Saved metadata: {path.name} ({len(self.values)} entries)")

    def copy(self):
        return MetaFile(
            values=[GeoData.from_dict(v.to_dict()) for v in self.values],
            sample_range=None if self.sample_range is None
            else SampleRange(self.sample_range.min, self.sample_range.max),
            marks=set(self.marks),
        )
