"""
Geo-referenced entries stored in a trace file's sidecar metadata.

An entry either points at a physical trace (TraceGeoData) or carries a
position that no captured trace backs (SyntheticGeoData), e.g. positions
interpolated from an external positioning log.
"""
from dataclasses import asdict, dataclass
from typing import ClassVar


@dataclass
class GeoData:
    """
    Base geo-data entry.

    Attributes
    ----------
    latitude, longitude : float | None
        Decimal degrees; None if the position is unknown.
    altitude : float | None
        Metres above the reference surface, if recorded.
    time : float | None
        Acquisition time in seconds, if recorded.
    line_index : int
        Survey line the entry belongs to.
    """
    kind: ClassVar[str] = "base"

    latitude: float | None = None
    longitude: float | None = None
    altitude: float | None = None
    time: float | None = None
    line_index: int = 0

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> dict:
        d = asdict(self)
        d["type"] = self.kind
        return d

    @staticmethod
    def from_dict(d: dict) -> "GeoData":
        """
        Build the entry subclass named by the ``type`` tag of ``d``.

        Raises
        ------
        ValueError
            If the tag is missing or unknown.
        """
        d = dict(d)
        kind = d.pop("type", None)
        cls = _ENTRY_TYPES.get(kind)
        if cls is None:
            raise ValueError(f"Unknown geo-data entry type: {kind!r}")
        return cls(**d)


@dataclass
class TraceGeoData(GeoData):
    """Entry backed by the raw trace at ``trace_index``."""
    kind: ClassVar[str] = "trace"

    trace_index: int = 0


@dataclass
class SyntheticGeoData(GeoData):
    """Entry with a position but no physical trace behind it."""
    kind: ClassVar[str] = "synthetic"


_ENTRY_TYPES = {
    TraceGeoData.kind: TraceGeoData,
    SyntheticGeoData.kind: SyntheticGeoData,
}
