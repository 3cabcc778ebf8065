"""
Markers placed on traces ("found places") and the keys that address them.
"""
from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .trace_file import TraceFile


@dataclass(frozen=True)
class TraceKey:
    """Address of a physical trace: owning file plus physical index."""
    file: "TraceFile"
    index: int


@dataclass(eq=False)
class FoundPlace:
    """
    Point-of-interest marker on a trace.

    Attributes
    ----------
    trace_key : TraceKey
        Trace the marker sits on.
    model : Any
        Shared application context the marker was created in.
    """
    trace_key: TraceKey
    model: Any = None

    @property
    def index(self) -> int:
        return self.trace_key.index

    @property
    def trace(self):
        """Physical trace under the marker."""
        return self.trace_key.file.raw_traces[self.trace_key.index]


def mark_indices(aux_elements) -> set[int]:
    """Return physical indices of all FoundPlace markers in ``aux_elements``."""
    return {e.index for e in aux_elements if isinstance(e, FoundPlace)}
