"""
Single physically captured GPR trace.
"""
from dataclasses import dataclass, field

import numpy as np


@dataclass(eq=False)
class Trace:
    """
    One physically ordered sample sequence captured at a path position.

    Parameters
    ----------
    index : int
        Physical index of the trace in the raw sequence of its file. It is
        reassigned whenever the raw sequence is replaced, so it is not a
        stable identity.
    samples : np.ndarray
        Amplitude per depth/time offset.
    marked : bool, optional
        True if the trace carries a user or algorithm mark.
    latitude, longitude : float, optional
        Position recorded with the trace. Only formats without sidecar
        metadata rely on these; otherwise positions live in the metadata.

    Attributes
    ----------
    edges : np.ndarray | None
        Per-sample edge classification written by the edge finder
        (0 = none, 1 = positive lobe, 2 = negative lobe).

    Notes
    -----
    Equality is identity: two traces with identical samples are still
    different traces.
    """
    index: int
    samples: np.ndarray
    marked: bool = False
    latitude: float | None = None
    longitude: float | None = None
    edges: np.ndarray | None = field(default=None, repr=False)

    def __post_init__(self):
        self.samples = np.asarray(self.samples)

    @property
    def num_samples(self) -> int:
        return int(self.samples.shape[0])

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def copy(self):
        """Return a deep copy with its own sample buffer."""
        return Trace(
            index=self.index,
            samples=self.samples.copy(),
            marked=self.marked,
            latitude=self.latitude,
            longitude=self.longitude,
            edges=None if self.edges is None else self.edges.copy(),
        )
