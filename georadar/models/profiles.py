"""
Derived geometric curves owned by a trace file.

Profiles are computed outside the core (ground detection, hyperbola scans)
and attached to the file as optional artifacts. An unset profile means it
has not been computed yet.
"""
from dataclasses import dataclass, field

import numpy as np


@dataclass
class HorizontalProfile:
    """
    Horizontal cohesive line across traces, e.g. the ground surface.

    Parameters
    ----------
    deep : np.ndarray
        Sample offset of the line for every logical trace.
    """
    deep: np.ndarray
    min_deep: int = field(init=False)
    max_deep: int = field(init=False)
    avg_deep: float = field(init=False)

    def __post_init__(self):
        self.deep = np.asarray(self.deep, dtype=int)
        self.finish()

    def finish(self):
        """Recompute the summary after ``deep`` was edited in place."""
        if self.deep.size == 0:
            self.min_deep = self.max_deep = 0
            self.avg_deep = 0.0
            return
        self.min_deep = int(self.deep.min())
        self.max_deep = int(self.deep.max())
        self.avg_deep = float(self.deep.mean())

    def __len__(self) -> int:
        return int(self.deep.shape[0])


@dataclass
class ScanProfile:
    """Per-trace scan result such as hyperbola probability or amplitude."""
    intensity: np.ndarray
    radius: np.ndarray | None = None

    def __post_init__(self):
        self.intensity = np.asarray(self.intensity, dtype=float)
        if self.radius is not None:
            self.radius = np.asarray(self.radius, dtype=float)
            if self.radius.shape != self.intensity.shape:
                raise ValueError(
                    f"Radius shape {self.radius.shape} does not match intensity shape {self.intensity.shape}"
                )

    def __len__(self) -> int:
        return int(self.intensity.shape[0])
