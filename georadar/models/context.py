"""
Tracks the shared application context for open trace files.

Holds the open TraceFile objects and which of them is active. The context
is handed explicitly to anything that needs it (marker construction, tools)
rather than read from module state.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .trace_file import TraceFile


@dataclass
class CurrentContext:
    """
    Lightweight container for the application's current working state.

    Attributes
    ----------
    files : list[TraceFile]
        All open trace files, in opening order.
    project_root : Path | None
        Optional project-level root directory.
    """

    files: list = field(default_factory=list)
    _active: Optional["TraceFile"] = None
    project_root: Path | None = None

    #----- active file is always one of the open files
    @property
    def active(self) -> Optional["TraceFile"]:
        return self._active

    @active.setter
    def active(self, tf):
        if tf is not None and not any(f is tf for f in self.files):
            self.files.append(tf)
        self._active = tf

    def open(self, tf: TraceFile) -> TraceFile:
        """Register ``tf`` and make it the active file."""
        self.active = tf
        return tf

    def close(self, tf: TraceFile):
        self.files = [f for f in self.files if f is not tf]
        if self._active is tf:
            self._active = self.files[-1] if self.files else None

    # ------------------------------------------------------------------
    # convenience properties
    # ------------------------------------------------------------------

    @property
    def has_files(self) -> bool:
        return bool(self.files)

    @property
    def marker_count(self) -> int:
        return sum(len(f.aux_elements) for f in self.files)
