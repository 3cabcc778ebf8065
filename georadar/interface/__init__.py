"""
georadar Interface Package
==========================

Stateless helpers that connect callers (UI pages, scripts) with the data
model. They load files, edit the logical view through metadata, keep
markers and mark flags in step, and export geo-data.

Everything here operates on ``TraceFile`` objects and holds no state of
its own.
"""

from . import tools
