"""
georadar package.

Core of a GPR (ground penetrating radar) trace file viewer: raw trace
storage, geo-referenced sidecar metadata, the logical view between them and
the geometric derivations kept in step with edits.

Subpackages
-----------
- models
    Data structures: Trace, MetaFile and geo-data entries, the abstract
    TraceFile with its TraceList view, ArrayTraceFile, markers and the
    CurrentContext.

- trace_ops
    Edge detection, distance calculation and smoothing, coordinate spreading,
    degree-fraction conversion and CSV export.

- interface
    Stateless tools operating on TraceFile objects for UI or scripting use.

Other modules
-------------
- config
    Single in-memory configuration dictionary (con_dict) and helpers to read
    and mutate it.

Typical usage
-------------
    from georadar.interface import tools
    tf = tools.load("survey/line01.npz")
    tf.update_trace_distances()
"""

__version__ = "0.1.0"
