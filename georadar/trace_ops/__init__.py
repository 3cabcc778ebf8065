"""
Trace operations: the derivation pipeline run by TraceFile and the
coordinate and export helpers it relies on.

Modules here operate on any TraceFile-like object and never import the
models package, so models can call into them freely.
"""
