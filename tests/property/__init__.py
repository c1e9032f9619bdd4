# tests/property/__init__.py
"""Property-based tests for logroute.

Property-based testing validates invariants that must hold for ALL inputs,
not just the golden documents: ordering, determinism, and the formats of
identifiers and secret mount paths.
"""
