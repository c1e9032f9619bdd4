"""Rendering engine: compiles a PipelineSpec into syslog-ng configuration.

Public API:
- render: Render a pipeline into a writable text sink
- render_to_string: Render a pipeline and return the document
- build_document: Render without writing anywhere
"""

from logroute.engine.orchestrator import build_document, render, render_to_string

__all__ = [
    "build_document",
    "render",
    "render_to_string",
]
