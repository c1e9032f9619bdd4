"""
logroute: Declarative logging pipelines compiled to syslog-ng configuration.

Flows, filters and destinations declared as structured resources are
rendered into a deterministic, byte-exact configuration document.
"""

__version__ = "0.1.0"
