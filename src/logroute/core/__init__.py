"""Core utilities: settings, logging, identifiers, and secret handling."""
