"""Server — dispatch pipeline, terminal handlers, and transport adapters."""
