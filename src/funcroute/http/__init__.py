"""HTTP model — source-agnostic Request and Response."""
