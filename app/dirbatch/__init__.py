"""dirbatch - parallel per-directory archive, extract and delete jobs."""

__version__ = "0.3.0"
