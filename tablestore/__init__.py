"""Table metadata, file naming and record condition filters for a small relational store."""

__version__ = "0.1.0"