"""SCIP indexer for Protocol Buffers schemas."""

__version__ = "0.1.0"
