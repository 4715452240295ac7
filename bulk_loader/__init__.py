"""Concurrent bulk loader: delimited file rows into a relational table."""

__version__ = "0.1.0"
