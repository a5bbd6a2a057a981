"""Logging, streams, vectors, arenas, a thread pool, tasks, windows and a renderer."""

__version__ = "0.1.0"