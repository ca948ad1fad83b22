"""Shared utilities: logging, vectors, JSON I/O and project file exchange."""
