"""Helpers for version sorting, files, directory streams, INI data, semaphores and threads."""

__version__ = "0.1.0"