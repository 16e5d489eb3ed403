"""Session analysis tools."""

from .voyage_logger import VoyageLogger

__all__ = ["VoyageLogger"]
