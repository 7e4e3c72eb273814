"""Input clients for fittrack."""

from .manual import ManualInputClient

__all__ = ["ManualInputClient"]
