"""Application package for canvasplay.

Holds the application entrypoint module used by :mod:`canvasplay.cli`.
"""

from . import sandbox  # re-export the main application module

__all__ = ["sandbox"]
