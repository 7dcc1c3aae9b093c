"""canvasplay package root.

The project version is defined here as the single source of truth and
exposed via ``__version__``. pyproject.toml reads it with
``version = { attr = "canvasplay.__version__" }``.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
