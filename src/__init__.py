# src/__init__.py — v1
"""filepreview: classify, fetch, cache and render file previews."""

from filepreview.version import __version__

__all__ = ["__version__"]
