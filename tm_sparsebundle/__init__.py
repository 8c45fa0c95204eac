"""Provision Time Machine sparsebundle disk images on macOS."""

from .__version__ import __version__


__all__ = ["__version__"]
