"""
TagPivot - local analytics over a rolling log of interest tag events.
"""

from tagpivot.__version__ import __version__

__all__ = ["__version__"]
