"""depzoom — module-aware package dependency graphs for Go source trees."""

__version__ = "0.1.0"
