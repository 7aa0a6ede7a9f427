"""Upload storage helpers: per-media-type file managers and a safe file mover."""

__version__ = "1.0.0"
