"""dejunk - remove OS junk, build artifacts and caches from project trees."""

__version__ = "2.0.0"
