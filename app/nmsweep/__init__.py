"""nmsweep - remove dependency caches from every project under a directory."""

__version__ = "0.1.0"
