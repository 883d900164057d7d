"""JSON Pointer, JSON Patch, JSON Merge Patch and comparison for plain Python data."""

__version__ = "1.7.10"
__all__ = ["compare", "merge", "patch", "pointer"]