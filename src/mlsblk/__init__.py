"""mlsblk: list block devices on macOS as a tree, a flat list or JSON."""

__version__ = "0.1.0"
