"""A textured grid raycaster for .cub scene files."""

__version__ = "0.1.0"
__all__ = ["__version__"]