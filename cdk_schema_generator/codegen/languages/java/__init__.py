"""Java naming convention."""

from .naming import JavaNaming

__all__ = ["JavaNaming"]
