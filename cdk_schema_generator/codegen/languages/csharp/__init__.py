"""C# naming convention."""

from .naming import CSharpNaming

__all__ = ["CSharpNaming"]
