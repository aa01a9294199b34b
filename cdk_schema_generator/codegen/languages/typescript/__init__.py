"""TypeScript naming convention."""

from .naming import TypeScriptNaming

__all__ = ["TypeScriptNaming"]
