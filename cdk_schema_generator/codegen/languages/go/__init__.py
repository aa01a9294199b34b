"""Go naming convention."""

from .naming import GoNaming, validate_go_package_name

__all__ = ["GoNaming", "validate_go_package_name"]
