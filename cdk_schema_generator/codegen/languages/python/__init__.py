"""Python naming convention."""

from .naming import PythonNaming, validate_python_module_path

__all__ = ["PythonNaming", "validate_python_module_path"]
