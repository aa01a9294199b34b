"""
Python naming for the ``aws_cdk`` distribution.

``aws-s3`` maps to the module ``aws_cdk.aws_s3``.
"""

import keyword
from typing import Dict, List

from ...core.naming import NamingConvention


class PythonNaming(NamingConvention):
    @property
    def language_name(self) -> str:
        return "python"

    @property
    def default_templates(self) -> Dict[str, str]:
        return {
            "module": "aws_cdk.{{ service.name | sub('-', '_') }}",
            "name": "{{ symbol }}",
        }

    def validate_names(self, names: Dict[str, str]) -> List[str]:
        return [f"python: {error}" for error in validate_python_module_path(names["module"])]


def validate_python_module_path(path: str) -> List[str]:
    """
    Validate a dotted Python module path.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    for part in path.split("."):
        if not part.isidentifier():
            errors.append(f"'{part}' in module '{path}' is not a valid identifier")
        elif keyword.iskeyword(part):
            errors.append(f"'{part}' in module '{path}' is a Python keyword")
    return errors
