"""
TypeScript naming for the ``aws-cdk-lib`` package.

Constructs live in per-service submodules, e.g. ``aws-cdk-lib/aws-s3``.
"""

from typing import Dict

from ...core.naming import NamingConvention


class TypeScriptNaming(NamingConvention):
    """Module path and symbol in aws-cdk-lib."""

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def default_templates(self) -> Dict[str, str]:
        return {
            "module": "aws-cdk-lib/{{ service.name }}",
            "name": "{{ symbol }}",
        }
