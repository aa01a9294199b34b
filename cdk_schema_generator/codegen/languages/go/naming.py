"""
Go naming for the ``aws-cdk-go`` module.

Handles Go package derivation and validation of the resulting package
names against Go's naming rules.
"""

from typing import Dict, List

from ...core.naming import NamingConvention

GO_MODULE_ROOT = "github.com/aws/aws-cdk-go/awscdk/v2"

# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}


class GoNaming(NamingConvention):
    """Module path, package and symbol in aws-cdk-go.

    Nested property types are flattened into the package namespace:
    ``CfnBucket.CorsRuleProperty`` becomes ``CfnBucket_CorsRuleProperty``.
    """

    nested_templates = {"name": "{{ symbol | replace('.', '_', 1) }}"}

    @property
    def language_name(self) -> str:
        return "golang"

    @property
    def default_templates(self) -> Dict[str, str]:
        package = "{{ service.name | sub('-', '') }}"
        return {
            "module": f"{GO_MODULE_ROOT}/{package}",
            "package": package,
            "name": "{{ symbol }}",
        }

    def validate_names(self, names: Dict[str, str]) -> List[str]:
        return [
            f"golang: {error}" for error in validate_go_package_name(names["package"])
        ]


def validate_go_package_name(name: str) -> list[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    if "-" in name:
        errors.append(f"Package name '{name}' should not contain hyphens")
    elif not name.isidentifier():
        errors.append(f"'{name}' is not a valid Go identifier")

    if name[0].isupper():
        errors.append(f"Package name '{name}' should be lowercase")

    if name.lower() in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
