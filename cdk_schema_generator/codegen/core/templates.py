"""
Template engine wrapper for naming generation.

Naming conventions are plain Jinja2 templates such as
``aws-cdk-lib/{{ service.name }}``. The engine compiles each template
once and provides the ``sub`` filter that applies the configured
substitution policy.
"""

from typing import Dict, Any

from jinja2 import Environment, StrictUndefined, TemplateError as Jinja2Error

FIRST = "first"
ALL = "all"
SUBSTITUTION_POLICIES = (FIRST, ALL)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def substitute(value: str, old: str, new: str, policy: str = FIRST) -> str:
    """
    Replace ``old`` with ``new`` in ``value``.

    With the ``first`` policy only the first occurrence is replaced, which
    matches the names published by the CDK. ``all`` replaces every
    occurrence.
    """
    if policy == FIRST:
        return str(value).replace(old, new, 1)
    if policy == ALL:
        return str(value).replace(old, new)
    raise TemplateError(f"Unknown substitution policy: {policy}")


class TemplateEngine:
    """Jinja2 environment with naming filters and a compiled template cache."""

    def __init__(self, substitution_policy: str = FIRST):
        """
        Initialize template engine.

        Args:
            substitution_policy: Policy used by the ``sub`` filter
        """
        if substitution_policy not in SUBSTITUTION_POLICIES:
            raise TemplateError(f"Unknown substitution policy: {substitution_policy}")

        self.substitution_policy = substitution_policy
        self._cache: Dict[str, Any] = {}

        # Output is identifiers, not markup
        self._env = Environment(autoescape=False, undefined=StrictUndefined)
        self._env.filters["sub"] = self._sub_filter

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._cache.get(template_string)
            if template is None:
                template = self._env.from_string(template_string)
                self._cache[template_string] = template
            return template.render(**context)
        except Jinja2Error as e:
            raise TemplateError(
                f"Failed to render template {template_string!r}: {e}"
            ) from e

    def _sub_filter(self, value: str, old: str, new: str) -> str:
        return substitute(value, old, new, self.substitution_policy)
