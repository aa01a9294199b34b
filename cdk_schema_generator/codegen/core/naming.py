"""
Naming conventions for the CDK target languages.

Every target language publishes the generated constructs under its own
module/namespace/package scheme. A ``NamingConvention`` describes one
scheme as a set of Jinja2 templates; ``NamingBuilder`` renders all
registered conventions for a resource or property type.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional

from .templates import TemplateEngine

if TYPE_CHECKING:
    from ...database import ServiceRecord


@dataclass(frozen=True)
class NamingContext:
    """Values available to naming templates."""

    service: "ServiceRecord"
    symbol: str  # e.g. CfnBucket or CfnBucket.CorsRuleProperty
    nested: bool = False

    @property
    def namespace(self) -> str:
        return self.service.cloudformation_namespace

    def as_template_context(self) -> Dict[str, object]:
        return {
            "service": self.service,
            "namespace": self.namespace,
            "symbol": self.symbol,
            "nested": self.nested,
        }


class NamingConvention(ABC):
    """Naming scheme of a single target language."""

    # Overrides of default_templates applied to nested property types only
    nested_templates: Dict[str, str] = {}

    def __init__(self, template_overrides: Optional[Dict[str, str]] = None):
        """
        Initialize convention.

        Args:
            template_overrides: Replacement templates keyed by output field
        """
        self.template_overrides = dict(template_overrides or {})

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Key of this language in the naming record (e.g. 'golang')."""
        pass

    @property
    @abstractmethod
    def default_templates(self) -> Dict[str, str]:
        """Output field -> template, in output order."""
        pass

    def templates(self, nested: bool = False) -> Dict[str, str]:
        """Effective templates for resources or nested property types."""
        templates = dict(self.default_templates)
        for key, template in self.template_overrides.items():
            if key in templates:
                templates[key] = template
        # Nested property type rules always win over user overrides
        if nested:
            templates.update(self.nested_templates)
        return templates

    def build_names(
        self, engine: TemplateEngine, context: NamingContext
    ) -> Dict[str, str]:
        """Render the naming record for this language."""
        template_context = context.as_template_context()
        return {
            key: engine.render_string(template, template_context)
            for key, template in self.templates(context.nested).items()
        }

    def validate_names(self, names: Dict[str, str]) -> List[str]:
        """
        Check rendered names against the language's rules.

        Returns:
            List of warning messages (empty if names look valid)
        """
        return []


class NamingBuilder:
    """Builds per-language naming records for resources and property types."""

    def __init__(
        self,
        conventions: List[NamingConvention],
        engine: Optional[TemplateEngine] = None,
        construct_prefix: str = "Cfn",
    ):
        self.conventions = list(conventions)
        self.engine = engine or TemplateEngine()
        self.construct_prefix = construct_prefix
        self._warnings: Dict[str, None] = {}  # ordered set

    @property
    def warnings(self) -> List[str]:
        """Validation warnings collected so far, without duplicates."""
        return list(self._warnings)

    def construct_symbol(self, resource_name: str) -> str:
        return f"{self.construct_prefix}{resource_name}"

    def property_type_symbol(self, resource_name: str, type_name: str) -> str:
        return f"{self.construct_symbol(resource_name)}.{type_name}Property"

    def build_construct_names(
        self, service: "ServiceRecord", resource_name: str
    ) -> Dict[str, Dict[str, str]]:
        """Naming record for the L1 construct of a resource."""
        context = NamingContext(service, self.construct_symbol(resource_name))
        return self._build(context)

    def build_property_type_names(
        self, service: "ServiceRecord", resource_name: str, type_name: str
    ) -> Dict[str, Dict[str, str]]:
        """Naming record for a property type nested in a resource's construct."""
        context = NamingContext(
            service, self.property_type_symbol(resource_name, type_name), nested=True
        )
        return self._build(context)

    def _build(self, context: NamingContext) -> Dict[str, Dict[str, str]]:
        result = {}
        for convention in self.conventions:
            names = convention.build_names(self.engine, context)
            for warning in convention.validate_names(names):
                self._warnings.setdefault(warning)
            result[convention.language_name] = names
        return result
