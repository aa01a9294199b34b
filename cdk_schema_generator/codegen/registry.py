"""
Naming convention registry.

Keeps the target languages, their aliases and their output order, and
builds configured ``NamingBuilder`` instances.
"""

from typing import Dict, Type, Optional, List

from .core.config import GeneratorConfig, load_config
from .core.naming import NamingBuilder, NamingConvention
from .core.templates import TemplateEngine


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class NamingRegistry:
    """Registry of naming conventions, kept in registration order."""

    def __init__(self):
        self._conventions: Dict[str, Type[NamingConvention]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        convention_class: Type[NamingConvention],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a naming convention for a language.

        Args:
            language: Primary language name, as used in the naming record
            convention_class: Class implementing NamingConvention
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the class is invalid or an alias conflicts
        """
        if not issubclass(convention_class, NamingConvention):
            raise RegistryError("Convention class must inherit from NamingConvention")

        language_key = language.lower()

        if language_key in self._conventions and not replace:
            return

        self._conventions[language_key] = convention_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue

            if not replace:
                if alias_key in self._conventions:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary language"
                    )
                if self._aliases.get(alias_key, language_key) != language_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = language_key

    def resolve_language(self, language: str) -> str:
        """
        Return the primary name for a language or alias.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        if language_key in self._conventions:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]
        raise RegistryError(
            f"No naming convention registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def get_convention_class(self, language: str) -> Type[NamingConvention]:
        return self._conventions[self.resolve_language(language)]

    def list_languages(self) -> List[str]:
        """Registered primary language names, in output order."""
        return list(self._conventions)

    def get_aliases_for_language(self, language: str) -> List[str]:
        language_key = language.lower()
        return sorted(
            alias for alias, target in self._aliases.items() if target == language_key
        )

    def is_supported(self, language: str) -> bool:
        language_key = language.lower()
        return language_key in self._conventions or language_key in self._aliases

    def create_builder(self, config: Optional[GeneratorConfig] = None) -> NamingBuilder:
        """
        Create a naming builder covering every registered language.

        Template overrides in ``config.naming_templates`` may be keyed by
        primary language name or alias.
        """
        config = config or load_config()

        overrides: Dict[str, Dict[str, str]] = {}
        for language, templates in (config.naming_templates or {}).items():
            overrides.setdefault(self.resolve_language(language), {}).update(templates)

        conventions = [
            convention_class(overrides.get(language))
            for language, convention_class in self._conventions.items()
        ]
        return NamingBuilder(
            conventions,
            TemplateEngine(config.substitution_policy),
            construct_prefix=config.construct_prefix,
        )

    def get_language_info(self, language: str) -> Dict[str, object]:
        """Describe a registered language and its default templates."""
        language_key = self.resolve_language(language)
        convention = self._conventions[language_key]()
        return {
            "name": convention.language_name,
            "class": type(convention).__name__,
            "aliases": self.get_aliases_for_language(language_key),
            "templates": convention.templates(),
            "nested_templates": convention.templates(nested=True),
        }


# Global registry instance - created once
_global_registry: Optional[NamingRegistry] = None


def get_registry() -> NamingRegistry:
    """Get the global naming registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = NamingRegistry()
        _auto_register_conventions(_global_registry)
    return _global_registry


def _auto_register_conventions(registry: NamingRegistry):
    """Register the five CDK target languages in output order."""
    from .languages import NAMING_CONVENTIONS

    for convention_class, aliases in NAMING_CONVENTIONS:
        registry.register(convention_class().language_name, convention_class, aliases)


def get_naming_builder(config: Optional[GeneratorConfig] = None) -> NamingBuilder:
    """Create a naming builder from the global registry."""
    return get_registry().create_builder(config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def get_language_info(language: str) -> Dict[str, object]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)
