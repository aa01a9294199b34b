"""
Java naming for the ``software.amazon.awscdk`` artifacts.

``aws-s3`` maps to the package ``software.amazon.awscdk.services.s3``.
"""

from typing import Dict

from ...core.naming import NamingConvention


class JavaNaming(NamingConvention):
    @property
    def language_name(self) -> str:
        return "java"

    @property
    def default_templates(self) -> Dict[str, str]:
        return {
            "package": (
                "software.amazon.awscdk."
                "{{ service.name | sub('-', '.') | sub('aws', 'services') }}"
            ),
            "name": "{{ symbol }}",
        }
