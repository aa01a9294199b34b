"""
C# naming for the ``Amazon.CDK`` assemblies.

Namespaces follow the CloudFormation namespace: ``AWS::S3`` becomes
``Amazon.CDK.AWS.S3``.
"""

from typing import Dict

from ...core.naming import NamingConvention


class CSharpNaming(NamingConvention):
    @property
    def language_name(self) -> str:
        return "csharp"

    @property
    def default_templates(self) -> Dict[str, str]:
        return {
            "namespace": "Amazon.CDK.{{ namespace | sub('::', '.') }}",
            "name": "{{ symbol }}",
        }
