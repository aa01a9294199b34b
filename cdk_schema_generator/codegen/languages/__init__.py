"""
Language-specific naming conventions.

One subpackage per CDK target language. ``NAMING_CONVENTIONS`` lists
them in the order they appear in the generated naming records.
"""

from .typescript import TypeScriptNaming
from .csharp import CSharpNaming
from .go import GoNaming
from .java import JavaNaming
from .python import PythonNaming

# (convention class, aliases) in output order
NAMING_CONVENTIONS = [
    (TypeScriptNaming, ["ts"]),
    (CSharpNaming, ["cs", "c#", "dotnet"]),
    (GoNaming, ["go"]),
    (JavaNaming, []),
    (PythonNaming, ["py"]),
]

__all__ = [
    "TypeScriptNaming",
    "CSharpNaming",
    "GoNaming",
    "JavaNaming",
    "PythonNaming",
    "NAMING_CONVENTIONS",
]
