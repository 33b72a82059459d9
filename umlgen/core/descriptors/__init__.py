"""Type descriptors and the front ends that produce them.

Public API:
    JavaSourceParser: Java sources -> TypeDescriptor list
    ScopeResolver: selection contract over discoverable types
    StaticScopeResolver / JavaSourceScopeResolver: its implementations
"""

from .java_parser import JavaSourceParser
from .models import FieldDescriptor, MethodDescriptor, TypeDescriptor, TypeRef
from .resolver import JavaSourceScopeResolver, ScopeResolver, StaticScopeResolver

__all__ = [
    "JavaSourceParser",
    "JavaSourceScopeResolver",
    "ScopeResolver",
    "StaticScopeResolver",
    "FieldDescriptor",
    "MethodDescriptor",
    "TypeDescriptor",
    "TypeRef",
]
