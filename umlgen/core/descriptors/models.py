"""Type descriptor data models.

A TypeDescriptor is the read-only metadata record for one scanned type, as
produced by a front end (see java_parser). These are pure data containers;
the mapper only ever reads them.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional

from ..constants import DEPRECATED_ANNOTATION, OBJECT_TYPE, PRIMITIVE_TYPES

TYPE_KIND_CLASS = "class"
TYPE_KIND_INTERFACE = "interface"
TYPE_KIND_ENUM = "enum"
TYPE_KIND_ANNOTATION = "annotation"


@dataclass
class TypeRef:
    """A reference to a type as written at a declaration site.

    ``name`` is the raw name: a qualified name when resolution succeeded,
    a primitive keyword, a type variable name, or the name as written when
    it could not be resolved. For a type variable ``erasure`` holds the
    qualified name of its first bound.
    """

    name: str
    arguments: List["TypeRef"] = field(default_factory=list)
    is_type_variable: bool = False
    erasure: Optional[str] = None
    is_wildcard: bool = False
    array_dimensions: int = 0

    @property
    def erased_name(self) -> str:
        """Name after erasure; an unbounded type variable erases to Object."""
        if self.is_type_variable:
            return self.erasure or OBJECT_TYPE
        return self.name

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def is_primitive(self) -> bool:
        return self.name in PRIMITIVE_TYPES

    @property
    def is_array(self) -> bool:
        return self.array_dimensions > 0


@dataclass
class FieldDescriptor:
    name: str
    type: TypeRef
    modifiers: FrozenSet[str] = frozenset()


@dataclass
class MethodDescriptor:
    name: str
    return_type: Optional[TypeRef]
    parameter_types: List[TypeRef] = field(default_factory=list)
    modifiers: FrozenSet[str] = frozenset()
    annotations: List[str] = field(default_factory=list)  # qualified names

    @property
    def is_deprecated(self) -> bool:
        return DEPRECATED_ANNOTATION in self.annotations


@dataclass
class TypeDescriptor:
    """Metadata for one scanned type.

    ``kind`` is one of "class", "interface", "enum", "annotation".
    """

    qualified_name: str
    kind: str = TYPE_KIND_CLASS
    modifiers: FrozenSet[str] = frozenset()
    fields: List[FieldDescriptor] = field(default_factory=list)
    methods: List[MethodDescriptor] = field(default_factory=list)
    superclass: Optional[TypeRef] = None
    interfaces: List[TypeRef] = field(default_factory=list)
    annotations: List[str] = field(default_factory=list)  # qualified names
    enum_constants: List[str] = field(default_factory=list)
    package: Optional[str] = None
    source_path: Optional[str] = None

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def is_annotation(self) -> bool:
        return self.kind == TYPE_KIND_ANNOTATION

    @property
    def is_enum(self) -> bool:
        return self.kind == TYPE_KIND_ENUM

    @property
    def is_interface(self) -> bool:
        return self.kind == TYPE_KIND_INTERFACE

    def __post_init__(self):
        # Front ends pass the package explicitly for nested types
        if self.package is None:
            head, _, _ = self.qualified_name.rpartition(".")
            self.package = head
