"""UML class diagram data models.

Defines the abstract diagram entities the mapper produces and the serializer
renders. These are pure data containers, no mapping or rendering logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class VisibilityType(Enum):
    """Member visibility, declared loosest to strictest."""

    PUBLIC = 0
    PROTECTED = 1
    PACKAGE_PRIVATE = 2
    PRIVATE = 3

    def admitted_by(self, ceiling: Optional["VisibilityType"]) -> bool:
        """True if this visibility is at or looser than the ceiling.

        No ceiling admits everything.
        """
        return ceiling is None or self.value <= ceiling.value


class ClassifierType(Enum):
    NONE = "none"
    STATIC = "static"
    ABSTRACT = "abstract"
    ABSTRACT_STATIC = "abstract_static"

    @classmethod
    def from_flags(cls, is_static: bool, is_abstract: bool) -> "ClassifierType":
        if is_static:
            return cls.ABSTRACT_STATIC if is_abstract else cls.STATIC
        if is_abstract:
            return cls.ABSTRACT
        return cls.NONE


class ClassType(Enum):
    CLASS = "class"
    ABSTRACT_CLASS = "abstract_class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"


class RelationshipType(Enum):
    INHERITANCE = "inheritance"
    REALIZATION = "realization"
    AGGREGATION = "aggregation"
    DIRECTED_ASSOCIATION = "directed_association"
    ASSOCIATION = "association"


@dataclass
class UMLField:
    """A literal attribute line. Enum constants carry no type."""

    classifier: ClassifierType
    visibility: VisibilityType
    name: str
    type_name: Optional[str] = None


@dataclass
class UMLMethod:
    """An operation line.

    ``parameters`` maps synthetic parameter names to type names; its
    insertion order is the declaration order.
    """

    classifier: ClassifierType
    visibility: VisibilityType
    result_type: Optional[str]
    name: str
    parameters: Dict[str, str] = field(default_factory=dict)
    stereotypes: List[str] = field(default_factory=list)


@dataclass
class UMLClass:
    """A class box, keyed in the model by its qualified name."""

    visibility: VisibilityType
    class_type: ClassType
    qualified_name: str
    display_name: str
    fields: List[UMLField] = field(default_factory=list)
    methods: List[UMLMethod] = field(default_factory=list)
    stereotypes: List[str] = field(default_factory=list)


@dataclass
class UMLRelationship:
    """A directed edge between two in-scope types (qualified names)."""

    source: str
    target: str
    kind: RelationshipType
    from_multiplicity: Optional[str] = None
    to_multiplicity: Optional[str] = None
    label: Optional[str] = None


@dataclass
class DiagramModel:
    """Classes and their outgoing relationships, both keyed by qualified name."""

    classes: Dict[str, UMLClass] = field(default_factory=dict)
    relationships: Dict[str, List[UMLRelationship]] = field(default_factory=dict)

    def add_class(self, uml_class: UMLClass) -> None:
        self.classes[uml_class.qualified_name] = uml_class
        self.relationships.setdefault(uml_class.qualified_name, [])

    def add_relationship(self, relationship: UMLRelationship) -> None:
        self.relationships.setdefault(relationship.source, []).append(relationship)

    def relationship_count(self) -> int:
        return sum(len(rels) for rels in self.relationships.values())
