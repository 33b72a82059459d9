"""Type descriptor -> UML domain mapping.

Each generation call owns one GenerationContext: the sorted descriptors, the
set of in-scope qualified names and the DiagramModel being built. Nothing is
kept between calls.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, Iterable, List

from ..descriptors.models import TypeDescriptor
from .classifier import RelationshipClassifier
from .filters import MemberFilter
from .models import (
    ClassifierType,
    ClassType,
    DiagramModel,
    RelationshipType,
    UMLClass,
    UMLField,
    UMLRelationship,
    VisibilityType,
)

if TYPE_CHECKING:
    from ..config import DiagramConfig

logger = logging.getLogger(__name__)


@dataclass
class GenerationContext:
    """Scratch state of a single generation invocation."""

    descriptors: List[TypeDescriptor]
    in_scope: FrozenSet[str]
    model: DiagramModel = field(default_factory=DiagramModel)

    @classmethod
    def create(cls, descriptors: Iterable[TypeDescriptor]) -> "GenerationContext":
        unique = {d.qualified_name: d for d in descriptors}
        ordered = [unique[name] for name in sorted(unique)]
        return cls(descriptors=ordered, in_scope=frozenset(unique))


def class_visibility(modifiers: FrozenSet[str]) -> VisibilityType:
    if "private" in modifiers:
        return VisibilityType.PRIVATE
    if "protected" in modifiers:
        return VisibilityType.PROTECTED
    return VisibilityType.PUBLIC


def class_type_of(descriptor: TypeDescriptor) -> ClassType:
    if descriptor.is_annotation:
        return ClassType.ANNOTATION
    if descriptor.is_enum:
        return ClassType.ENUM
    if descriptor.is_interface:
        return ClassType.INTERFACE
    if "abstract" in descriptor.modifiers:
        return ClassType.ABSTRACT_CLASS
    return ClassType.CLASS


class DomainMapper:
    """Maps in-scope type descriptors to UML classes and relationships."""

    def __init__(self, config: "DiagramConfig"):
        self._config = config
        self._member_filter = MemberFilter(config)

    def map(self, context: GenerationContext) -> DiagramModel:
        """Populate ``context.model`` from ``context.descriptors``.

        Returns:
            The populated model
        """
        classifier = RelationshipClassifier(context.in_scope)
        for descriptor in context.descriptors:
            self._map_type(descriptor, context, classifier)

        logger.info(
            f"Mapped {len(context.model.classes)} classes with "
            f"{context.model.relationship_count()} relationships"
        )
        return context.model

    def _map_type(
        self,
        descriptor: TypeDescriptor,
        context: GenerationContext,
        classifier: RelationshipClassifier,
    ) -> None:
        class_type = class_type_of(descriptor)
        uml_class = UMLClass(
            visibility=class_visibility(descriptor.modifiers),
            class_type=class_type,
            qualified_name=descriptor.qualified_name,
            display_name=descriptor.simple_name if self._config.simplify_names else descriptor.qualified_name,
        )
        model = context.model
        model.add_class(uml_class)

        if class_type == ClassType.ENUM:
            self._add_enum_constants(descriptor, uml_class)
        elif class_type != ClassType.ANNOTATION:
            self._add_fields(descriptor, uml_class, model, classifier)
            self._add_methods(descriptor, uml_class)

        self._add_type_relationships(descriptor, model, classifier)

    @staticmethod
    def _add_enum_constants(descriptor: TypeDescriptor, uml_class: UMLClass) -> None:
        for constant in descriptor.enum_constants:
            uml_class.fields.append(UMLField(ClassifierType.NONE, VisibilityType.PUBLIC, constant))

    def _add_fields(
        self,
        descriptor: TypeDescriptor,
        uml_class: UMLClass,
        model: DiagramModel,
        classifier: RelationshipClassifier,
    ) -> None:
        for field_descriptor in descriptor.fields:
            relationships = classifier.classify(descriptor.qualified_name, field_descriptor)
            if relationships:
                for relationship in relationships:
                    model.add_relationship(relationship)
                continue

            uml_field = self._member_filter.filter_field(field_descriptor, descriptor.methods)
            if uml_field is not None:
                uml_class.fields.append(uml_field)

    def _add_methods(self, descriptor: TypeDescriptor, uml_class: UMLClass) -> None:
        for method in descriptor.methods:
            uml_method = self._member_filter.filter_method(method, descriptor.fields)
            if uml_method is not None:
                uml_class.methods.append(uml_method)

    @staticmethod
    def _add_type_relationships(
        descriptor: TypeDescriptor,
        model: DiagramModel,
        classifier: RelationshipClassifier,
    ) -> None:
        source = descriptor.qualified_name

        superclass = classifier.resolve_in_scope(descriptor.superclass)
        if superclass is not None:
            model.add_relationship(UMLRelationship(source, superclass, RelationshipType.INHERITANCE))

        for interface in descriptor.interfaces:
            target = classifier.resolve_in_scope(interface)
            if target is not None:
                model.add_relationship(UMLRelationship(source, target, RelationshipType.REALIZATION))

        for annotation in descriptor.annotations:
            if annotation in classifier.in_scope:
                model.add_relationship(UMLRelationship(source, annotation, RelationshipType.ASSOCIATION))
