"""Field relationship classification.

Decides per declared field whether it denotes an aggregation (a List/Set of
an in-scope type), a directed association (a field typed by an in-scope
type), or a plain attribute that is handed on to the member filter.
"""

import logging
from typing import AbstractSet, List, Optional

from ..constants import (
    AGGREGATION_CONTAINER_TYPES,
    AGGREGATION_OWNER_MULTIPLICITY,
    AGGREGATION_TARGET_MULTIPLICITY,
)
from ..descriptors.models import FieldDescriptor, TypeRef
from .models import RelationshipType, UMLRelationship

logger = logging.getLogger(__name__)


class RelationshipClassifier:
    """Classifies fields against the set of in-scope qualified names."""

    def __init__(self, in_scope: AbstractSet[str]):
        self._in_scope = in_scope

    @property
    def in_scope(self) -> AbstractSet[str]:
        return self._in_scope

    def classify(self, owner: str, field_descriptor: FieldDescriptor) -> List[UMLRelationship]:
        """Return the relationships a field denotes.

        An empty list means the field is a literal attribute candidate.
        A non-empty list means the field is consumed entirely.
        """
        field_type = field_descriptor.type

        if self.is_aggregation_container(field_type):
            aggregations = [
                UMLRelationship(
                    source=owner,
                    target=target,
                    kind=RelationshipType.AGGREGATION,
                    from_multiplicity=AGGREGATION_OWNER_MULTIPLICITY,
                    to_multiplicity=AGGREGATION_TARGET_MULTIPLICITY,
                    label=field_descriptor.name,
                )
                for target in self._resolved_arguments(field_type)
            ]
            if aggregations:
                return aggregations

        target = self.resolve_in_scope(field_type)
        if target is not None:
            return [
                UMLRelationship(
                    source=owner,
                    target=target,
                    kind=RelationshipType.DIRECTED_ASSOCIATION,
                    label=field_descriptor.name,
                )
            ]

        return []

    def resolve_in_scope(self, type_ref: Optional[TypeRef]) -> Optional[str]:
        """Qualified name of the referenced type if it is part of the diagram.

        Type variables, wildcards, primitives and arrays never resolve.
        """
        if type_ref is None or type_ref.is_type_variable or type_ref.is_wildcard:
            return None
        if type_ref.is_array or type_ref.is_primitive:
            return None
        if type_ref.name in self._in_scope:
            return type_ref.name
        return None

    @staticmethod
    def is_aggregation_container(type_ref: TypeRef) -> bool:
        return (
            not type_ref.is_array
            and type_ref.name in AGGREGATION_CONTAINER_TYPES
            and len(type_ref.arguments) == 1
        )

    def _resolved_arguments(self, type_ref: TypeRef) -> List[str]:
        targets = []
        for argument in type_ref.arguments:
            target = self.resolve_in_scope(argument)
            if target is not None:
                targets.append(target)
            else:
                logger.debug(f"Type argument {argument.name} of {type_ref.name} is not in scope")
        return targets
