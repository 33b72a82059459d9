"""Deterministic PlantUML serialization of a DiagramModel.

Classes are emitted sorted by display name, relationships sorted by their
own rendered line. Spacing is part of the output contract and must stay
byte-stable across releases.
"""

import logging
from typing import TYPE_CHECKING, Dict, List

from ..constants import DIAGRAM_END, DIAGRAM_START, LINE_SEPARATOR as NL
from .models import (
    ClassifierType,
    ClassType,
    DiagramModel,
    RelationshipType,
    UMLClass,
    UMLField,
    UMLMethod,
    UMLRelationship,
    VisibilityType,
)

if TYPE_CHECKING:
    from ..config import DiagramConfig

logger = logging.getLogger(__name__)

# Class header keyword per class type
_CLASS_TEMPLATES: Dict[ClassType, str] = {
    ClassType.CLASS: "class {name} {{",
    ClassType.ABSTRACT_CLASS: "abstract class {name} {{",
    ClassType.INTERFACE: "interface {name} {{",
    ClassType.ENUM: "enum {name} {{",
    ClassType.ANNOTATION: "annotation {name} {{",
}

_VISIBILITY_GLYPHS: Dict[VisibilityType, str] = {
    VisibilityType.PUBLIC: "+",
    VisibilityType.PROTECTED: "#",
    VisibilityType.PACKAGE_PRIVATE: "~",
    VisibilityType.PRIVATE: "-",
}

_FIELD_CLASSIFIER_BRACES: Dict[ClassifierType, str] = {
    ClassifierType.NONE: "",
    ClassifierType.STATIC: "{static} ",
    ClassifierType.ABSTRACT: "{abstract} ",
    ClassifierType.ABSTRACT_STATIC: "{static} {abstract} ",
}

# Method lines pad classifiers differently; the combined form has no trailing space
_METHOD_CLASSIFIER_BRACES: Dict[ClassifierType, str] = {
    ClassifierType.NONE: "",
    ClassifierType.STATIC: " {static} ",
    ClassifierType.ABSTRACT: " {abstract} ",
    ClassifierType.ABSTRACT_STATIC: " {static} {abstract}",
}

_ARROWS: Dict[RelationshipType, str] = {
    RelationshipType.INHERITANCE: "--|>",
    RelationshipType.REALIZATION: "..|>",
    RelationshipType.AGGREGATION: "o--",
    RelationshipType.DIRECTED_ASSOCIATION: "-->",
    RelationshipType.ASSOCIATION: "--",
}


class DiagramSerializer:
    """Renders a DiagramModel into PlantUML class diagram text."""

    def __init__(self, config: "DiagramConfig"):
        self._config = config

    def serialize(self, model: DiagramModel) -> str:
        config = self._config
        classes = sorted(model.classes.values(), key=lambda c: c.display_name)
        display_names = {c.qualified_name: c.display_name for c in classes}

        relationships: List[UMLRelationship] = []
        for uml_class in classes:
            relationships.extend(model.relationships.get(uml_class.qualified_name, []))
        relationship_lines = sorted(render_relationship(r, display_names) for r in relationships)

        parts = [DIAGRAM_START, config.diagram_direction, NL, NL]
        for uml_class in classes:
            parts.extend([render_class(uml_class, config.simplify_names), NL, NL])
        parts.extend([NL, NL])
        for line in relationship_lines:
            parts.extend([line, NL])
        if classes or relationship_lines:
            parts.extend(NL + toggle for toggle in self._hide_toggles())
        parts.extend([NL, NL, DIAGRAM_END])

        logger.debug(f"Serialized {len(classes)} classes and {len(relationship_lines)} relationships")
        return "".join(parts)

    def _hide_toggles(self) -> List[str]:
        toggles = []
        if self._config.hide_fields:
            toggles.append("hide fields")
        if self._config.hide_methods:
            toggles.append("hide methods")
        toggles.extend(f"hide {name}" for name in self._config.hide_classes)
        return toggles


def render_class(uml_class: UMLClass, simplify: bool = False) -> str:
    """Class block: header, one tab-indented line per member, closing brace."""
    lines = [_CLASS_TEMPLATES[uml_class.class_type].format(name=uml_class.display_name)]
    lines.extend("\t" + render_field(f) for f in uml_class.fields)
    lines.extend("\t" + render_method(m, simplify) for m in uml_class.methods)
    lines.append("}")
    return NL.join(lines)


def render_field(uml_field: UMLField) -> str:
    text = (
        "{field} "
        + _FIELD_CLASSIFIER_BRACES[uml_field.classifier]
        + _VISIBILITY_GLYPHS[uml_field.visibility]
        + uml_field.name
    )
    if uml_field.type_name is not None:
        text += " : " + uml_field.type_name
    return text


def render_method(method: UMLMethod, simplify: bool = False) -> str:
    parts = [
        "{method} ",
        _METHOD_CLASSIFIER_BRACES[method.classifier],
        _VISIBILITY_GLYPHS[method.visibility],
        method.name,
        " (",
    ]
    parameters = []
    for name, type_name in method.parameters.items():
        parameters.append(f" {type_name} " if simplify else f" {name} : {type_name} ")
    parts.append(",".join(parameters))
    parts.append(")")
    if method.result_type is not None:
        parts.append(" : " + method.result_type)
    for stereotype in method.stereotypes:
        parts.append(f" <<{stereotype}>> ")
    return "".join(parts)


def render_relationship(relationship: UMLRelationship, display_names: Dict[str, str]) -> str:
    """One relationship line, always rendered source -> target.

    Endpoints use the display names of the endpoint classes.
    """
    source = display_names.get(relationship.source, relationship.source)
    target = display_names.get(relationship.target, relationship.target)
    parts = [source, " "]
    if relationship.from_multiplicity is not None:
        parts.append(f'"{relationship.from_multiplicity}" ')
    parts.append(_ARROWS[relationship.kind])
    parts.append(" ")
    if relationship.to_multiplicity is not None:
        parts.append(f'"{relationship.to_multiplicity}" ')
    parts.append(target)
    if relationship.label is not None:
        parts.append(" : " + relationship.label)
    return "".join(parts)
