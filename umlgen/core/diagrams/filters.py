"""Member inclusion policy.

Applies, in order, to every literal attribute candidate and every method:

1. the removal toggle of the member's category
2. getter/setter suppression (methods only)
3. the name blacklist pattern of the category
4. the excluded classifier set of the category
5. the visibility ceiling of the category

Fields with both a getter and a setter are shown as public. Methods get
"deprecated" and "synchronized" stereotypes.
"""

import logging
from typing import TYPE_CHECKING, FrozenSet, Iterable, Optional, Sequence

from ..constants import GETTER_PREFIXES, SETTER_PREFIX
from ..descriptors.models import FieldDescriptor, MethodDescriptor
from ..errors import compile_pattern
from .models import ClassifierType, UMLField, UMLMethod, VisibilityType
from .naming import synthetic_parameters, type_name

if TYPE_CHECKING:
    from ..config import DiagramConfig

logger = logging.getLogger(__name__)


def visibility_from_modifiers(modifiers: FrozenSet[str]) -> VisibilityType:
    if "public" in modifiers:
        return VisibilityType.PUBLIC
    if "private" in modifiers:
        return VisibilityType.PRIVATE
    if "protected" in modifiers:
        return VisibilityType.PROTECTED
    return VisibilityType.PACKAGE_PRIVATE


def classifier_from_modifiers(modifiers: FrozenSet[str]) -> ClassifierType:
    return ClassifierType.from_flags("static" in modifiers, "abstract" in modifiers)


def is_accessor_of_field(method_name: str, field_names: Iterable[str]) -> bool:
    """True if a get/is/set method name matches a field name (ignoring case)."""
    for prefix in GETTER_PREFIXES + (SETTER_PREFIX,):
        if method_name.startswith(prefix):
            suffix = method_name[len(prefix):].lower()
            return any(name.lower() == suffix for name in field_names)
    return False


def has_getter_and_setter(field_name: str, method_names: Iterable[str]) -> bool:
    getters = {(prefix + field_name).lower() for prefix in GETTER_PREFIXES}
    setter = (SETTER_PREFIX + field_name).lower()
    has_getter = has_setter = False
    for name in method_names:
        lowered = name.lower()
        if lowered in getters:
            has_getter = True
        elif lowered == setter:
            has_setter = True
        if has_getter and has_setter:
            return True
    return False


class MemberFilter:
    """Decides which fields and methods of a type appear in the diagram.

    Patterns are compiled on construction, so an invalid pattern fails the
    generation before any class is mapped.
    """

    def __init__(self, config: "DiagramConfig"):
        self._config = config
        self._field_blacklist = compile_pattern("field_blacklist_pattern", config.field_blacklist_pattern)
        self._method_blacklist = compile_pattern("method_blacklist_pattern", config.method_blacklist_pattern)

    def filter_field(
        self, field_descriptor: FieldDescriptor, declared_methods: Sequence[MethodDescriptor]
    ) -> Optional[UMLField]:
        """Build the attribute line for a field, or None if it is dropped."""
        config = self._config
        name = field_descriptor.name

        if config.remove_fields:
            return None
        if self._field_blacklist is not None and self._field_blacklist.fullmatch(name):
            logger.debug(f"Field {name} matches the field blacklist")
            return None

        classifier = classifier_from_modifiers(field_descriptor.modifiers)
        if classifier in config.field_classifiers_to_ignore:
            logger.debug(f"Field {name} has ignored classifier {classifier.name}")
            return None

        visibility = visibility_from_modifiers(field_descriptor.modifiers)
        if has_getter_and_setter(name, (m.name for m in declared_methods)):
            visibility = VisibilityType.PUBLIC
        if not visibility.admitted_by(config.max_visibility_fields):
            logger.debug(f"Field {name} is above the field visibility ceiling")
            return None

        return UMLField(
            classifier=classifier,
            visibility=visibility,
            name=name,
            type_name=type_name(field_descriptor.type),
        )

    def filter_method(
        self, method: MethodDescriptor, declared_fields: Sequence[FieldDescriptor]
    ) -> Optional[UMLMethod]:
        """Build the operation line for a method, or None if it is dropped."""
        config = self._config
        name = method.name

        if config.remove_methods:
            return None
        if is_accessor_of_field(name, (f.name for f in declared_fields)):
            logger.debug(f"Method {name} is an accessor of a declared field")
            return None
        if self._method_blacklist is not None and self._method_blacklist.fullmatch(name):
            logger.debug(f"Method {name} matches the method blacklist")
            return None

        classifier = classifier_from_modifiers(method.modifiers)
        if classifier in config.method_classifiers_to_ignore:
            logger.debug(f"Method {name} has ignored classifier {classifier.name}")
            return None

        visibility = visibility_from_modifiers(method.modifiers)
        if not visibility.admitted_by(config.max_visibility_methods):
            logger.debug(f"Method {name} is above the method visibility ceiling")
            return None

        stereotypes = []
        if method.is_deprecated:
            stereotypes.append("deprecated")
        if "synchronized" in method.modifiers:
            stereotypes.append("synchronized")

        return UMLMethod(
            classifier=classifier,
            visibility=visibility,
            result_type=type_name(method.return_type, config.simplify_names),
            name=name,
            parameters=synthetic_parameters(method.parameter_types, config.simplify_names),
            stereotypes=stereotypes,
        )
