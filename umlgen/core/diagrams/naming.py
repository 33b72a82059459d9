"""Type name rendering helpers shared by the mapper and the member filter."""

from typing import Dict, List, Optional

from ..constants import JAVA_LANG_PREFIX
from ..descriptors.models import TypeRef


def strip_java_lang(type_name: str) -> str:
    """Remove the java.lang package from a qualified type name."""
    if type_name.startswith(JAVA_LANG_PREFIX):
        return type_name[len(JAVA_LANG_PREFIX):]
    return type_name


def type_name(type_ref: Optional[TypeRef], simplify: bool = False) -> Optional[str]:
    """Erased display name of a type, with array brackets.

    Args:
        type_ref: Referenced type, None for "no type"
        simplify: Use the simple name instead of the qualified one
    """
    if type_ref is None:
        return None
    erased = type_ref.erased_name
    base = erased.rsplit(".", 1)[-1] if simplify else strip_java_lang(erased)
    return base + "[]" * type_ref.array_dimensions


def synthetic_parameters(parameter_types: List[TypeRef], simplify: bool = False) -> Dict[str, str]:
    """Map synthetic parameter names to type names, in declaration order.

    Names are "param" + simple type name + 1-based position, e.g.
    ``paramString1``.
    """
    parameters: Dict[str, str] = {}
    for counter, parameter_type in enumerate(parameter_types, start=1):
        simple_name = parameter_type.erased_name.rsplit(".", 1)[-1]
        parameters[f"param{simple_name}{counter}"] = type_name(parameter_type, simplify)
    return parameters
