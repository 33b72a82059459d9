"""Java source front end using tree-sitter.

Parses Java compilation units into TypeDescriptor objects without compiling
or loading anything. Parsing is two-pass: every compilation unit is parsed
and its declared type names collected first, then descriptors are built
with simple names resolved against imports, the current package, nested
types and the full set of declared names.

Extracts:
- Class, interface, enum and annotation type declarations (nested types as
  ``Outer.Inner``)
- Fields (including interface constants) with generic type arguments
- Methods with return and parameter types, modifiers and annotations
- Enum constants in declaration order

Constructors and records are not reported.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import tree_sitter
import tree_sitter_java

from ..constants import JAVA_LANG_TYPES, JAVA_UTIL_TYPES, OBJECT_TYPE, PRIMITIVE_TYPES
from .models import (
    TYPE_KIND_ANNOTATION,
    TYPE_KIND_CLASS,
    TYPE_KIND_ENUM,
    TYPE_KIND_INTERFACE,
    FieldDescriptor,
    MethodDescriptor,
    TypeDescriptor,
    TypeRef,
)

logger = logging.getLogger(__name__)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = {
    "class_declaration": TYPE_KIND_CLASS,
    "interface_declaration": TYPE_KIND_INTERFACE,
    "enum_declaration": TYPE_KIND_ENUM,
    "annotation_type_declaration": TYPE_KIND_ANNOTATION,
}

_PRIMITIVE_NODE_TYPES = frozenset({
    "integral_type",
    "floating_point_type",
    "boolean_type",
    "void_type",
})

_ANNOTATION_NODE_TYPES = frozenset({"marker_annotation", "annotation"})

_GENERIC_ARGUMENTS = re.compile(r"<[^<>]*>")


@dataclass
class _CompilationUnit:
    """One parsed source file plus its name-resolution context."""

    path: str
    source: bytes
    tree: tree_sitter.Tree
    package: str = ""
    single_imports: Dict[str, str] = field(default_factory=dict)  # simple -> qualified
    wildcard_imports: List[str] = field(default_factory=list)
    declared: List[str] = field(default_factory=list)


class JavaSourceParser:
    """tree-sitter based parser producing type descriptors."""

    def parse_source(self, source_text: str, file_path: str = "") -> List[TypeDescriptor]:
        """Parse a single compilation unit.

        Names are only resolved against the types this unit declares.
        """
        return self.parse_sources([(file_path, source_text)])

    def parse_sources(self, sources: Iterable[Tuple[str, str]]) -> List[TypeDescriptor]:
        """Parse several compilation units that resolve names against each other.

        Args:
            sources: (file_path, source_text) pairs

        Returns:
            One descriptor per declared type, in source order
        """
        units = [self._load_unit(path, text) for path, text in sources]

        known: Set[str] = set()
        for unit in units:
            known.update(unit.declared)

        descriptors: List[TypeDescriptor] = []
        for unit in units:
            descriptors.extend(_DescriptorBuilder(unit, known).build())

        logger.debug(f"Parsed {len(descriptors)} types from {len(units)} compilation units")
        return descriptors

    # =========================================================================
    # First pass
    # =========================================================================

    def _load_unit(self, path: str, source_text: str) -> _CompilationUnit:
        source = source_text.encode("utf-8")
        tree = tree_sitter.Parser(_JAVA_LANGUAGE).parse(source)
        if tree.root_node.has_error:
            logger.warning(f"Tree-sitter reported parse errors in {path or '<source>'}")

        unit = _CompilationUnit(path=path, source=source, tree=tree)
        for child in tree.root_node.children:
            if child.type == "package_declaration":
                unit.package = _declaration_name(_text(child, source), "package")
            elif child.type == "import_declaration":
                self._add_import(unit, _text(child, source))

        for child in tree.root_node.children:
            if child.type in _TYPE_DECLARATIONS:
                self._collect_declared(child, source, unit.package, unit.declared)
        return unit

    @staticmethod
    def _add_import(unit: _CompilationUnit, text: str) -> None:
        name = _declaration_name(text, "import")
        if name.startswith("static "):
            return
        if name.endswith(".*"):
            unit.wildcard_imports.append(name[:-2])
        else:
            unit.single_imports[name.rsplit(".", 1)[-1]] = name

    def _collect_declared(
        self, node: tree_sitter.Node, source: bytes, prefix: str, declared: List[str]
    ) -> None:
        name = _field_text(node, "name", source)
        if not name:
            return
        qualified = f"{prefix}.{name}" if prefix else name
        declared.append(qualified)
        for member in _body_members(node):
            if member.type in _TYPE_DECLARATIONS:
                self._collect_declared(member, source, qualified, declared)


class _DescriptorBuilder:
    """Second pass: builds descriptors for one compilation unit."""

    def __init__(self, unit: _CompilationUnit, known: Set[str]):
        self._unit = unit
        self._source = unit.source
        self._known = known

    def build(self) -> List[TypeDescriptor]:
        descriptors: List[TypeDescriptor] = []
        for child in self._unit.tree.root_node.children:
            if child.type in _TYPE_DECLARATIONS:
                self._build_type(child, [], {}, False, descriptors)
            elif child.type == "record_declaration":
                logger.debug(f"Skipping record in {self._unit.path}")
        return descriptors

    # =========================================================================
    # Declarations
    # =========================================================================

    def _build_type(
        self,
        node: tree_sitter.Node,
        scope: List[str],
        outer_type_variables: Mapping[str, str],
        in_interface: bool,
        descriptors: List[TypeDescriptor],
    ) -> None:
        name = _field_text(node, "name", self._source)
        if not name:
            return

        package = self._unit.package
        if scope:
            qualified_name = f"{scope[-1]}.{name}"
        else:
            qualified_name = f"{package}.{name}" if package else name
        kind = _TYPE_DECLARATIONS[node.type]
        inner_scope = scope + [qualified_name]
        type_variables = self._type_parameters(node, outer_type_variables, inner_scope)

        modifiers, annotations = self._modifiers(node, inner_scope)
        if in_interface:
            modifiers |= {"public", "static"}

        descriptor = TypeDescriptor(
            qualified_name=qualified_name,
            kind=kind,
            modifiers=frozenset(modifiers),
            annotations=annotations,
            package=package,
            source_path=self._unit.path,
        )
        self._add_supertypes(node, kind, descriptor, type_variables, inner_scope)

        is_interface = kind in (TYPE_KIND_INTERFACE, TYPE_KIND_ANNOTATION)
        for member in _body_members(node):
            if member.type in _TYPE_DECLARATIONS:
                self._build_type(member, inner_scope, type_variables, is_interface, descriptors)
            elif member.type in ("field_declaration", "constant_declaration"):
                descriptor.fields.extend(
                    self._fields(member, type_variables, inner_scope, is_interface)
                )
            elif member.type == "method_declaration":
                descriptor.methods.append(
                    self._method(member, type_variables, inner_scope, is_interface)
                )
            elif member.type == "enum_constant":
                constant = _field_text(member, "name", self._source)
                if constant:
                    descriptor.enum_constants.append(constant)
            elif member.type == "record_declaration":
                logger.debug(f"Skipping nested record in {qualified_name}")

        descriptors.append(descriptor)

    def _add_supertypes(
        self,
        node: tree_sitter.Node,
        kind: str,
        descriptor: TypeDescriptor,
        type_variables: Mapping[str, str],
        scope: List[str],
    ) -> None:
        for child in node.children:
            if child.type == "superclass" and kind == TYPE_KIND_CLASS:
                type_nodes = [c for c in child.named_children if c.type not in _ANNOTATION_NODE_TYPES]
                if type_nodes:
                    descriptor.superclass = self._type_ref(type_nodes[0], type_variables, scope)
            elif child.type in ("super_interfaces", "extends_interfaces"):
                for type_list in child.named_children:
                    if type_list.type == "type_list":
                        descriptor.interfaces.extend(
                            self._type_ref(t, type_variables, scope) for t in type_list.named_children
                        )

    def _fields(
        self,
        node: tree_sitter.Node,
        type_variables: Mapping[str, str],
        scope: List[str],
        in_interface: bool,
    ) -> List[FieldDescriptor]:
        type_node = node.child_by_field_name("type")
        if type_node is None:
            return []
        modifiers, _ = self._modifiers(node, scope)
        if in_interface:
            modifiers |= {"public", "static", "final"}

        fields = []
        for declarator in node.children:
            if declarator.type != "variable_declarator":
                continue
            name = _field_text(declarator, "name", self._source)
            if not name:
                continue
            field_type = self._type_ref(type_node, type_variables, scope)
            field_type.array_dimensions += _dimension_count(declarator, self._source)
            fields.append(FieldDescriptor(name=name, type=field_type, modifiers=frozenset(modifiers)))
        return fields

    def _method(
        self,
        node: tree_sitter.Node,
        type_variables: Mapping[str, str],
        scope: List[str],
        in_interface: bool,
    ) -> MethodDescriptor:
        type_variables = self._type_parameters(node, type_variables, scope)
        modifiers, annotations = self._modifiers(node, scope)
        if in_interface:
            if "private" not in modifiers:
                modifiers.add("public")
            has_body = node.child_by_field_name("body") is not None
            if not has_body and not modifiers & {"default", "static", "private"}:
                modifiers.add("abstract")

        return_type = None
        type_node = node.child_by_field_name("type")
        if type_node is not None:
            return_type = self._type_ref(type_node, type_variables, scope)
            return_type.array_dimensions += _dimension_count(node, self._source)

        return MethodDescriptor(
            name=_field_text(node, "name", self._source) or "",
            return_type=return_type,
            parameter_types=self._parameters(node, type_variables, scope),
            modifiers=frozenset(modifiers),
            annotations=annotations,
        )

    def _parameters(
        self, node: tree_sitter.Node, type_variables: Mapping[str, str], scope: List[str]
    ) -> List[TypeRef]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameter_types = []
        for child in params_node.named_children:
            if child.type == "formal_parameter":
                type_node = child.child_by_field_name("type")
                if type_node is None:
                    continue
                ref = self._type_ref(type_node, type_variables, scope)
                ref.array_dimensions += _dimension_count(child, self._source)
                parameter_types.append(ref)
            elif child.type == "spread_parameter":
                type_nodes = [
                    c for c in child.named_children
                    if c.type not in _ANNOTATION_NODE_TYPES
                    and c.type not in ("modifiers", "variable_declarator")
                ]
                if type_nodes:
                    ref = self._type_ref(type_nodes[0], type_variables, scope)
                    ref.array_dimensions += 1
                    parameter_types.append(ref)
        return parameter_types

    def _modifiers(self, node: tree_sitter.Node, scope: List[str]) -> Tuple[Set[str], List[str]]:
        """Modifier keywords and resolved annotation names of a declaration."""
        modifiers: Set[str] = set()
        annotations: List[str] = []
        for child in node.children:
            if child.type != "modifiers":
                continue
            for sub in child.children:
                if sub.type in _ANNOTATION_NODE_TYPES:
                    name = _field_text(sub, "name", self._source)
                    if name:
                        annotations.append(self._resolve_name(name, {}, scope).name)
                else:
                    text = _text(sub, self._source)
                    if text.isalpha():
                        modifiers.add(text)
        return modifiers, annotations

    def _type_parameters(
        self, node: tree_sitter.Node, outer: Mapping[str, str], scope: List[str]
    ) -> Dict[str, str]:
        """Type variables visible inside a declaration, mapped to their erasure."""
        variables = dict(outer)
        params_node = node.child_by_field_name("type_parameters")
        if params_node is None:
            return variables

        bounds: List[Tuple[str, Optional[tree_sitter.Node]]] = []
        for param in params_node.named_children:
            if param.type != "type_parameter":
                continue
            name = None
            bound = None
            for child in param.named_children:
                if name is None and child.type in ("type_identifier", "identifier"):
                    name = _text(child, self._source)
                elif child.type == "type_bound":
                    types = [c for c in child.named_children if c.type not in _ANNOTATION_NODE_TYPES]
                    bound = types[0] if types else None
            if name:
                variables[name] = OBJECT_TYPE
                bounds.append((name, bound))

        # Only the first bound takes part in erasure
        for name, bound in bounds:
            if bound is not None:
                variables[name] = self._type_ref(bound, variables, scope).erased_name
        return variables

    # =========================================================================
    # Types and name resolution
    # =========================================================================

    def _type_ref(
        self, node: tree_sitter.Node, type_variables: Mapping[str, str], scope: List[str]
    ) -> TypeRef:
        node_type = node.type
        text = _text(node, self._source)

        if node_type in _PRIMITIVE_NODE_TYPES:
            return TypeRef(name=text)

        if node_type in ("type_identifier", "scoped_type_identifier"):
            return self._resolve_name(_erase(text), type_variables, scope)

        if node_type == "generic_type":
            raw = node.named_children[0]
            ref = self._type_ref(raw, type_variables, scope)
            for child in node.named_children[1:]:
                if child.type == "type_arguments":
                    ref.arguments = [
                        self._type_argument(arg, type_variables, scope)
                        for arg in child.named_children
                        if arg.type not in _ANNOTATION_NODE_TYPES
                    ]
            return ref

        if node_type == "array_type":
            element = node.child_by_field_name("element")
            ref = self._type_ref(element, type_variables, scope)
            dimensions = node.child_by_field_name("dimensions")
            if dimensions is not None:
                ref.array_dimensions += _text(dimensions, self._source).count("[")
            return ref

        if node_type == "annotated_type":
            inner = [c for c in node.named_children if c.type not in _ANNOTATION_NODE_TYPES]
            if inner:
                return self._type_ref(inner[-1], type_variables, scope)

        return TypeRef(name=_erase(text))

    def _type_argument(
        self, node: tree_sitter.Node, type_variables: Mapping[str, str], scope: List[str]
    ) -> TypeRef:
        if node.type == "wildcard":
            return TypeRef(name="?", is_wildcard=True)
        return self._type_ref(node, type_variables, scope)

    def _resolve_name(self, name: str, type_variables: Mapping[str, str], scope: List[str]) -> TypeRef:
        if "." in name:
            head, rest = name.split(".", 1)
            resolved_head = self._lookup(head, scope)
            if resolved_head is not None:
                return TypeRef(name=f"{resolved_head}.{rest}")
            return TypeRef(name=name)

        if name in type_variables:
            return TypeRef(name=name, is_type_variable=True, erasure=type_variables[name])
        if name in PRIMITIVE_TYPES:
            return TypeRef(name=name)
        return TypeRef(name=self._lookup(name, scope) or name)

    def _lookup(self, simple_name: str, scope: Sequence[str]) -> Optional[str]:
        """Qualified name for a simple type name, or None if unresolvable."""
        for enclosing in reversed(scope):
            candidate = f"{enclosing}.{simple_name}"
            if candidate in self._known:
                return candidate

        unit = self._unit
        if simple_name in unit.single_imports:
            return unit.single_imports[simple_name]

        same_package = f"{unit.package}.{simple_name}" if unit.package else simple_name
        if same_package in self._known:
            return same_package

        for package in unit.wildcard_imports:
            candidate = f"{package}.{simple_name}"
            if candidate in self._known:
                return candidate
            if package == "java.util" and simple_name in JAVA_UTIL_TYPES:
                return candidate

        if simple_name in JAVA_LANG_TYPES:
            return f"java.lang.{simple_name}"
        return None


# =========================================================================
# Node helpers
# =========================================================================


def _text(node: tree_sitter.Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace").strip()


def _field_text(node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
    child = node.child_by_field_name(field_name)
    if child is not None:
        return _text(child, source)
    return None


def _body_members(node: tree_sitter.Node) -> List[tree_sitter.Node]:
    """Named members of a type body, flattening enum body declarations."""
    body = node.child_by_field_name("body")
    if body is None:
        return []
    members = []
    for child in body.named_children:
        if child.type == "enum_body_declarations":
            members.extend(child.named_children)
        else:
            members.append(child)
    return members


def _dimension_count(node: tree_sitter.Node, source: bytes) -> int:
    """Array dimensions written after a declarator name, e.g. ``int a[]``."""
    dimensions = node.child_by_field_name("dimensions")
    if dimensions is None:
        return 0
    return _text(dimensions, source).count("[")


def _declaration_name(text: str, keyword: str) -> str:
    """Strip keyword and trailing ';' from a package or import declaration."""
    name = text.strip().rstrip(";").strip()
    if name.startswith(keyword):
        name = name[len(keyword):]
    return re.sub(r"\s+", " ", name).strip().replace(" .", ".").replace(". ", ".")


def _erase(type_name: str) -> str:
    """Drop generic arguments from a (possibly scoped) type name."""
    previous = None
    while previous != type_name:
        previous = type_name
        type_name = _GENERIC_ARGUMENTS.sub("", type_name)
    return type_name.replace(" ", "")
