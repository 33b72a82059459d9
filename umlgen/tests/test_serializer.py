"""Tests for PlantUML serialization: line formats, ordering and framing."""

from umlgen.core.config import DiagramConfig
from umlgen.core.diagrams.models import (
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
from umlgen.core.diagrams.serializer import (
    DiagramSerializer,
    render_class,
    render_field,
    render_method,
    render_relationship,
)


# =========================================================================
# Helpers
# =========================================================================

def _make_class(name: str, class_type: ClassType = ClassType.CLASS, display_name: str = None, **kwargs) -> UMLClass:
    return UMLClass(
        visibility=VisibilityType.PUBLIC,
        class_type=class_type,
        qualified_name=name,
        display_name=display_name or name,
        **kwargs,
    )


def _make_method(name: str = "run", parameters: dict = None, result_type: str = None, **kwargs) -> UMLMethod:
    return UMLMethod(
        classifier=kwargs.pop("classifier", ClassifierType.NONE),
        visibility=kwargs.pop("visibility", VisibilityType.PUBLIC),
        result_type=result_type,
        name=name,
        parameters=parameters or {},
        **kwargs,
    )


def _make_model(*classes: UMLClass, relationships=()) -> DiagramModel:
    model = DiagramModel()
    for uml_class in classes:
        model.add_class(uml_class)
    for relationship in relationships:
        model.add_relationship(relationship)
    return model


# =========================================================================
# Tests: Member lines
# =========================================================================

class TestFieldLine:
    def test_private_field_with_type(self):
        f = UMLField(ClassifierType.NONE, VisibilityType.PRIVATE, "count", "int")
        assert render_field(f) == "{field} -count : int"

    def test_enum_constant_has_no_type(self):
        f = UMLField(ClassifierType.NONE, VisibilityType.PUBLIC, "RED")
        assert render_field(f) == "{field} +RED"

    def test_classifier_braces(self):
        static = UMLField(ClassifierType.STATIC, VisibilityType.PROTECTED, "cache", "Map")
        both = UMLField(ClassifierType.ABSTRACT_STATIC, VisibilityType.PACKAGE_PRIVATE, "x", "int")
        assert render_field(static) == "{field} {static} #cache : Map"
        assert render_field(both) == "{field} {static} {abstract} ~x : int"


class TestMethodLine:
    def test_no_parameters_no_result(self):
        assert render_method(_make_method("run")) == "{method} +run ()"

    def test_parameters_with_names(self):
        method = _make_method(
            "greet",
            parameters={"paramString1": "String", "paramint2": "int"},
            result_type="String",
        )
        assert render_method(method) == (
            "{method} +greet ( paramString1 : String , paramint2 : int ) : String"
        )

    def test_simplify_renders_types_only(self):
        method = _make_method(
            "greet",
            parameters={"paramString1": "String", "paramint2": "int"},
            result_type="String",
        )
        assert render_method(method, simplify=True) == "{method} +greet ( String , int ) : String"

    def test_stereotypes_in_order(self):
        method = _make_method(
            "update",
            classifier=ClassifierType.ABSTRACT,
            visibility=VisibilityType.PROTECTED,
            stereotypes=["deprecated", "synchronized"],
        )
        assert render_method(method) == (
            "{method}  {abstract} #update () <<deprecated>>  <<synchronized>> "
        )

    def test_static_classifier_spacing(self):
        method = _make_method("run", classifier=ClassifierType.STATIC, result_type="void")
        assert render_method(method) == "{method}  {static} +run () : void"

    def test_abstract_static_has_no_trailing_space(self):
        method = _make_method("run", classifier=ClassifierType.ABSTRACT_STATIC, result_type="void")
        assert render_method(method) == "{method}  {static} {abstract}+run () : void"


# =========================================================================
# Tests: Class blocks and relationships
# =========================================================================

class TestClassBlock:
    def test_header_per_class_type(self):
        expected = {
            ClassType.CLASS: "class pkg.A {",
            ClassType.ABSTRACT_CLASS: "abstract class pkg.A {",
            ClassType.INTERFACE: "interface pkg.A {",
            ClassType.ENUM: "enum pkg.A {",
            ClassType.ANNOTATION: "annotation pkg.A {",
        }
        for class_type, header in expected.items():
            assert render_class(_make_class("pkg.A", class_type)).split("\n")[0] == header

    def test_members_are_tab_indented_fields_first(self):
        uml_class = _make_class(
            "pkg.A",
            fields=[UMLField(ClassifierType.NONE, VisibilityType.PRIVATE, "count", "int")],
            methods=[_make_method("run")],
        )
        assert render_class(uml_class) == (
            "class pkg.A {\n"
            "\t{field} -count : int\n"
            "\t{method} +run ()\n"
            "}"
        )


class TestRelationshipLine:
    def test_arrows(self):
        names = {}
        cases = {
            RelationshipType.INHERITANCE: "pkg.A --|> pkg.B",
            RelationshipType.REALIZATION: "pkg.A ..|> pkg.B",
            RelationshipType.ASSOCIATION: "pkg.A -- pkg.B",
        }
        for kind, line in cases.items():
            assert render_relationship(UMLRelationship("pkg.A", "pkg.B", kind), names) == line

    def test_aggregation_with_multiplicities_and_label(self):
        rel = UMLRelationship("pkg.A", "pkg.B", RelationshipType.AGGREGATION, "1", "0..*", "items")
        assert render_relationship(rel, {}) == 'pkg.A "1" o-- "0..*" pkg.B : items'

    def test_directed_association_label(self):
        rel = UMLRelationship("pkg.A", "pkg.B", RelationshipType.DIRECTED_ASSOCIATION, label="owner")
        assert render_relationship(rel, {}) == "pkg.A --> pkg.B : owner"

    def test_endpoints_use_display_names(self):
        rel = UMLRelationship("pkg.A", "pkg.B", RelationshipType.INHERITANCE)
        assert render_relationship(rel, {"pkg.A": "A", "pkg.B": "B"}) == "A --|> B"


# =========================================================================
# Tests: Document framing
# =========================================================================

class TestDocument:
    def test_empty_model(self):
        text = DiagramSerializer(DiagramConfig(hide_fields=True)).serialize(DiagramModel())
        # No hide block without classes or relationships
        assert text == "@startuml\n\n\n\n\n\n@enduml"

    def test_single_class(self):
        model = _make_model(_make_class(
            "pkg.A",
            fields=[UMLField(ClassifierType.NONE, VisibilityType.PRIVATE, "count", "int")],
        ))
        text = DiagramSerializer(DiagramConfig()).serialize(model)
        assert text == (
            "@startuml\n\n"
            "class pkg.A {\n\t{field} -count : int\n}\n\n"
            "\n\n"
            "\n\n@enduml"
        )

    def test_relationships_and_hide_block(self):
        config = DiagramConfig(hide_fields=True, hide_methods=True, hide_classes=["pkg.B", "pkg.A"])
        model = _make_model(
            _make_class("pkg.B"),
            _make_class("pkg.A"),
            relationships=[UMLRelationship("pkg.A", "pkg.B", RelationshipType.INHERITANCE)],
        )
        text = DiagramSerializer(config).serialize(model)
        assert text == (
            "@startuml\n\n"
            "class pkg.A {\n}\n\n"
            "class pkg.B {\n}\n\n"
            "\n\n"
            "pkg.A --|> pkg.B\n"
            "\nhide fields"
            "\nhide methods"
            "\nhide pkg.B"
            "\nhide pkg.A"
            "\n\n@enduml"
        )

    def test_direction_appended_after_open_marker(self):
        config = DiagramConfig(diagram_direction="\nleft to right direction")
        text = DiagramSerializer(config).serialize(_make_model(_make_class("pkg.A")))
        assert text.startswith("@startuml\nleft to right direction\n\nclass pkg.A {")

    def test_classes_sorted_by_display_name(self):
        config = DiagramConfig(simplify_names=True)
        model = _make_model(
            _make_class("a.Zebra", display_name="Zebra"),
            _make_class("z.Apple", display_name="Apple"),
        )
        text = DiagramSerializer(config).serialize(model)
        assert text.index("class Apple") < text.index("class Zebra")

    def test_relationships_sorted_by_rendered_line(self):
        model = _make_model(
            _make_class("pkg.A"),
            _make_class("pkg.B"),
            _make_class("pkg.C"),
            relationships=[
                UMLRelationship("pkg.B", "pkg.C", RelationshipType.INHERITANCE),
                UMLRelationship("pkg.A", "pkg.C", RelationshipType.REALIZATION),
                UMLRelationship("pkg.A", "pkg.B", RelationshipType.DIRECTED_ASSOCIATION, label="b"),
            ],
        )
        text = DiagramSerializer(DiagramConfig()).serialize(model)
        lines = [line for line in text.split("\n") if "pkg." in line and "{" not in line]
        assert lines == sorted(lines)
        assert lines == ["pkg.A --> pkg.B : b", "pkg.A ..|> pkg.C", "pkg.B --|> pkg.C"]
