"""Tests for the tree-sitter Java front end."""

from umlgen.core.descriptors import JavaSourceParser


# =========================================================================
# Sample Java sources
# =========================================================================

ORDER = '''
package com.example.shop;

import java.util.List;
import java.util.Map;
import static java.util.Collections.emptyList;

@Audited
public abstract class Order extends BaseEntity implements Auditable {
    private static final long serialVersionUID = 1L;
    private List<LineItem> items;
    private Customer customer;
    private String note;
    private int[] codes;
    protected Map<String, List<LineItem>> byCategory;

    public String getNote() { return note; }

    public void setNote(String note) { this.note = note; }

    @Deprecated
    public synchronized void recalculate(Map<String, Integer> prices, int... quantities) { }

    protected abstract <T> T convert(T value);

    public static class Builder {
        private Order order;
    }
}
'''

LINE_ITEM = '''
package com.example.shop;

public class LineItem {
    long price;
}
'''

CUSTOMER = '''
package com.example.shop;

import java.util.*;

public class Customer {
    private Set<Order> orders;
    private Foo unresolved;
}
'''

BASE_ENTITY = '''
package com.example.shop;

public abstract class BaseEntity<ID> {
    protected ID id;
}
'''

AUDITABLE = '''
package com.example.shop;

public interface Auditable {
    int VERSION = 1;

    String auditTrail();

    default boolean isAudited() { return true; }

    static Auditable none() { return null; }
}
'''

AUDITED = '''
package com.example.shop;

public @interface Audited {
    String value() default "";
}
'''

STATUS = '''
package com.example.shop;

public enum Status {
    NEW("n"), PAID("p"), SHIPPED("s");

    private final String label;

    Status(String label) { this.label = label; }

    public String label() { return label; }
}
'''

BOX = '''
package com.example.shop;

public class Box<T extends Comparable<T>, K extends Key & Cloneable, C extends T> {
    private T max;
    private K key;
    private C copy;

    public <E extends Number> E first(E[] values) { return values[0]; }

    interface Key {}
}
'''

DEFAULT_PACKAGE = '''
class Outer {
    private Inner inner;

    class Inner {
    }
}

record Point(int x, int y) {}
'''


def _parse_shop():
    sources = [
        ("Order.java", ORDER),
        ("LineItem.java", LINE_ITEM),
        ("Customer.java", CUSTOMER),
        ("BaseEntity.java", BASE_ENTITY),
        ("Auditable.java", AUDITABLE),
        ("Audited.java", AUDITED),
        ("Status.java", STATUS),
    ]
    return {d.qualified_name: d for d in JavaSourceParser().parse_sources(sources)}


def _field(descriptor, name):
    return next(f for f in descriptor.fields if f.name == name)


def _method(descriptor, name):
    return next(m for m in descriptor.methods if m.name == name)


# =========================================================================
# Tests: Type declarations
# =========================================================================

class TestTypeDeclarations:
    def test_declared_types(self):
        types = _parse_shop()
        assert set(types) == {
            "com.example.shop.Order",
            "com.example.shop.Order.Builder",
            "com.example.shop.LineItem",
            "com.example.shop.Customer",
            "com.example.shop.BaseEntity",
            "com.example.shop.Auditable",
            "com.example.shop.Audited",
            "com.example.shop.Status",
        }

    def test_kinds(self):
        types = _parse_shop()
        assert types["com.example.shop.Order"].kind == "class"
        assert types["com.example.shop.Auditable"].kind == "interface"
        assert types["com.example.shop.Audited"].kind == "annotation"
        assert types["com.example.shop.Status"].kind == "enum"

    def test_class_modifiers_and_annotations(self):
        order = _parse_shop()["com.example.shop.Order"]
        assert {"public", "abstract"} <= order.modifiers
        assert order.annotations == ["com.example.shop.Audited"]
        assert order.package == "com.example.shop"
        assert order.source_path == "Order.java"

    def test_supertypes_resolved_in_same_package(self):
        order = _parse_shop()["com.example.shop.Order"]
        assert order.superclass.name == "com.example.shop.BaseEntity"
        assert [i.name for i in order.interfaces] == ["com.example.shop.Auditable"]

    def test_nested_type(self):
        builder = _parse_shop()["com.example.shop.Order.Builder"]
        assert builder.package == "com.example.shop"
        assert "static" in builder.modifiers
        assert _field(builder, "order").type.name == "com.example.shop.Order"

    def test_enum_constants_in_order(self):
        status = _parse_shop()["com.example.shop.Status"]
        assert status.enum_constants == ["NEW", "PAID", "SHIPPED"]
        assert [f.name for f in status.fields] == ["label"]
        # Constructors are not reported
        assert [m.name for m in status.methods] == ["label"]


# =========================================================================
# Tests: Fields
# =========================================================================

class TestFields:
    def test_field_types(self):
        order = _parse_shop()["com.example.shop.Order"]

        items = _field(order, "items").type
        assert items.name == "java.util.List"
        assert [a.name for a in items.arguments] == ["com.example.shop.LineItem"]

        assert _field(order, "customer").type.name == "com.example.shop.Customer"
        assert _field(order, "note").type.name == "java.lang.String"

        codes = _field(order, "codes").type
        assert codes.name == "int"
        assert codes.array_dimensions == 1

    def test_nested_generic_arguments(self):
        order = _parse_shop()["com.example.shop.Order"]
        by_category = _field(order, "byCategory").type
        assert by_category.name == "java.util.Map"
        key, value = by_category.arguments
        assert key.name == "java.lang.String"
        assert value.name == "java.util.List"
        assert value.arguments[0].name == "com.example.shop.LineItem"

    def test_field_modifiers(self):
        order = _parse_shop()["com.example.shop.Order"]
        assert _field(order, "serialVersionUID").modifiers == frozenset({"private", "static", "final"})
        assert _field(order, "byCategory").modifiers == frozenset({"protected"})

    def test_wildcard_import_and_unresolved_names(self):
        customer = _parse_shop()["com.example.shop.Customer"]
        orders = _field(customer, "orders").type
        assert orders.name == "java.util.Set"
        assert orders.arguments[0].name == "com.example.shop.Order"
        assert _field(customer, "unresolved").type.name == "Foo"

    def test_class_type_variable(self):
        base = _parse_shop()["com.example.shop.BaseEntity"]
        id_type = _field(base, "id").type
        assert id_type.is_type_variable
        assert id_type.name == "ID"

    def test_type_variable_erasure(self):
        base = _parse_shop()["com.example.shop.BaseEntity"]
        assert _field(base, "id").type.erased_name == "java.lang.Object"

        box = {d.qualified_name: d for d in JavaSourceParser().parse_source(BOX)}["com.example.shop.Box"]
        assert _field(box, "max").type.erasure == "java.lang.Comparable"
        assert _field(box, "key").type.erasure == "com.example.shop.Box.Key"
        assert _field(box, "copy").type.erased_name == "java.lang.Comparable"
        first = _method(box, "first")
        assert first.return_type.erasure == "java.lang.Number"
        assert first.parameter_types[0].erased_name == "java.lang.Number"
        assert first.parameter_types[0].array_dimensions == 1

    def test_interface_constants_are_public_static_final(self):
        auditable = _parse_shop()["com.example.shop.Auditable"]
        version = _field(auditable, "VERSION")
        assert version.modifiers == frozenset({"public", "static", "final"})
        assert version.type.name == "int"


# =========================================================================
# Tests: Methods
# =========================================================================

class TestMethods:
    def test_method_signature(self):
        order = _parse_shop()["com.example.shop.Order"]
        recalculate = _method(order, "recalculate")

        assert recalculate.return_type.name == "void"
        assert recalculate.is_deprecated
        assert "synchronized" in recalculate.modifiers

        prices, quantities = recalculate.parameter_types
        assert prices.name == "java.util.Map"
        assert [a.name for a in prices.arguments] == ["java.lang.String", "java.lang.Integer"]
        assert quantities.name == "int"
        assert quantities.array_dimensions == 1

    def test_generic_method(self):
        order = _parse_shop()["com.example.shop.Order"]
        convert = _method(order, "convert")
        assert convert.return_type.is_type_variable
        assert convert.parameter_types[0].is_type_variable
        assert {"protected", "abstract"} <= convert.modifiers

    def test_accessors_are_reported(self):
        order = _parse_shop()["com.example.shop.Order"]
        names = [m.name for m in order.methods]
        assert names == ["getNote", "setNote", "recalculate", "convert"]

    def test_interface_method_modifiers(self):
        auditable = _parse_shop()["com.example.shop.Auditable"]
        assert _method(auditable, "auditTrail").modifiers == frozenset({"public", "abstract"})
        assert "abstract" not in _method(auditable, "isAudited").modifiers
        assert "public" in _method(auditable, "isAudited").modifiers
        assert {"public", "static"} <= _method(auditable, "none").modifiers
        assert "abstract" not in _method(auditable, "none").modifiers


# =========================================================================
# Tests: Compilation units
# =========================================================================

class TestCompilationUnits:
    def test_default_package_nesting(self):
        types = {d.qualified_name: d for d in JavaSourceParser().parse_source(DEFAULT_PACKAGE, "Outer.java")}
        # Records are skipped
        assert set(types) == {"Outer", "Outer.Inner"}
        assert types["Outer.Inner"].package == ""
        assert _field(types["Outer"], "inner").type.name == "Outer.Inner"

    def test_single_unit_does_not_resolve_other_files(self):
        descriptors = JavaSourceParser().parse_source(LINE_ITEM.replace("long", "Customer"))
        assert descriptors[0].fields[0].type.name == "Customer"

