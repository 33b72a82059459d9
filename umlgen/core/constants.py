"""Shared constants for umlgen.

This module contains constants that are used across the descriptor front
end, the mapper and the serializer to keep naming rules in one place.
"""

# =============================================================================
# Java type naming
# =============================================================================

JAVA_LANG_PREFIX = "java.lang."

# Erasure of an unbounded type variable
OBJECT_TYPE = "java.lang.Object"

PRIMITIVE_TYPES = frozenset({
    "boolean",
    "byte",
    "char",
    "short",
    "int",
    "long",
    "float",
    "double",
    "void",
})

# Types visible without an import
JAVA_LANG_TYPES = frozenset({
    "Boolean",
    "Byte",
    "Character",
    "Class",
    "Comparable",
    "Deprecated",
    "Double",
    "Enum",
    "Exception",
    "Float",
    "FunctionalInterface",
    "Integer",
    "Iterable",
    "Long",
    "Number",
    "Object",
    "Override",
    "Runnable",
    "RuntimeException",
    "Short",
    "String",
    "StringBuilder",
    "SuppressWarnings",
    "Thread",
    "Throwable",
    "Void",
})

# Resolvable through "import java.util.*;"
JAVA_UTIL_TYPES = frozenset({
    "ArrayList",
    "Collection",
    "Date",
    "Deque",
    "HashMap",
    "HashSet",
    "Iterator",
    "LinkedHashMap",
    "LinkedHashSet",
    "LinkedList",
    "List",
    "Locale",
    "Map",
    "Optional",
    "Queue",
    "Set",
    "SortedMap",
    "SortedSet",
    "TreeMap",
    "TreeSet",
    "UUID",
})

DEPRECATED_ANNOTATION = "java.lang.Deprecated"

# =============================================================================
# Relationship inference
# =============================================================================

# Raw container types whose single type argument yields an aggregation
AGGREGATION_CONTAINER_TYPES = frozenset({
    "java.util.List",
    "java.util.Set",
})

AGGREGATION_OWNER_MULTIPLICITY = "1"
AGGREGATION_TARGET_MULTIPLICITY = "0..*"

# Prefixes of accessor methods suppressed when they match a declared field
GETTER_PREFIXES = ("get", "is")
SETTER_PREFIX = "set"

# =============================================================================
# Diagram text
# =============================================================================

DIAGRAM_START = "@startuml"
DIAGRAM_END = "@enduml"
LINE_SEPARATOR = "\n"
