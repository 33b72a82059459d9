"""umlgen: PlantUML class diagrams from Java type metadata.

Public API:
    ClassDiagramGenerator(config, resolver).generate_diagram_text() -> str
    generate_class_diagram(descriptors, config) -> str
    DiagramConfig / load_config(path)
"""

from .core.config import DiagramConfig, load_config
from .core.descriptors import JavaSourceScopeResolver, StaticScopeResolver, TypeDescriptor
from .core.diagrams import ClassDiagramGenerator, generate_class_diagram
from .core.errors import (
    DiagramRenderError,
    PatternCompileError,
    ScopeResolutionError,
    SourceReadError,
    UmlGenError,
)

__all__ = [
    "ClassDiagramGenerator",
    "generate_class_diagram",
    "DiagramConfig",
    "load_config",
    "JavaSourceScopeResolver",
    "StaticScopeResolver",
    "TypeDescriptor",
    "UmlGenError",
    "ScopeResolutionError",
    "SourceReadError",
    "PatternCompileError",
    "DiagramRenderError",
]
