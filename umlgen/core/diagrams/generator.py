"""Class diagram generation pipeline.

    scope resolver -> domain mapper -> diagram serializer -> PlantUML text

Every call to generate_diagram_text() resolves, maps and serializes from
scratch in its own GenerationContext; the generator object itself holds
only configuration and the resolver.
"""

import logging
from typing import TYPE_CHECKING, Iterable

from ..descriptors.models import TypeDescriptor
from ..descriptors.resolver import ScopeResolver, StaticScopeResolver
from .mapper import DomainMapper, GenerationContext
from .serializer import DiagramSerializer

if TYPE_CHECKING:
    from ..config import DiagramConfig

logger = logging.getLogger(__name__)


class ClassDiagramGenerator:
    """Generates a PlantUML class diagram for a configured type scope.

    Usage:
        generator = ClassDiagramGenerator(config, JavaSourceScopeResolver(["src/main/java"]))
        text = generator.generate_diagram_text()
    """

    def __init__(self, config: "DiagramConfig", resolver: ScopeResolver):
        self._config = config
        self._resolver = resolver

    @property
    def config(self) -> "DiagramConfig":
        return self._config

    def generate_diagram_text(self) -> str:
        """Resolve the scope, map it and render the diagram.

        Raises:
            ScopeResolutionError: A scan package resolved to zero types
            SourceReadError: Type metadata could not be read
            PatternCompileError: A configured pattern is invalid
        """
        self._config.validate()

        descriptors = self._resolver.resolve(self._config)
        context = GenerationContext.create(descriptors)
        logger.info(f"Generating class diagram for {len(context.descriptors)} types")

        model = DomainMapper(self._config).map(context)
        return DiagramSerializer(self._config).serialize(model)


def generate_class_diagram(
    descriptors: Iterable[TypeDescriptor], config: "DiagramConfig"
) -> str:
    """Generate diagram text for in-memory descriptors.

    The descriptors are the discoverable universe; the config's scope
    options still select from them.
    """
    return ClassDiagramGenerator(config, StaticScopeResolver(descriptors)).generate_diagram_text()
