"""UML class diagram generation.

Maps type descriptors to a UML model and serializes it as PlantUML text.

Public API:
  ClassDiagramGenerator: resolve, map and serialize one diagram per call
  generate_class_diagram: the same over in-memory descriptors
"""

from .generator import ClassDiagramGenerator, generate_class_diagram

__all__ = ["ClassDiagramGenerator", "generate_class_diagram"]
