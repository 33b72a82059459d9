"""Diagram generation configuration.

DiagramConfig carries every recognized option. It can be built directly,
from a plain mapping, or from a YAML file:

    sources: [src/main/java]
    scan_packages: [com.example.domain]
    exclude_pattern: ".*Test"
    hide_classes: [com.example.domain.Internal]
    max_visibility_methods: protected
    method_classifiers_to_ignore: [static]
    simplify_names: true
"""

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

import yaml

from .diagrams.models import ClassifierType, VisibilityType

logger = logging.getLogger(__name__)


@dataclass
class DiagramConfig:
    # Scope selection
    scan_packages: List[str] = field(default_factory=list)
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None
    source_paths: List[str] = field(default_factory=list)

    # Hide toggles (rendered as directives, the model is unchanged)
    hide_classes: List[str] = field(default_factory=list)
    hide_fields: bool = False
    hide_methods: bool = False

    # Member inclusion policy
    remove_fields: bool = False
    remove_methods: bool = False
    field_blacklist_pattern: Optional[str] = None
    method_blacklist_pattern: Optional[str] = None
    field_classifiers_to_ignore: Set[ClassifierType] = field(default_factory=set)
    method_classifiers_to_ignore: Set[ClassifierType] = field(default_factory=set)
    max_visibility_fields: Optional[VisibilityType] = None
    max_visibility_methods: Optional[VisibilityType] = None

    # Rendering
    simplify_names: bool = False
    diagram_direction: str = ""

    def validate(self) -> None:
        """Check that a scope strategy is configured.

        Raises:
            ValueError: If neither scan packages nor an inclusion pattern is set
        """
        if not self.scan_packages and self.include_pattern is None:
            raise ValueError(
                "Either scan_packages or include_pattern must be configured"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DiagramConfig":
        """Build a config from snake_case keys, converting enum names.

        ``sources`` is accepted as an alias of ``source_paths``.
        """
        data = dict(data)
        if "sources" in data:
            data["source_paths"] = data.pop("sources")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration options: {', '.join(unknown)}")

        for key in ("field_classifiers_to_ignore", "method_classifiers_to_ignore"):
            if key in data:
                data[key] = {_parse_classifier(key, v) for v in _as_list(data[key])}
        for key in ("max_visibility_fields", "max_visibility_methods"):
            if key in data:
                data[key] = _parse_visibility(key, data[key])
        for key in ("scan_packages", "source_paths", "hide_classes"):
            if key in data:
                data[key] = [str(v) for v in _as_list(data[key])]
        if data.get("diagram_direction") is None:
            data.pop("diagram_direction", None)

        return cls(**data)


def load_config(path: Union[str, Path]) -> DiagramConfig:
    """Load a DiagramConfig from a YAML file.

    Args:
        path: YAML file with a top-level mapping of options

    Returns:
        Parsed DiagramConfig (not yet validated)

    Raises:
        ValueError: If the file is not valid YAML or not a mapping
    """
    config_path = Path(path)
    with open(config_path, "r", encoding="utf-8") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{config_path} is not valid YAML: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a mapping of options")

    logger.debug(f"Loaded {len(raw)} options from {config_path}")
    return DiagramConfig.from_dict(raw)


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def _parse_visibility(option: str, value: Any) -> Optional[VisibilityType]:
    if value is None or isinstance(value, VisibilityType):
        return value
    try:
        return VisibilityType[str(value).strip().upper()]
    except KeyError:
        choices = ", ".join(v.name.lower() for v in VisibilityType)
        raise ValueError(f"{option}: unknown visibility {value!r} (expected one of {choices})")


def _parse_classifier(option: str, value: Any) -> ClassifierType:
    if isinstance(value, ClassifierType):
        return value
    try:
        return ClassifierType[str(value).strip().upper()]
    except KeyError:
        choices = ", ".join(c.name.lower() for c in ClassifierType)
        raise ValueError(f"{option}: unknown classifier {value!r} (expected one of {choices})")


def config_to_dict(config: DiagramConfig) -> Dict[str, Any]:
    """Plain-data view of a config, enum values rendered by name."""
    result: Dict[str, Any] = {}
    for f in fields(config):
        value = getattr(config, f.name)
        if isinstance(value, VisibilityType):
            value = value.name.lower()
        elif isinstance(value, set):
            value = sorted(c.name.lower() for c in value)
        elif isinstance(value, list):
            value = list(value)
        result[f.name] = value
    return result
