"""Scope resolution: selecting the types that make up a diagram.

Two selection strategies, chosen by the configuration:

- inclusion pattern: every discoverable qualified name that fully matches
  the pattern (limited to the scan packages when any are configured)
- scan packages: every type in each package or its sub-packages, then
  minus the names fully matching the exclusion pattern. A package that
  contributes no type at all fails the whole resolution.

Subclasses only supply discovery; selection is shared.
"""

import logging
import os
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import ScopeResolutionError, SourceReadError, compile_pattern
from .java_parser import JavaSourceParser
from .models import TypeDescriptor
from .utils import is_java_archive, is_java_source, should_skip_directory

if TYPE_CHECKING:
    from ..config import DiagramConfig

logger = logging.getLogger(__name__)


def in_package(descriptor: TypeDescriptor, package: str) -> bool:
    """True if the type lives in the package or one of its sub-packages."""
    return descriptor.package == package or descriptor.package.startswith(package + ".")


class ScopeResolver(ABC):
    """Resolves configured selection criteria to a set of type descriptors."""

    @abstractmethod
    def discover(self, config: "DiagramConfig") -> List[TypeDescriptor]:
        """Return every type this resolver can see.

        Raises:
            SourceReadError: If underlying metadata could not be read
        """
        ...

    def resolve(self, config: "DiagramConfig") -> List[TypeDescriptor]:
        """Select the in-scope descriptors, deduplicated by qualified name.

        The result is sorted by qualified name.

        Raises:
            ScopeResolutionError: A scan package resolved to zero types
            PatternCompileError: The inclusion or exclusion pattern is invalid
        """
        discovered = self.discover(config)

        if config.include_pattern is not None:
            selected = self._select_by_pattern(discovered, config)
        else:
            selected = self._select_by_packages(discovered, config)

        unique: Dict[str, TypeDescriptor] = {}
        for descriptor in selected:
            unique.setdefault(descriptor.qualified_name, descriptor)

        logger.info(f"Resolved {len(unique)} of {len(discovered)} discovered types")
        return [unique[name] for name in sorted(unique)]

    @staticmethod
    def _select_by_pattern(
        discovered: Sequence[TypeDescriptor], config: "DiagramConfig"
    ) -> List[TypeDescriptor]:
        include = compile_pattern("include_pattern", config.include_pattern)
        candidates = discovered
        if config.scan_packages:
            candidates = [
                d for d in discovered
                if any(in_package(d, package) for package in config.scan_packages)
            ]
        return [d for d in candidates if include.fullmatch(d.qualified_name)]

    @staticmethod
    def _select_by_packages(
        discovered: Sequence[TypeDescriptor], config: "DiagramConfig"
    ) -> List[TypeDescriptor]:
        exclude = compile_pattern("exclude_pattern", config.exclude_pattern)

        selected: List[TypeDescriptor] = []
        for package in config.scan_packages:
            package_types = [d for d in discovered if in_package(d, package)]
            if not package_types:
                raise ScopeResolutionError(package)
            logger.debug(f"Package {package}: {len(package_types)} types")
            selected.extend(package_types)

        if exclude is not None:
            selected = [d for d in selected if not exclude.fullmatch(d.qualified_name)]
        return selected


class StaticScopeResolver(ScopeResolver):
    """Selects from an in-memory collection of descriptors."""

    def __init__(self, descriptors: Iterable[TypeDescriptor]):
        self._descriptors = list(descriptors)

    def discover(self, config: "DiagramConfig") -> List[TypeDescriptor]:
        return list(self._descriptors)


class JavaSourceScopeResolver(ScopeResolver):
    """Discovers types by parsing Java sources.

    Source roots may be directories (walked recursively) or source
    archives (.jar / .zip). When no roots are passed, the config's
    ``source_paths`` are used.
    """

    def __init__(self, source_roots: Optional[Sequence[str]] = None, parser: Optional[JavaSourceParser] = None):
        self._source_roots = list(source_roots) if source_roots is not None else None
        self._parser = parser or JavaSourceParser()

    def discover(self, config: "DiagramConfig") -> List[TypeDescriptor]:
        roots = self._source_roots if self._source_roots is not None else config.source_paths
        sources: List[Tuple[str, str]] = []
        for root in roots:
            sources.extend(read_sources(root))
        logger.info(f"Parsing {len(sources)} Java source files from {len(roots)} roots")
        return self._parser.parse_sources(sources)


def read_sources(root: str) -> List[Tuple[str, str]]:
    """Read every Java source under a root as (path, text) pairs.

    Raises:
        SourceReadError: If the root is missing or a file cannot be read
    """
    path = Path(root)
    if path.is_dir():
        return _read_directory(path)
    if path.is_file() and is_java_archive(str(path)):
        return _read_archive(path)
    if path.is_file() and is_java_source(str(path)):
        return [(str(path), _read_file(path))]
    raise SourceReadError(root, "not a directory, Java source or source archive")


def _read_file(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise SourceReadError(str(path), str(e)) from e


def _read_directory(root: Path) -> List[Tuple[str, str]]:
    sources = []
    for dirpath, dirnames, filenames in os.walk(root):
        top_level = Path(dirpath) == root
        dirnames[:] = sorted(d for d in dirnames if not should_skip_directory(d, top_level))
        for filename in sorted(filenames):
            if is_java_source(filename):
                file_path = Path(dirpath) / filename
                sources.append((str(file_path), _read_file(file_path)))
    return sources


def _read_archive(archive: Path) -> List[Tuple[str, str]]:
    sources = []
    try:
        with zipfile.ZipFile(archive) as zf:
            for name in sorted(zf.namelist()):
                if is_java_source(name):
                    text = zf.read(name).decode("utf-8", errors="replace")
                    sources.append((f"{archive}!/{name}", text))
    except (OSError, zipfile.BadZipFile) as e:
        raise SourceReadError(str(archive), str(e)) from e
    return sources
