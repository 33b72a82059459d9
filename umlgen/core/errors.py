"""Error taxonomy for class diagram generation.

Every error here is fatal for the generation call that raised it: nothing is
retried or downgraded, and no partial diagram is ever returned.
"""

import re
from typing import Optional, Pattern


class UmlGenError(Exception):
    """Base class for all generation failures."""


class ScopeResolutionError(UmlGenError):
    """A requested scope unit (package) resolved to zero types."""

    def __init__(self, scope_unit: str):
        self.scope_unit = scope_unit
        super().__init__(f"No types found for package {scope_unit}")


class SourceReadError(UmlGenError):
    """A source directory, file or archive could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class PatternCompileError(UmlGenError):
    """A configured regular expression is invalid."""

    def __init__(self, option: str, pattern: str, reason: str):
        self.option = option
        self.pattern = pattern
        super().__init__(f"Invalid pattern for {option} ({pattern!r}): {reason}")


class DiagramRenderError(UmlGenError):
    """Rendering diagram text to an image failed."""


def compile_pattern(option: str, pattern: Optional[str]) -> Optional[Pattern[str]]:
    """Compile a configured pattern, naming the option on failure.

    Returns None when no pattern is configured.
    """
    if pattern is None:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(option, pattern, str(e)) from e
