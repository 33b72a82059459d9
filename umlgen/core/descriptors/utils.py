"""Source discovery utilities.

File-type detection and directory skipping for the Java source front end.
"""

import os

JAVA_SOURCE_EXTENSION = ".java"

ARCHIVE_EXTENSIONS = frozenset({".jar", ".zip"})

# Directories to skip during file walking, at any depth
SKIP_DIRECTORIES = frozenset({
    ".git",
    ".svn",
    ".hg",
    ".idea",
    ".gradle",
    ".mvn",
    "node_modules",
})

# Build output directories, skipped only directly under a source root.
# Deeper down they are ordinary package segments (com/acme/build).
BUILD_OUTPUT_DIRECTORIES = frozenset({
    "build",
    "target",
    "out",
    "bin",
})


def should_skip_directory(dir_name: str, top_level: bool = False) -> bool:
    """Check if a directory should be skipped during file walking.

    Args:
        dir_name: Directory name (not full path)
        top_level: True if the directory sits directly under a source root

    Returns:
        True if directory should be skipped
    """
    if dir_name in SKIP_DIRECTORIES or dir_name.startswith("."):
        return True
    return top_level and dir_name in BUILD_OUTPUT_DIRECTORIES


def is_java_source(file_path: str) -> bool:
    _, ext = os.path.splitext(file_path)
    return ext.lower() == JAVA_SOURCE_EXTENSION


def is_java_archive(file_path: str) -> bool:
    """True for archives that may hold Java sources (e.g. *-sources.jar)."""
    _, ext = os.path.splitext(file_path)
    return ext.lower() in ARCHIVE_EXTENSIONS
