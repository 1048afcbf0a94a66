"""Path and reference normalization utilities."""

import posixpath
import re
from pathlib import Path

PLACEHOLDER_PATTERN = re.compile(r"(?:\$|#)\{[^}]+\}")


def normalize_path(path: str) -> str:
    """Convert any path to canonical forward slash format.

    Leading ``./`` segments, duplicate separators and ``classpath:`` prefixes
    are dropped so that references written in different styles compare equal.

    Examples:
        >>> normalize_path("fhir\\\\ActivityDefinition\\\\ping.xml")
        'fhir/ActivityDefinition/ping.xml'
        >>> normalize_path("classpath:/bpe/ping.bpmn")
        'bpe/ping.bpmn'
    """
    if not path:
        return path

    normalized = path.strip().replace("\\", "/")
    if normalized.startswith("classpath:"):
        normalized = normalized[len("classpath:"):]
    normalized = normalized.lstrip("/")
    if not normalized:
        return normalized

    return posixpath.normpath(normalized)


def relative_posix(file_path: Path, root: Path) -> str:
    """Return ``file_path`` relative to ``root`` in POSIX form."""
    return normalize_path(str(file_path.relative_to(root)))


def is_canonical_url(reference: str) -> bool:
    """Check whether a reference is a canonical URL rather than a path."""
    return reference.startswith(("http://", "https://", "urn:"))


def strip_version_suffix(reference: str) -> str:
    """Remove a trailing ``|version`` suffix from a canonical reference."""
    if not reference:
        return reference
    return reference.split("|", 1)[0].strip()


def has_placeholder(value: str | None) -> bool:
    """Check for ``#{...}`` or ``${...}`` placeholders."""
    return bool(value) and PLACEHOLDER_PATTERN.search(value) is not None


def is_blank(value: str | None) -> bool:
    """None, empty or whitespace only."""
    return value is None or not value.strip()


def normalize_reference(reference: str) -> str:
    """Canonical form of a declared reference: urls are kept, paths normalized."""
    reference = reference.strip()
    return reference if is_canonical_url(reference) else normalize_path(reference)


def is_bpmn_reference(reference: str) -> bool:
    return reference.strip().lower().endswith(".bpmn")
