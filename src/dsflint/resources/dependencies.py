"""Indexes of resources shipped inside dependency artifacts.

A plugin may reference BPMN or FHIR resources that are not part of its own
resource tree but live in a dependency (a jar on the build classpath). The
indexes here list those embedded resources by their logical path inside the
artifact, e.g. ``fhir/CodeSystem/dsf-process-authorization.xml``.
"""

import logging
import os
import tempfile
import zipfile
from abc import ABC, abstractmethod
from pathlib import Path

from dsflint.utils.paths import normalize_path, relative_posix

logger = logging.getLogger(__name__)

RESOURCE_SUFFIXES = (".bpmn", ".xml", ".json")


class DependencyArtifactIndex(ABC):
    """Logical paths of the resources embedded in dependency artifacts."""

    @abstractmethod
    def list_embedded_resources(self) -> list[str]:
        """Sorted logical paths of every embedded resource."""

    @abstractmethod
    def read_resource(self, logical_path: str) -> bytes:
        """Raw content of one embedded resource."""

    @abstractmethod
    def artifact_of(self, logical_path: str) -> str | None:
        """Name of the artifact that ships ``logical_path``."""

    def find(self, reference: str) -> str | None:
        """Logical path matching ``reference`` exactly or by path suffix."""
        reference = normalize_path(reference)
        if not reference:
            return None
        suffix = "/" + reference
        for logical_path in self.list_embedded_resources():
            if logical_path == reference or logical_path.endswith(suffix):
                return logical_path
        return None

    def materialize(self, logical_path: str, target_dir: Path | None = None) -> Path:
        """Write an embedded resource to disk so file based parsers can read it."""
        target_dir = Path(target_dir or tempfile.mkdtemp(prefix="dsflint-dep-"))
        target = target_dir / logical_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.read_resource(logical_path))
        return target


class ArchiveDependencyIndex(DependencyArtifactIndex):
    """Resources embedded in ``.jar`` / ``.zip`` archives of a dependency directory."""

    def __init__(self, dependency_dir: Path, patterns: tuple[str, ...] = ("*.jar", "*.zip")):
        self.dependency_dir = Path(dependency_dir)
        self.patterns = patterns
        self._entries: dict[str, Path] | None = None

    def _scan(self) -> dict[str, Path]:
        if self._entries is not None:
            return self._entries

        entries: dict[str, Path] = {}
        archives = sorted(
            {path for pattern in self.patterns for path in self.dependency_dir.glob(pattern)}
        )
        for archive in archives:
            try:
                with zipfile.ZipFile(archive) as zf:
                    names = zf.namelist()
            except zipfile.BadZipFile as e:
                logger.warning(f"Skipping unreadable dependency archive {archive}: {e}")
                continue
            for name in names:
                if name.endswith("/") or not name.lower().endswith(RESOURCE_SUFFIXES):
                    continue
                # first archive wins
                entries.setdefault(normalize_path(name), archive)

        logger.debug(f"Indexed {len(entries)} embedded resources from {len(archives)} archives")
        self._entries = entries
        return entries

    def list_embedded_resources(self) -> list[str]:
        return sorted(self._scan())

    def read_resource(self, logical_path: str) -> bytes:
        archive = self._scan().get(logical_path)
        if archive is None:
            raise FileNotFoundError(f"No dependency ships {logical_path}")
        with zipfile.ZipFile(archive) as zf:
            return zf.read(logical_path)

    def artifact_of(self, logical_path: str) -> str | None:
        archive = self._scan().get(logical_path)
        return archive.name if archive else None


class DirectoryDependencyIndex(DependencyArtifactIndex):
    """Resources of an already extracted dependency tree."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def list_embedded_resources(self) -> list[str]:
        paths = []
        for current, _dirs, files in os.walk(self.root):
            for name in files:
                if name.lower().endswith(RESOURCE_SUFFIXES):
                    paths.append(relative_posix(Path(current) / name, self.root))
        return sorted(paths)

    def read_resource(self, logical_path: str) -> bytes:
        return (self.root / logical_path).read_bytes()

    def artifact_of(self, logical_path: str) -> str | None:
        return self.root.name if (self.root / logical_path).is_file() else None
