"""Plugin unit discovery.

A unit is declared by a ``dsf-plugin.json`` manifest in the plugin's
directory::

    {
      "id": "dsf-plugin-ping",
      "version": "1.0.0.0",
      "apiVersion": "v2",
      "processModels": ["bpe/ping.bpmn"],
      "fhirResources": {
        "dsfdev_ping": ["fhir/ActivityDefinition/dsf-ping.xml"]
      }
    }

Discovery only records what a unit declares. Documents are attached from
the resource catalog when the unit is validated.
"""

import fnmatch
import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dsflint.constants import V1_PLUGIN_DEFINITION, V2_PLUGIN_DEFINITION, ApiVersion
from dsflint.models.unit import Unit
from dsflint.resources.dependencies import ArchiveDependencyIndex
from dsflint.utils.paths import relative_posix

logger = logging.getLogger(__name__)

MANIFEST_FILE_NAME = "dsf-plugin.json"

DEFAULT_DISCOVERY_EXCLUDES = [
    ".git/**",
    "target/**",
    "node_modules/**",
    "**/__pycache__/**",
]

_SOURCE_SUFFIXES = (".java", ".xml", ".properties")


class PluginManifest(BaseModel):
    """Contents of a ``dsf-plugin.json`` manifest."""
    id: str = Field(min_length=1)
    name: str | None = None
    version: str | None = None
    api_version: ApiVersion | None = Field(alias="apiVersion", default=None)
    process_models: list[str] = Field(alias="processModels", default_factory=list)
    fhir_resources: dict[str, list[str]] = Field(alias="fhirResources", default_factory=dict)
    class_index: str | None = Field(alias="classIndex", default=None)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @classmethod
    def from_file(cls, manifest_file: Path) -> "PluginManifest":
        """Load and validate a manifest.

        Raises:
            ValueError: If the manifest is invalid JSON or misses required fields
        """
        try:
            with open(manifest_file, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in plugin manifest {manifest_file}: {e}")
        except OSError as e:
            raise ValueError(f"Failed to read plugin manifest {manifest_file}: {e}")

        try:
            return cls(**data)
        except Exception as e:
            raise ValueError(f"Invalid plugin manifest {manifest_file}: {e}")

    def resource_references(self) -> list[str]:
        """Declared FHIR resources of all processes, in declaration order."""
        references = []
        for process_key in self.fhir_resources:
            references.extend(self.fhir_resources[process_key])
        return references


class ApiVersionDetector:
    """Detects the DSF API generation a plugin is written against."""

    @staticmethod
    def detect(plugin_dir: Path) -> ApiVersion | None:
        """Service registration files first, then a scan for API package names; v2 wins."""
        found: set[ApiVersion] = set()
        source_hits: set[ApiVersion] = set()

        for current, dirs, files in os.walk(plugin_dir):
            dirs[:] = [d for d in dirs if d not in (".git", "target", "node_modules")]
            current_path = Path(current)
            for name in files:
                if name == V2_PLUGIN_DEFINITION and current_path.name == "services":
                    found.add(ApiVersion.V2)
                elif name == V1_PLUGIN_DEFINITION and current_path.name == "services":
                    found.add(ApiVersion.V1)
                elif name.endswith(_SOURCE_SUFFIXES):
                    source_hits |= ApiVersionDetector._scan_source(current_path / name)

        for candidates in (found, source_hits):
            if ApiVersion.V2 in candidates:
                return ApiVersion.V2
            if ApiVersion.V1 in candidates:
                return ApiVersion.V1
        return None

    @staticmethod
    def _scan_source(file_path: Path) -> set[ApiVersion]:
        try:
            text = file_path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            logger.debug(f"Skipping unreadable source {file_path}: {e}")
            return set()
        hits = set()
        if "dev.dsf.bpe.v2" in text:
            hits.add(ApiVersion.V2)
        if "dev.dsf.bpe.v1" in text:
            hits.add(ApiVersion.V1)
        return hits


class UnitDiscovery:
    """Finds plugin manifests below a project root and builds units from them."""

    def __init__(self, project_root: Path, exclude_patterns: list[str] | None = None,
                 dependency_directory: str | None = "target/dependency"):
        self.project_root = Path(project_root).resolve()
        self.exclude_patterns = DEFAULT_DISCOVERY_EXCLUDES + list(exclude_patterns or [])
        self.dependency_directory = dependency_directory
        self.class_indexes: dict[str, Path] = {}

    def find_manifests(self) -> list[Path]:
        manifests = []
        for current, dirs, files in os.walk(self.project_root):
            current_path = Path(current)
            dirs[:] = sorted(
                d for d in dirs
                if not self._is_excluded(relative_posix(current_path / d, self.project_root) + "/**")
            )
            if MANIFEST_FILE_NAME in files:
                manifests.append(current_path / MANIFEST_FILE_NAME)
        return sorted(manifests)

    def discover(self) -> list[Unit]:
        """Units in manifest path order.

        Raises:
            ValueError: If a manifest is invalid
        """
        units: list[Unit] = []
        seen: set[str] = set()
        for manifest_file in self.find_manifests():
            manifest = PluginManifest.from_file(manifest_file)
            if manifest.id in seen:
                logger.warning(f"Ignoring duplicate plugin id {manifest.id} declared in {manifest_file}")
                continue
            seen.add(manifest.id)
            units.append(self._build_unit(manifest, manifest_file.parent))

        logger.info(f"Discovered {len(units)} plugin units below {self.project_root}")
        return units

    def _build_unit(self, manifest: PluginManifest, plugin_dir: Path) -> Unit:
        api_version = manifest.api_version or ApiVersionDetector.detect(plugin_dir) or ApiVersion.V2

        dependency_index = None
        if self.dependency_directory:
            dependency_dir = plugin_dir / self.dependency_directory
            if dependency_dir.is_dir():
                dependency_index = ArchiveDependencyIndex(dependency_dir)

        if manifest.class_index:
            self.class_indexes[manifest.id] = (plugin_dir / manifest.class_index).resolve()

        unit = Unit(
            id=manifest.id,
            api_version=api_version,
            declared_references={*manifest.process_models, *manifest.resource_references()},
            dependency_index=dependency_index,
        )
        logger.debug(f"Unit {unit.id}: api {api_version.value}, {len(unit.process_references)} process models, "
                     f"{len(unit.resource_references)} FHIR resources")
        return unit

    def _is_excluded(self, relative: str) -> bool:
        return any(fnmatch.fnmatch(relative, pattern) for pattern in self.exclude_patterns)
