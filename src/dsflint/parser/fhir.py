"""FHIR resource parser.

FHIR XML and FHIR JSON are normalized into the same nested ``fields`` dict:

    <status value="unknown"/>                    -> "status": "unknown"
    <extension url="x"><valueString value="y"/>  -> "extension": {"url": "x", "valueString": "y"}
    repeated elements                            -> lists

Narrative XHTML and JSON primitive extensions (``_field``) are dropped.
"""

import json
import logging
from pathlib import Path
from typing import Any

from defusedxml.ElementTree import fromstring

from dsflint.constants import FHIR_NAMESPACE
from dsflint.errors import DocumentParseError
from dsflint.models.resource import ResourceDocument, ResourceKind
from dsflint.utils.paths import normalize_path, relative_posix

logger = logging.getLogger(__name__)

_FHIR_NS_PREFIX = "{" + FHIR_NAMESPACE + "}"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _is_fhir_element(tag: str) -> bool:
    return not tag.startswith("{") or tag.startswith(_FHIR_NS_PREFIX)


def document_key(file_path: Path, root: Path | None) -> str:
    """Catalog key of a file: relative to ``root`` when inside it, else the full path."""
    if root is not None:
        try:
            return relative_posix(file_path, root)
        except ValueError:
            pass
    return normalize_path(str(file_path))


class FhirParser:
    """Parser for FHIR XML and JSON resource files."""

    def parse_resource_document(self, file_path: Path, root: Path | None = None) -> ResourceDocument:
        """Parse a resource file from disk.

        Raises:
            DocumentParseError: If the file cannot be read or is not a FHIR resource
        """
        file_path = Path(file_path)
        try:
            content = file_path.read_bytes()
        except OSError as e:
            raise DocumentParseError(file_path, f"cannot read file: {e}") from e
        return self.parse_content(content, document_key(file_path, root), str(file_path))

    def parse_content(self, content: bytes | str, path: str, file: str | None = None) -> ResourceDocument:
        """Parse in-memory content; ``path`` becomes the document key."""
        if isinstance(content, bytes):
            try:
                content = content.decode("utf-8-sig")
            except UnicodeDecodeError as e:
                raise DocumentParseError(file or path, f"not UTF-8: {e}") from e

        stripped = content.lstrip()
        if not stripped:
            raise DocumentParseError(file or path, "empty document")

        if stripped.startswith("{"):
            resource_type, fields = self._parse_json(stripped, file or path)
        else:
            resource_type, fields = self._parse_xml(stripped, file or path)

        kind = ResourceKind.from_resource_type(resource_type)
        logger.debug(f"Parsed {resource_type} from {path}")
        return ResourceDocument(
            path=normalize_path(path),
            file=file or path,
            resource_kind=kind,
            resource_type=resource_type,
            fields=fields,
        )

    # XML

    def _parse_xml(self, content: str, file: str) -> tuple[str, dict[str, Any]]:
        try:
            root = fromstring(content)
        except Exception as e:
            raise DocumentParseError(file, f"invalid XML: {e}") from e

        if not _is_fhir_element(root.tag):
            raise DocumentParseError(file, f"root element {root.tag} is not in the FHIR namespace")

        node = self._xml_element(root)
        if not isinstance(node, dict):
            node = {}
        return _local_name(root.tag), node

    def _xml_element(self, element) -> Any:
        attributes = {
            name: value for name, value in element.attrib.items() if not name.startswith("{")
        }
        fhir_children = [child for child in element if _is_fhir_element(child.tag)]

        # primitive: <x value=".."/>
        if not fhir_children and set(attributes) <= {"value"}:
            return attributes.get("value", "")

        node: dict[str, Any] = dict(attributes)
        for child in fhir_children:
            _append(node, _local_name(child.tag), self._xml_element(child))
        return node

    # JSON

    def _parse_json(self, content: str, file: str) -> tuple[str, dict[str, Any]]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DocumentParseError(file, f"invalid JSON: {e}") from e

        if not isinstance(data, dict) or "resourceType" not in data:
            raise DocumentParseError(file, "JSON document has no resourceType")

        resource_type = str(data["resourceType"])
        fields = self._json_value({k: v for k, v in data.items() if k != "resourceType"})
        return resource_type, fields

    def _json_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                key: self._json_value(item)
                for key, item in value.items()
                if not key.startswith("_")
            }
        if isinstance(value, list):
            return [self._json_value(item) for item in value]
        if isinstance(value, bool):
            return "true" if value else "false"
        if value is None:
            return ""
        return str(value)


def _append(node: dict[str, Any], name: str, value: Any) -> None:
    if name not in node:
        node[name] = value
    elif isinstance(node[name], list):
        node[name].append(value)
    else:
        node[name] = [node[name], value]
