"""Resource document model.

FHIR XML and FHIR JSON are both normalized into the same nested structure:
each element becomes a dict, primitives become strings and repeated elements
become lists. The helpers below hide the single-vs-list distinction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ResourceKind(str, Enum):
    """Kinds of documents found below a resource root."""
    PROCESS_MODEL = "ProcessModel"
    ACTIVITY_DEFINITION = "ActivityDefinition"
    STRUCTURE_DEFINITION = "StructureDefinition"
    QUESTIONNAIRE = "Questionnaire"
    CODE_SYSTEM = "CodeSystem"
    VALUE_SET = "ValueSet"
    TASK = "Task"
    OTHER = "Other"

    @classmethod
    def from_resource_type(cls, resource_type: str | None) -> "ResourceKind":
        for kind in cls:
            if kind.value == resource_type and kind not in (cls.PROCESS_MODEL, cls.OTHER):
                return kind
        return cls.OTHER

    @property
    def is_fhir(self) -> bool:
        return self != ResourceKind.PROCESS_MODEL


def as_list(node: Any) -> list:
    """Wrap a single child in a list; ``None`` becomes an empty list."""
    if node is None:
        return []
    if isinstance(node, list):
        return node
    return [node]


def primitive(node: Any) -> str | None:
    """Value of a primitive element, whether stored bare or with attributes."""
    if node is None:
        return None
    if isinstance(node, list):
        return primitive(node[0]) if node else None
    if isinstance(node, dict):
        value = node.get("value")
        return value if isinstance(value, str) else None
    return str(node)


def children(node: Any, *path: str) -> list:
    """All elements reached by following ``path`` from ``node``."""
    current = as_list(node)
    for name in path:
        next_level = []
        for item in current:
            if isinstance(item, dict):
                next_level.extend(as_list(item.get(name)))
        current = next_level
    return current


def first(node: Any, *path: str) -> str | None:
    """First primitive value found along ``path``."""
    for item in children(node, *path):
        value = primitive(item)
        if value is not None:
            return value
    return None


def values(node: Any, *path: str) -> list[str]:
    """All primitive values found along ``path``."""
    return [value for item in children(node, *path) if (value := primitive(item)) is not None]


def find_extensions(node: Any, url: str) -> list[dict]:
    """Direct ``extension`` children with the given url."""
    return [ext for ext in children(node, "extension") if isinstance(ext, dict) and ext.get("url") == url]


def walk(node: Any):
    """Depth-first iteration over every dict in the tree."""
    for item in as_list(node):
        if isinstance(item, dict):
            yield item
            for child in item.values():
                if isinstance(child, (dict, list)):
                    yield from walk(child)


@dataclass(frozen=True)
class ResourceDocument:
    """One discovered resource file.

    ``path`` is the catalog key (normalized, relative to the resource root);
    ``file`` is the location on disk.
    """
    path: str
    file: str
    resource_kind: ResourceKind
    resource_type: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)
    parse_error: str | None = None

    @property
    def logical_url(self) -> str | None:
        if self.resource_kind == ResourceKind.PROCESS_MODEL:
            return None
        return first(self.fields, "url")

    @property
    def file_name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def parsed(self) -> bool:
        return self.parse_error is None

    def value(self, *path: str) -> str | None:
        return first(self.fields, *path)

    def values(self, *path: str) -> list[str]:
        return values(self.fields, *path)

    def elements(self, *path: str) -> list:
        return children(self.fields, *path)

    def reference(self) -> str:
        """Human readable reference: the canonical url, else the file name."""
        return self.logical_url or self.file_name
