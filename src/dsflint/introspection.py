"""Type introspection capability.

Rules only ask three boolean questions about compiled plugin classes. The
default implementation answers them from a JSON class index::

    {
      "classes": {
        "org.example.SendPing": {
          "extends": ["dev.dsf.bpe.v1.activity.AbstractTaskMessageSend"],
          "implements": []
        }
      }
    }
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from dsflint.constants import API_TYPE_HIERARCHY

logger = logging.getLogger(__name__)


class TypeIntrospector(ABC):
    """Answers class existence and type relation questions."""

    @abstractmethod
    def class_exists(self, name: str) -> bool:
        pass

    @abstractmethod
    def implements(self, name: str, interface_name: str) -> bool:
        pass

    @abstractmethod
    def is_subclass_of(self, name: str, super_name: str) -> bool:
        pass


class ClassEntry(BaseModel):
    """Declared supertypes of one class."""
    extends: list[str] = Field(default_factory=list)
    implements: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ClassIndex(BaseModel):
    """On-disk class index file."""
    classes: dict[str, ClassEntry] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ClassIndexIntrospector(TypeIntrospector):
    """Introspector backed by a class index plus the API's own type relations."""

    def __init__(self, classes: dict[str, ClassEntry] | None = None):
        self._classes: dict[str, ClassEntry] = {
            name: ClassEntry(**relations) for name, relations in API_TYPE_HIERARCHY.items()
        }
        self._classes.update(classes or {})

    @classmethod
    def from_file(cls, path: Path) -> "ClassIndexIntrospector":
        """Load a class index file.

        Raises:
            ValueError: If the file is not a valid class index
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            index = ClassIndex(**data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in class index {path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load class index from {path}: {e}")

        logger.info(f"Loaded {len(index.classes)} classes from {path}")
        return cls(index.classes)

    def merged(self, other: "ClassIndexIntrospector") -> "ClassIndexIntrospector":
        merged = ClassIndexIntrospector()
        merged._classes.update(self._classes)
        merged._classes.update(other._classes)
        return merged

    def class_exists(self, name: str) -> bool:
        return name in self._classes

    def implements(self, name: str, interface_name: str) -> bool:
        return interface_name in self._interfaces(name)

    def is_subclass_of(self, name: str, super_name: str) -> bool:
        return super_name in self._superclasses(name)

    def _superclasses(self, name: str) -> set[str]:
        seen: set[str] = set()
        pending = list(self._entry(name).extends)
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            pending.extend(self._entry(current).extends)
        return seen

    def _interfaces(self, name: str) -> set[str]:
        seen: set[str] = set()
        pending: list[str] = []
        for type_name in [name, *self._superclasses(name)]:
            pending.extend(self._entry(type_name).implements)
        while pending:
            current = pending.pop()
            if current in seen:
                continue
            seen.add(current)
            # super-interfaces are declared as "extends" on the interface entry
            entry = self._entry(current)
            pending.extend(entry.extends)
            pending.extend(entry.implements)
        return seen

    def _entry(self, name: str) -> ClassEntry:
        return self._classes.get(name) or ClassEntry()
