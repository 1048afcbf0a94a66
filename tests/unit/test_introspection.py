"""Unit tests for the class index introspector."""

import json

import pytest

from dsflint.constants import (
    V1_ABSTRACT_SERVICE_DELEGATE,
    V1_ABSTRACT_TASK_MESSAGE_SEND,
    V1_JAVA_DELEGATE,
    V2_SERVICE_TASK,
)
from dsflint.introspection import ClassEntry, ClassIndexIntrospector


class TestClassIndexIntrospector:
    """Test type relation queries over a class index."""

    def test_api_hierarchy_is_preloaded(self):
        introspector = ClassIndexIntrospector({
            "dev.example.SendPing": ClassEntry(extends=[V1_ABSTRACT_TASK_MESSAGE_SEND]),
        })

        assert introspector.class_exists("dev.example.SendPing")
        assert introspector.is_subclass_of("dev.example.SendPing", V1_ABSTRACT_SERVICE_DELEGATE)
        assert introspector.implements("dev.example.SendPing", V1_JAVA_DELEGATE)
        assert not introspector.implements("dev.example.SendPing", V2_SERVICE_TASK)

    def test_super_interfaces(self):
        """Test that interfaces inherited by interfaces are found."""
        introspector = ClassIndexIntrospector({
            "dev.example.Service": ClassEntry(implements=["dev.example.Special"]),
            "dev.example.Special": ClassEntry(extends=[V2_SERVICE_TASK]),
        })

        assert introspector.implements("dev.example.Service", V2_SERVICE_TASK)
        assert not introspector.is_subclass_of("dev.example.Service", V2_SERVICE_TASK)

    def test_cyclic_index_terminates(self):
        introspector = ClassIndexIntrospector({
            "dev.example.A": ClassEntry(extends=["dev.example.B"]),
            "dev.example.B": ClassEntry(extends=["dev.example.A"]),
        })

        assert introspector.is_subclass_of("dev.example.A", "dev.example.A")
        assert not introspector.implements("dev.example.A", V1_JAVA_DELEGATE)

    def test_unknown_class(self):
        introspector = ClassIndexIntrospector()
        assert not introspector.class_exists("dev.example.Missing")
        assert not introspector.implements("dev.example.Missing", V1_JAVA_DELEGATE)

    def test_merged(self):
        first = ClassIndexIntrospector({"dev.example.A": ClassEntry()})
        second = ClassIndexIntrospector({"dev.example.B": ClassEntry(implements=[V2_SERVICE_TASK])})

        merged = first.merged(second)

        assert merged.class_exists("dev.example.A")
        assert merged.implements("dev.example.B", V2_SERVICE_TASK)
        assert not first.class_exists("dev.example.B")


class TestClassIndexFile:
    def test_from_file(self, tmp_path):
        index_file = tmp_path / "classes.json"
        index_file.write_text(json.dumps({
            "classes": {"dev.example.Service": {"implements": [V2_SERVICE_TASK]}}
        }))

        introspector = ClassIndexIntrospector.from_file(index_file)
        assert introspector.implements("dev.example.Service", V2_SERVICE_TASK)

    def test_invalid_json(self, tmp_path):
        index_file = tmp_path / "classes.json"
        index_file.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            ClassIndexIntrospector.from_file(index_file)

    @pytest.mark.parametrize("content", [
        {"classes": {"dev.example.A": {"parents": []}}},
        {"types": {}},
    ])
    def test_invalid_structure(self, tmp_path, content):
        index_file = tmp_path / "classes.json"
        index_file.write_text(json.dumps(content))

        with pytest.raises(ValueError, match="Failed to load class index"):
            ClassIndexIntrospector.from_file(index_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="Failed to load class index"):
            ClassIndexIntrospector.from_file(tmp_path / "missing.json")
