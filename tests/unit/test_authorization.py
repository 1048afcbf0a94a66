"""Unit tests for the authorization code cache."""

import json
import zipfile

import pytest

from conftest import fhir_document
from dsflint.authorization import AuthorizationCodeCache
from dsflint.constants import CS_PROCESS_AUTHORIZATION, CS_READ_ACCESS_TAG
from dsflint.errors import CodeCacheSeedError
from dsflint.resources.dependencies import ArchiveDependencyIndex

FOO_CODE_SYSTEM = fhir_document("CodeSystem", """
  <url value="http://x/CodeSystem/foo"/>
  <concept><code value="BAR"/><display value="Bar"/></concept>
""")


class TestSeeding:
    """Test seeding from the built-in table and on-disk CodeSystems."""

    def test_on_disk_code_system_is_known(self, tmp_path, write_file):
        write_file(tmp_path, "fhir/CodeSystem/foo.xml", FOO_CODE_SYSTEM)

        cache = AuthorizationCodeCache()
        cache.seed(tmp_path)

        assert cache.is_known("http://x/CodeSystem/foo", "BAR")
        assert cache.is_unknown("http://x/CodeSystem/foo", "BAZ")

    def test_built_in_codes(self, tmp_path):
        cache = AuthorizationCodeCache()
        cache.seed(tmp_path)

        assert cache.is_known(CS_PROCESS_AUTHORIZATION, "LOCAL_ALL")
        assert cache.is_known(CS_READ_ACCESS_TAG, "ALL")
        assert cache.find_systems_containing_code("REMOTE_ROLE") == [CS_PROCESS_AUTHORIZATION]

    def test_unregistered_system_counts_as_unknown(self, tmp_path):
        cache = AuthorizationCodeCache()
        cache.seed(tmp_path)

        assert not cache.contains_system("http://nowhere/CodeSystem/none")
        assert cache.is_unknown("http://nowhere/CodeSystem/none", "X")

    def test_seeding_twice_is_idempotent(self, tmp_path, write_file):
        write_file(tmp_path, "fhir/CodeSystem/foo.xml", FOO_CODE_SYSTEM)

        once = AuthorizationCodeCache()
        once.seed(tmp_path)
        twice = AuthorizationCodeCache()
        twice.seed(tmp_path)
        twice.seed(tmp_path)

        assert once.snapshot() == twice.snapshot()

    def test_nested_concepts_and_json(self, tmp_path, write_file):
        write_file(tmp_path, "fhir/CodeSystem/tree.json", json.dumps({
            "resourceType": "CodeSystem",
            "url": "http://x/CodeSystem/tree",
            "concept": [{"code": "ROOT", "concept": [{"code": "LEAF"}]}],
        }))

        cache = AuthorizationCodeCache()
        cache.seed(tmp_path)

        assert cache.codes_for("http://x/CodeSystem/tree") == frozenset({"ROOT", "LEAF"})

    def test_extra_codes(self, tmp_path):
        cache = AuthorizationCodeCache()
        cache.seed(tmp_path, extra_codes={"http://x/CodeSystem/extra": ["ONE"]})
        assert cache.is_known("http://x/CodeSystem/extra", "ONE")

    def test_unreadable_code_system_is_skipped(self, tmp_path, write_file):
        write_file(tmp_path, "fhir/CodeSystem/broken.xml", "<CodeSystem xmlns='http://hl7.org/fhir'>")
        write_file(tmp_path, "fhir/CodeSystem/foo.xml", FOO_CODE_SYSTEM)

        cache = AuthorizationCodeCache()
        cache.seed(tmp_path)
        assert cache.is_known("http://x/CodeSystem/foo", "BAR")

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(CodeCacheSeedError):
            AuthorizationCodeCache().seed(tmp_path / "missing")


class TestDependencyCodeSystems:
    """Test CodeSystems embedded in dependency archives."""

    def test_archive_code_system(self, tmp_path):
        dependency_dir = tmp_path / "target" / "dependency"
        dependency_dir.mkdir(parents=True)
        with zipfile.ZipFile(dependency_dir / "dsf-fhir-codes.jar", "w") as archive:
            archive.writestr("fhir/CodeSystem/foo.xml", FOO_CODE_SYSTEM)

        cache = AuthorizationCodeCache()
        cache.seed(tmp_path, dependency_index=ArchiveDependencyIndex(dependency_dir))

        assert cache.is_known("http://x/CodeSystem/foo", "BAR")


class TestSealing:
    """Test the seed / seal lifecycle."""

    def test_register_after_seal_raises(self, tmp_path):
        cache = AuthorizationCodeCache()
        cache.seed(tmp_path)
        cache.seal()

        assert cache.sealed
        with pytest.raises(RuntimeError):
            cache.register("http://x/CodeSystem/late", ["A"])
