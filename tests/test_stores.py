"""Tests for the memory, environment, file and blob stores."""

import json
from unittest.mock import MagicMock

import pytest
import yaml

from typedconfig import StoreOperationError
from typedconfig.stores import (
    BlobConfigStore,
    BlobStorage,
    DirectoryBlobStorage,
    EnvironmentConfigStore,
    FileConfigStore,
    InMemoryConfigStore,
)


class TestInMemoryConfigStore:

    def test_capabilities(self, memory_store):
        assert memory_store.can_read and memory_store.can_write
        assert memory_store.name == "In-Memory Dictionary"

    def test_missing_key_is_none(self, memory_store):
        assert memory_store.read("missing") is None

    def test_write_then_read(self, memory_store):
        memory_store.write("timeout", "30")
        assert memory_store.read("timeout") == "30"

    def test_write_none_deletes(self, memory_store):
        """Writing None removes the key; deleting twice is harmless."""
        memory_store.write("timeout", "30")
        memory_store.write("timeout", None)
        memory_store.write("timeout", None)

        assert memory_store.read("timeout") is None
        assert len(memory_store) == 0

    def test_initial_values_copied(self):
        values = {"a": "1"}
        store = InMemoryConfigStore(values)
        store.write("b", "2")

        assert values == {"a": "1"}
        assert store.read("a") == "1"

    def test_context_manager_closes(self):
        with InMemoryConfigStore({"a": "1"}) as store:
            assert store.read("a") == "1"
        assert len(store) == 0


class TestEnvironmentConfigStore:

    def test_is_read_only(self):
        store = EnvironmentConfigStore(environ={})

        assert store.can_read is True
        assert store.can_write is False
        with pytest.raises(StoreOperationError, match="read-only"):
            store.write("key", "value")

    def test_exact_key(self):
        store = EnvironmentConfigStore(environ={"db.host": "exact", "DB_HOST": "upper"})
        assert store.read("db.host") == "exact"

    def test_dots_and_dashes_become_underscores(self):
        store = EnvironmentConfigStore(environ={"timeout_seconds": "30"})
        assert store.read("timeout-seconds") == "30"

    def test_upper_case_fallback(self):
        store = EnvironmentConfigStore(environ={"DB_HOST": "db.internal"})
        assert store.read("db.host") == "db.internal"

    def test_prefix(self):
        store = EnvironmentConfigStore(prefix="APP_", environ={"APP_PORT": "8080", "PORT": "1"})
        assert store.read("port") == "8080"

    def test_missing(self):
        assert EnvironmentConfigStore(environ={}).read("nothing") is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("TYPEDCONFIG_TEST_VALUE", "from-env")
        assert EnvironmentConfigStore().read("typedconfig.test.value") == "from-env"


class TestFileConfigStore:
    """YAML and JSON file store."""

    def test_missing_file_reads_none(self, tmp_path):
        store = FileConfigStore(tmp_path / "absent.yaml")
        assert store.read("anything") is None

    def test_nested_yaml_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("db:\n  host: localhost\n  port: 5432\nflag: true\nhosts: [a, b]\n")
        store = FileConfigStore(path)

        assert store.read("db.host") == "localhost"
        assert store.read("db.port") == "5432"
        assert store.read("flag") == "true"
        assert store.read("hosts") == "a,b"

    def test_mapping_and_null_read_as_missing(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("db:\n  host: localhost\nempty:\n")
        store = FileConfigStore(path)

        assert store.read("db") is None
        assert store.read("empty") is None
        assert store.read("db.host.extra") is None

    def test_write_creates_nested_yaml(self, tmp_path):
        path = tmp_path / "sub" / "config.yaml"
        store = FileConfigStore(path)

        store.write("db.host", "localhost")
        store.write("name", "demo")

        assert yaml.safe_load(path.read_text()) == {"db": {"host": "localhost"}, "name": "demo"}

    def test_write_preserves_other_keys(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("keep: 1\ndb:\n  host: old\n")
        store = FileConfigStore(path)

        store.write("db.host", "new")

        assert yaml.safe_load(path.read_text()) == {"keep": 1, "db": {"host": "new"}}

    def test_delete_prunes_empty_parents(self, tmp_path):
        path = tmp_path / "config.yaml"
        store = FileConfigStore(path)
        store.write("db.host", "localhost")
        store.write("other", "x")

        store.write("db.host", None)
        store.write("never.set", None)

        assert yaml.safe_load(path.read_text()) == {"other": "x"}

    def test_json_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"server": {"port": 8080}}))
        store = FileConfigStore(path)

        assert store.read("server.port") == "8080"
        store.write("server.host", "example.com")

        assert json.loads(path.read_text()) == {"server": {"port": 8080, "host": "example.com"}}

    def test_numeric_text_stays_text(self, tmp_path):
        """Values written as text are read back identically."""
        store = FileConfigStore(tmp_path / "config.yaml")
        store.write("timeout", "30")
        store.write("enabled", "true")

        assert store.read("timeout") == "30"
        assert store.read("enabled") == "true"

    def test_non_mapping_document_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="mapping"):
            FileConfigStore(path).read("x")

    def test_name_mentions_path(self, tmp_path):
        store = FileConfigStore(tmp_path / "config.yaml")
        assert "config.yaml" in store.name


class TestDirectoryBlobStorage:

    def test_round_trip(self, tmp_path):
        blobs = DirectoryBlobStorage(tmp_path)

        blobs.write_text("settings/timeout", "30")

        assert (tmp_path / "settings" / "timeout").read_text() == "30"
        assert blobs.read_text("settings/timeout") == "30"

    def test_missing_blob(self, tmp_path):
        assert DirectoryBlobStorage(tmp_path).read_text("nope") is None

    def test_delete_missing_is_not_an_error(self, tmp_path):
        DirectoryBlobStorage(tmp_path).delete("nope")

    @pytest.mark.parametrize("key", ["../outside", "/etc/passwd", ""])
    def test_keys_cannot_escape_root(self, tmp_path, key):
        with pytest.raises(ValueError):
            DirectoryBlobStorage(tmp_path / "root").read_text(key)


class TestBlobConfigStore:

    def test_requires_storage(self):
        with pytest.raises(ValueError):
            BlobConfigStore(None)

    def test_read_write_delete(self, tmp_path):
        store = BlobConfigStore(DirectoryBlobStorage(tmp_path))

        assert store.read("timeout") is None
        store.write("timeout", "30")
        assert store.read("timeout") == "30"
        store.write("timeout", None)
        assert store.read("timeout") is None
        assert not (tmp_path / "timeout").exists()

    def test_close_closes_storage(self):
        blobs = MagicMock(spec=BlobStorage)

        with BlobConfigStore(blobs) as store:
            assert store.name == "Blob Storage"

        blobs.close.assert_called_once()
