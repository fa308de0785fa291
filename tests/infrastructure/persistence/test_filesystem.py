"""Tests for FilesystemConfigStore."""

import json
import os

import pytest

from configtx.domain.exceptions import PersistenceError
from configtx.infrastructure.persistence.filesystem import FilesystemConfigStore


@pytest.fixture
def fs_store(tmp_path) -> FilesystemConfigStore:
    store = FilesystemConfigStore(tmp_path)
    store.load_working_copy("server").update({"name": "edge", "port": 8080})
    store.commit("server")
    return store


class TestFilesystemConfigStore:
    """Tests for durable commits."""

    def test_commit_writes_json(self, fs_store, tmp_path):
        path = tmp_path / "scopes" / "server.json"
        assert json.loads(path.read_text()) == {"name": "edge", "port": 8080}

    def test_reopen_reads_committed(self, fs_store, tmp_path):
        reopened = FilesystemConfigStore(tmp_path)
        assert reopened.committed("server") == {"name": "edge", "port": 8080}
        assert reopened.scopes() == ["server"]

    def test_missing_scope_is_empty(self, fs_store):
        assert fs_store.committed("database") == {}

    def test_invalid_scope_name(self, fs_store):
        with pytest.raises(ValueError, match="Invalid scope name"):
            fs_store.committed("../etc")

    def test_corrupt_file(self, fs_store, tmp_path):
        (tmp_path / "scopes" / "broken.json").write_text("{not json")
        with pytest.raises(PersistenceError):
            fs_store.committed("broken")

    def test_non_object_file(self, fs_store, tmp_path):
        (tmp_path / "scopes" / "listed.json").write_text("[1, 2]")
        with pytest.raises(PersistenceError, match="Expected a JSON object"):
            fs_store.committed("listed")

    def test_base_dir(self, fs_store, tmp_path):
        assert fs_store.base_dir == tmp_path


class TestCommitFailure:
    """A failed commit leaves the previous file and keeps the lock."""

    def test_unserializable_document(self, fs_store, tmp_path):
        fs_store.load_working_copy("server", owner="tx")["handler"] = object()

        with pytest.raises(PersistenceError, match="not serializable"):
            fs_store.commit("server", owner="tx")

        assert fs_store.committed("server") == {"name": "edge", "port": 8080}
        assert fs_store.is_locked("server")

    def test_rename_failure(self, fs_store, tmp_path, monkeypatch):
        def fail_replace(src, dst):
            raise OSError("disk full")

        fs_store.load_working_copy("server", owner="tx")["port"] = 9000
        monkeypatch.setattr(os, "replace", fail_replace)

        with pytest.raises(PersistenceError, match="disk full"):
            fs_store.commit("server", owner="tx")

        monkeypatch.undo()
        assert fs_store.committed("server")["port"] == 8080
        assert not (tmp_path / "scopes" / "server.tmp").exists()
        assert fs_store.is_locked("server")

        fs_store.discard("server", owner="tx")
        assert not fs_store.is_locked("server")
