"""Tests for dotted-path document helpers."""

import pytest

from configtx.domain.document import (
    append_path,
    delete_path,
    get_path,
    set_path,
    split_path,
)


@pytest.fixture
def document() -> dict:
    return {
        "canary": {
            "enabled": True,
            "accounts": [
                {"name": "prod", "bucket": "canary-prod"},
                {"name": "staging", "bucket": "canary-staging"},
            ],
        }
    }


class TestSplitPath:
    def test_empty_path_is_root(self):
        assert split_path("") == []

    def test_empty_segment_rejected(self):
        with pytest.raises(ValueError, match="empty segment"):
            split_path("canary..enabled")


class TestGetPath:
    """Tests for get_path."""

    def test_root(self, document):
        assert get_path(document, "") is document

    def test_nested_key(self, document):
        assert get_path(document, "canary.enabled") is True

    def test_named_entry(self, document):
        """List segments resolve by entry name."""
        assert get_path(document, "canary.accounts.staging.bucket") == "canary-staging"

    def test_index_entry(self, document):
        assert get_path(document, "canary.accounts.0.name") == "prod"
        assert get_path(document, "canary.accounts.-1.name") == "staging"

    def test_missing_key(self, document):
        with pytest.raises(KeyError):
            get_path(document, "canary.judge")

    def test_missing_entry(self, document):
        with pytest.raises(KeyError):
            get_path(document, "canary.accounts.dev")

    def test_index_out_of_range(self, document):
        with pytest.raises(KeyError):
            get_path(document, "canary.accounts.5")

    def test_cannot_descend_into_scalar(self, document):
        with pytest.raises(KeyError):
            get_path(document, "canary.enabled.value")


class TestSetPath:
    """Tests for set_path."""

    def test_creates_intermediate_mappings(self):
        document: dict = {}
        set_path(document, "features.featureX.enabled", True)
        assert document == {"features": {"featureX": {"enabled": True}}}

    def test_replaces_named_entry(self, document):
        set_path(document, "canary.accounts.prod", {"name": "prod", "bucket": "new"})
        assert document["canary"]["accounts"][0]["bucket"] == "new"

    def test_root_rejected(self, document):
        with pytest.raises(ValueError):
            set_path(document, "", {})


class TestDeletePath:
    """Tests for delete_path."""

    def test_returns_removed_value(self, document):
        removed = delete_path(document, "canary.enabled")
        assert removed is True
        assert "enabled" not in document["canary"]

    def test_removes_named_entry(self, document):
        removed = delete_path(document, "canary.accounts.prod")
        assert removed["bucket"] == "canary-prod"
        assert [a["name"] for a in document["canary"]["accounts"]] == ["staging"]

    def test_missing_key(self, document):
        with pytest.raises(KeyError):
            delete_path(document, "canary.judge")


class TestAppendPath:
    """Tests for append_path."""

    def test_appends_entry(self, document):
        append_path(document, "canary.accounts", {"name": "dev", "bucket": "b"})
        assert document["canary"]["accounts"][-1]["name"] == "dev"

    def test_creates_missing_list(self):
        document: dict = {}
        append_path(document, "providers.kubernetes", {"name": "k8s"})
        assert document == {"providers": {"kubernetes": [{"name": "k8s"}]}}

    def test_duplicate_name_rejected(self, document):
        with pytest.raises(ValueError, match="already exists"):
            append_path(document, "canary.accounts", {"name": "prod"})

    def test_non_list_rejected(self, document):
        with pytest.raises(TypeError):
            append_path(document, "canary.enabled", 1)
