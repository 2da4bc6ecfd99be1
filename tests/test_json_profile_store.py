"""
Tests for the JSON file profile store.
"""

import json

import pytest

from profileeditor.adapters.json_profile_store import JsonProfileStore
from profileeditor.domain.exceptions import ProfileStoreError


class TestJsonProfileStore:
    """Tests for JsonProfileStore."""

    def test_get_profile(self, tmp_path):
        """Test loading one profile from the file."""
        path = tmp_path / "profiles.json"
        path.write_text(json.dumps({"pro-1": {"name": "Studio Lumière", "availability": []}}), encoding="utf-8")

        store = JsonProfileStore(path)

        assert store.get_profile("pro-1")["name"] == "Studio Lumière"
        assert store.list_user_ids() == ["pro-1"]

    def test_unknown_user(self, tmp_path):
        """Test that a missing user raises ProfileStoreError."""
        path = tmp_path / "profiles.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(ProfileStoreError, match="No profile"):
            JsonProfileStore(path).get_profile("ghost")

    def test_missing_file(self, tmp_path):
        """Test that reading a missing file raises ProfileStoreError."""
        store = JsonProfileStore(tmp_path / "missing.json")

        with pytest.raises(ProfileStoreError, match="not found"):
            store.get_profile("pro-1")
        assert store.list_user_ids() == []

    def test_invalid_json(self, tmp_path):
        """Test that a corrupt file raises ProfileStoreError."""
        path = tmp_path / "profiles.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ProfileStoreError, match="Could not read"):
            JsonProfileStore(path).get_profile("pro-1")

    def test_non_mapping_root(self, tmp_path):
        """Test that the file root must be a mapping."""
        path = tmp_path / "profiles.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ProfileStoreError, match="mapping"):
            JsonProfileStore(path).get_profile("pro-1")

    def test_update_creates_and_preserves_others(self, tmp_path):
        """Test that updates replace one profile and keep the rest."""
        path = tmp_path / "data" / "profiles.json"
        store = JsonProfileStore(path)

        store.update_profile("pro-1", {"name": "A"})
        store.update_profile("pro-2", {"name": "B"})
        store.update_profile("pro-1", {"name": "A2"})

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"pro-1": {"name": "A2"}, "pro-2": {"name": "B"}}
        assert not (tmp_path / "data" / "profiles.json.tmp").exists()
