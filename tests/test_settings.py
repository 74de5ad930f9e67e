"""Tests for the settings store."""

from __future__ import annotations

import json

import pytest

from clean_big_targets.settings import Settings, SettingsError

pytestmark = pytest.mark.usefixtures("isolate_settings")


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.get("display.sort") == "size"
        assert settings.get("scan.workers") is None
        assert settings.get("unknown.key", 7) == 7

    def test_set_persists(self, isolate_settings):
        Settings().set("display.sort", "path")
        assert json.loads(isolate_settings.read_text()) == {"display": {"sort": "path"}}
        assert Settings().get("display.sort") == "path"

    def test_corrupt_file_is_ignored(self, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text("{not json")
        assert Settings().get("display.sort") == "size"

    def test_non_object_file_is_ignored(self, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text("[1, 2]")
        assert Settings().get("display.sort") == "size"

    def test_instance_is_cached(self):
        assert Settings.instance() is Settings.instance()

    def test_as_dict(self):
        assert Settings().as_dict() == {"scan.workers": None, "display.sort": "size"}

    def test_properties(self):
        settings = Settings()
        assert settings.workers is None
        assert settings.sort == "size"
        settings.set("scan.workers", 6)
        assert settings.workers == 6

    @pytest.mark.parametrize("value", [True, False, 0, -2, 1.5, "4"])
    def test_rejects_bad_workers(self, value, isolate_settings):
        with pytest.raises(SettingsError):
            Settings().set("scan.workers", value)
        assert not isolate_settings.exists()

    def test_rejects_bad_sort(self):
        with pytest.raises(SettingsError, match="size, path"):
            Settings().set("display.sort", "random")

    def test_rejects_unknown_key(self):
        with pytest.raises(SettingsError, match="unknown setting"):
            Settings().set("scan.depth", 2)

    def test_invalid_stored_value_falls_back(self, isolate_settings):
        isolate_settings.parent.mkdir(parents=True)
        isolate_settings.write_text(json.dumps({"scan": {"workers": True}, "display": {"sort": "random"}}))
        settings = Settings()
        assert settings.workers is None
        assert settings.sort == "size"
