"""Shared test fixtures."""

from __future__ import annotations

import pytest

from clean_big_targets.settings import Settings


@pytest.fixture
def isolate_settings(tmp_path, monkeypatch):
    """Redirect settings to a temp directory and drop the cached singleton."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "clean-big-targets" / "settings.json"


@pytest.fixture
def workspace(tmp_path):
    """A folder of Rust projects.

    proj1/target holds three files totaling 1500 bytes, proj2/target is
    empty and proj3 has no build directory at all.
    """
    root = tmp_path / "workspace"
    root.mkdir()

    proj1 = root / "proj1"
    (proj1 / "target" / "debug" / "deps").mkdir(parents=True)
    (proj1 / "src").mkdir()
    (proj1 / "src" / "main.rs").write_bytes(b"fn main() {}\n")
    (proj1 / "target" / "CACHEDIR.TAG").write_bytes(b"a" * 500)
    (proj1 / "target" / "debug" / "proj1").write_bytes(b"b" * 700)
    (proj1 / "target" / "debug" / "deps" / "libproj1.rlib").write_bytes(b"c" * 300)

    (root / "proj2" / "target").mkdir(parents=True)

    (root / "proj3").mkdir()
    (root / "proj3" / "Cargo.toml").write_text("[package]\nname = \"proj3\"\n")

    return root
