"""Tests for configuration loading and merging."""

import logging
from pathlib import Path
from unittest.mock import patch

import yaml

from sprout.config import SproutContext
from sprout.config.loader import (
    get_home_config_path,
    get_local_config_path,
    get_sprout_home,
    load_config,
    load_yaml_config,
)
from sprout.config.schema import DEFAULT_CONFIG, SproutConfig
from sprout.repositories import repository_path


def _write_config(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))


class TestSproutConfig:
    """Tests for SproutConfig dataclass."""

    def test_default_config_values(self) -> None:
        """Test that DEFAULT_CONFIG has empty lists."""
        assert DEFAULT_CONFIG.repositories == ()
        assert DEFAULT_CONFIG.libraries == ()

    def test_merge_prefers_other_values(self) -> None:
        """Test that merge prefers values from 'other' when set."""
        base = SproutConfig(repositories=("a",), libraries=("x",))
        override = SproutConfig(repositories=("b", "c"))
        merged = base.merge(override)

        assert merged.repositories == ("b", "c")
        assert merged.libraries == ("x",)

    def test_merge_returns_new_instance(self) -> None:
        """Test that merge returns a new instance, not mutating originals."""
        base = SproutConfig(repositories=("a",))
        override = SproutConfig(libraries=("x",))
        merged = base.merge(override)

        assert merged is not base
        assert base.libraries is None
        assert override.repositories is None

    def test_from_dict(self) -> None:
        """Test that from_dict creates a config and ignores unknown keys."""
        config = SproutConfig.from_dict(
            {"repositories": ["https://example.com/t.git"], "color": "red"}
        )

        assert config.repositories == ("https://example.com/t.git",)
        assert config.libraries is None

    def test_from_dict_single_string(self) -> None:
        """Test that a single string is accepted as a one-item list."""
        config = SproutConfig.from_dict({"libraries": "~/templates"})

        assert config.libraries == ("~/templates",)


class TestConfigPaths:
    """Tests for config path helpers."""

    def test_home_defaults_to_dot_sprout(self, monkeypatch, tmp_path: Path) -> None:
        """Test the default home directory."""
        monkeypatch.delenv("SPROUT_HOME", raising=False)
        with patch("sprout.config.loader.Path.home", return_value=tmp_path):
            assert get_sprout_home() == tmp_path / ".sprout"

    def test_home_env_override(self, monkeypatch, tmp_path: Path) -> None:
        """Test that SPROUT_HOME overrides the home directory."""
        monkeypatch.setenv("SPROUT_HOME", str(tmp_path / "custom"))

        assert get_sprout_home() == tmp_path / "custom"
        assert get_home_config_path() == tmp_path / "custom" / "config.yaml"

    def test_local_config_path(self, monkeypatch, tmp_path: Path) -> None:
        """Test that the local config lives in ./.sprout."""
        monkeypatch.chdir(tmp_path)

        assert get_local_config_path() == tmp_path / ".sprout" / "config.yaml"


class TestLoadConfig:
    """Tests for layered config loading."""

    def test_load_yaml_missing(self, tmp_path: Path) -> None:
        """Test that a missing file returns None."""
        assert load_yaml_config(tmp_path / "missing.yaml") is None

    def test_load_yaml_malformed(self, tmp_path: Path) -> None:
        """Test that malformed YAML returns None."""
        path = tmp_path / "config.yaml"
        path.write_text("repositories: [oops\n")

        assert load_yaml_config(path) is None

    def test_load_yaml_not_utf8(self, tmp_path: Path, caplog) -> None:
        """Test that a file that is not UTF-8 is skipped with a warning."""
        path = tmp_path / "config.yaml"
        path.write_bytes(b"libraries: [caf\xe9]\n")

        with caplog.at_level(logging.WARNING, logger="sprout"):
            assert load_yaml_config(path) is None

        assert "Ignoring malformed config" in caplog.text

    def test_load_yaml_not_mapping(self, tmp_path: Path) -> None:
        """Test that a non-mapping document returns None."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        assert load_yaml_config(path) is None

    def test_defaults_only(self, monkeypatch, tmp_path: Path) -> None:
        """Test that no config files give the defaults."""
        monkeypatch.chdir(tmp_path)

        assert load_config(tmp_path / "home") == DEFAULT_CONFIG

    def test_local_overrides_home(self, monkeypatch, tmp_path: Path) -> None:
        """Test that the local config takes precedence over the home config."""
        home = tmp_path / "home"
        project = tmp_path / "project"
        _write_config(
            home / "config.yaml",
            {"repositories": ["home-repo"], "libraries": ["home-lib"]},
        )
        _write_config(
            project / ".sprout" / "config.yaml", {"repositories": ["local-repo"]}
        )
        monkeypatch.chdir(project)

        config = load_config(home)

        assert config.repositories == ("local-repo",)
        assert config.libraries == ("home-lib",)


class TestSproutContext:
    """Tests for SproutContext."""

    def test_library_roots_order(self, tmp_path: Path) -> None:
        """Test that local libraries come before cached repositories."""
        library = tmp_path / "lib"
        library.mkdir()
        cached = repository_path(tmp_path, "https://example.com/t.git")
        cached.mkdir(parents=True)
        context = SproutContext(
            config=SproutConfig(
                repositories=("https://example.com/t.git",),
                libraries=(str(library),),
            ),
            home=tmp_path,
        )

        assert context.library_roots() == [library, cached]

    def test_missing_roots_skipped(self, tmp_path: Path, caplog) -> None:
        """Test that missing libraries and unsynced repositories are skipped."""
        context = SproutContext(
            config=SproutConfig(
                repositories=("https://example.com/t.git",),
                libraries=(str(tmp_path / "missing"),),
            ),
            home=tmp_path,
        )

        with caplog.at_level("WARNING", logger="sprout"):
            roots = context.library_roots()

        assert roots == []
        assert "sprout upgrade" in caplog.text

    def test_config_path(self, tmp_path: Path) -> None:
        """Test that the config path lives in the home directory."""
        context = SproutContext(config=DEFAULT_CONFIG, home=tmp_path)

        assert context.config_path == tmp_path / "config.yaml"

    def test_load(self, monkeypatch, tmp_path: Path) -> None:
        """Test building the context from a home directory."""
        monkeypatch.chdir(tmp_path)
        _write_config(tmp_path / "config.yaml", {"repositories": ["r"]})

        context = SproutContext.load(tmp_path)

        assert context.home == tmp_path
        assert context.repositories == ("r",)
