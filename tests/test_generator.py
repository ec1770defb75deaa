"""Tests for writing artifacts and generating projects."""

import logging
from pathlib import Path

import pytest

from sprout.data import ArgumentDefinition, MappingRawValues, MultiValue, resolve
from sprout.generator import GenerationAborted, ProjectGenerator
from sprout.templates import Artifact, ProjectTemplate, ProjectWriter
from sprout.templates.writer import hidden_name


class TestProjectWriter:
    """Tests for ProjectWriter."""

    def test_write_creates_parents(self, tmp_path: Path) -> None:
        """Test that missing parent directories are created."""
        writer = ProjectWriter(tmp_path)

        path = writer.write(Artifact(name="a/b/c.txt", content="hi", source="x"))

        assert path == tmp_path / "a" / "b" / "c.txt"
        assert path.read_text() == "hi"

    def test_write_never_overwrites(self, tmp_path: Path) -> None:
        """Test that an existing file is left untouched."""
        (tmp_path / "c.txt").write_text("original")
        writer = ProjectWriter(tmp_path)

        path = writer.write(Artifact(name="c.txt", content="new", source="x"))

        assert path is None
        assert (tmp_path / "c.txt").read_text() == "original"

    def test_write_refuses_paths_outside_root(self, tmp_path: Path, caplog) -> None:
        """Test that names escaping the project root are not written."""
        root = tmp_path / "project"
        root.mkdir()
        writer = ProjectWriter(root)

        with caplog.at_level(logging.WARNING, logger="sprout"):
            outside = writer.write(Artifact(name="../x.txt", content="x", source="s"))
            absolute = writer.write(
                Artifact(name=str(tmp_path / "y.txt"), content="y", source="s")
            )

        assert outside is None
        assert absolute is None
        assert not (tmp_path / "x.txt").exists()
        assert not (tmp_path / "y.txt").exists()
        assert "Refusing to write" in caplog.text

    def test_hidden_name(self) -> None:
        """Test the hidden marker replacement."""
        assert hidden_name("!gitignore") == ".gitignore"
        assert hidden_name("gitignore") == "gitignore"
        assert hidden_name("a!b") == "a!b"

    def test_escape_hidden_files_and_dirs(self, tmp_path: Path) -> None:
        """Test that marked files and directories are renamed."""
        writer = ProjectWriter(tmp_path)
        writer.write(Artifact(name="!gitignore", content="target/\n", source="x"))
        writer.write(
            Artifact(name="!github/workflows/ci.yml", content="on: push\n", source="x")
        )

        writer.escape_hidden()

        assert (tmp_path / ".gitignore").read_text() == "target/\n"
        assert (tmp_path / ".github" / "workflows" / "ci.yml").exists()
        assert not (tmp_path / "!gitignore").exists()
        assert not (tmp_path / "!github").exists()


def _template(tmp_path: Path) -> ProjectTemplate:
    root = tmp_path / "library" / "java-app"
    (root / "src" / "{{ mod }}").mkdir(parents=True)
    (root / "src" / "{{ mod }}" / "Module.java.j2").write_text(
        "package {{ group_dot }};\n// modules: {{ mod | join(', ') }}\n"
    )
    (root / "!gitignore.j2").write_text("build/\n")
    (root / "README.md.j2").write_text("# {{ proj_title }}\n")
    (root / "settings.gradle.j2").write_text(
        "rootProject.name = '{{ proj_kebab }}'\n"
    )
    template = ProjectTemplate.from_dir(root)
    assert template is not None
    return template


def _data(**supplied):
    schema = {
        "mod": ArgumentDefinition("mod", kind=MultiValue()),
        "group": ArgumentDefinition("group"),
    }
    return resolve(schema, MappingRawValues(supplied))


class TestProjectGenerator:
    """Tests for ProjectGenerator."""

    def test_generate(self, tmp_path: Path) -> None:
        """Test generating a project with fan-out and hidden files."""
        out = tmp_path / "out"
        out.mkdir()
        data = _data(
            **{"project-name": "MyService"}, mod=["api", "core"], group="com.acme"
        )

        report = ProjectGenerator(_template(tmp_path), data, cwd=out).generate()

        project = out / "MyService"
        assert report.project_dir == project
        assert (project / "settings.gradle").read_text() == (
            "rootProject.name = 'my-service'\n"
        )
        assert (project / "src" / "api" / "Module.java").read_text() == (
            "package com.acme;\n// modules: api, core\n"
        )
        assert (project / "src" / "core" / "Module.java").exists()
        assert (project / ".gitignore").exists()
        assert not (project / "README.md").exists()
        assert "README.md.j2" in report.skipped
        assert project / ".gitignore" in report.written

    def test_force_replaces_existing(self, tmp_path: Path) -> None:
        """Test that --force removes an existing project without asking."""
        out = tmp_path / "out"
        (out / "demo").mkdir(parents=True)
        (out / "demo" / "stale.txt").write_text("old")
        data = _data(**{"project-name": "demo"}, force=True)

        def confirm(path: Path) -> bool:
            raise AssertionError("should not ask")

        ProjectGenerator(_template(tmp_path), data, cwd=out, confirm=confirm).generate()

        assert not (out / "demo" / "stale.txt").exists()
        assert (out / "demo" / "settings.gradle").exists()

    def test_confirmed_overwrite(self, tmp_path: Path) -> None:
        """Test that an accepted prompt replaces the existing project."""
        out = tmp_path / "out"
        (out / "demo").mkdir(parents=True)
        (out / "demo" / "stale.txt").write_text("old")
        asked: list[Path] = []

        def confirm(path: Path) -> bool:
            asked.append(path)
            return True

        data = _data(**{"project-name": "demo"})
        ProjectGenerator(_template(tmp_path), data, cwd=out, confirm=confirm).generate()

        assert asked == [out / "demo"]
        assert not (out / "demo" / "stale.txt").exists()

    def test_refused_overwrite(self, tmp_path: Path) -> None:
        """Test that a refused prompt aborts without changes."""
        out = tmp_path / "out"
        (out / "demo").mkdir(parents=True)
        (out / "demo" / "stale.txt").write_text("old")
        data = _data(**{"project-name": "demo"})

        generator = ProjectGenerator(
            _template(tmp_path), data, cwd=out, confirm=lambda path: False
        )
        with pytest.raises(GenerationAborted):
            generator.generate()

        assert (out / "demo" / "stale.txt").read_text() == "old"

    def test_default_project_name(self, tmp_path: Path) -> None:
        """Test that a missing project name generates into 'sample'."""
        out = tmp_path / "out"
        out.mkdir()

        report = ProjectGenerator(_template(tmp_path), _data(), cwd=out).generate()

        assert report.project_dir == out / "sample"
        assert (out / "sample" / "settings.gradle").exists()
