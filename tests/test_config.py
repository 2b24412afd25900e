"""Tests for the configuration module."""

from pathlib import Path

import pytest

from topograph._cli.config import (
    ConfigError,
    TopographConfig,
    find_pyproject_toml,
    get_config,
    load_config,
)


class TestFindPyprojectToml:
    """Tests for find_pyproject_toml function."""

    def test_finds_in_current_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in current directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        result = find_pyproject_toml(tmp_path)

        assert result == pyproject

    def test_finds_in_parent_directory(self, tmp_path: Path) -> None:
        """Should find pyproject.toml in parent directory."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        subdir = tmp_path / "src" / "pkg"
        subdir.mkdir(parents=True)

        result = find_pyproject_toml(subdir)

        assert result == pyproject


class TestLoadConfig:
    """Tests for loading [tool.topograph]."""

    def test_graph_and_output_paths(self, tmp_path: Path) -> None:
        """Should resolve relative paths from the project root."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(
            """
[tool.topograph]
graph = "deps/graph.toml"
output = "build/order.toml"
""",
        )

        config = load_config(pyproject)

        assert config.graph == tmp_path / "deps/graph.toml"
        assert config.output == tmp_path / "build/order.toml"
        assert config.project_root == tmp_path

    def test_absolute_path_is_kept(self, tmp_path: Path) -> None:
        """Should not rebase absolute paths."""
        absolute = tmp_path / "elsewhere" / "graph.toml"
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text(f'[tool.topograph]\ngraph = "{absolute.as_posix()}"\n')

        config = load_config(pyproject)

        assert config.graph == absolute

    def test_missing_section_returns_empty_config(self, tmp_path: Path) -> None:
        """Should return empty config when [tool.topograph] is missing."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[project]\nname = 'test'\n")

        config = load_config(pyproject)

        assert config == TopographConfig(project_root=tmp_path)

    def test_invalid_graph_type_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError when graph is not a string."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.topograph]\ngraph = 123\n")

        with pytest.raises(ConfigError, match="expected string path"):
            load_config(pyproject)

    def test_section_must_be_a_table(self, tmp_path: Path) -> None:
        """Should raise ConfigError when tool.topograph is not a table."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text('[tool]\ntopograph = "graph.toml"\n')

        with pytest.raises(ConfigError, match="expected a table"):
            load_config(pyproject)

    def test_invalid_toml_raises_error(self, tmp_path: Path) -> None:
        """Should raise ConfigError for malformed pyproject.toml."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.topograph\n")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(pyproject)


class TestGetConfig:
    """Tests for get_config function."""

    def test_reads_from_working_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should load config from the nearest pyproject.toml."""
        (tmp_path / "pyproject.toml").write_text('[tool.topograph]\ngraph = "graph.toml"\n')
        monkeypatch.chdir(tmp_path)

        config = get_config()

        assert config.graph == tmp_path.resolve() / "graph.toml"
