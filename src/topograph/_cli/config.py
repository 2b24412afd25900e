"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from topograph._errors import ConfigError

__all__ = ["ConfigError", "TopographConfig", "find_pyproject_toml", "get_config", "load_config"]


@dataclass(slots=True, frozen=True)
class TopographConfig:
    """Configuration loaded from pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    graph: Path | None = None
    output: Path | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.topograph].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> TopographConfig:
    """Load and validate [tool.topograph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TopographConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("topograph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.topograph] configuration: expected a table"
        raise ConfigError(msg)

    if not section:
        # No [tool.topograph] section - return empty config
        return TopographConfig(project_root=project_root)

    return TopographConfig(
        graph=_parse_path(section, "graph", project_root),
        output=_parse_path(section, "output", project_root),
        project_root=project_root,
    )


def get_config() -> TopographConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TopographConfig (may be empty if no pyproject.toml or no [tool.topograph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TopographConfig()
    return load_config(pyproject_path)
