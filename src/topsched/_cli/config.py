"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from topsched._schedule import Algorithm


class ConfigError(Exception):
    """Error in topsched configuration."""


@dataclass(slots=True, frozen=True)
class TopschedConfig:
    """Defaults loaded from the ``[tool.topsched]`` table of pyproject.toml.

    Command-line options always take precedence over these values.
    """

    algorithm: Algorithm | None = None
    start: str | None = None


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
            return None
        current = parent


def _parse_algorithm(value: object) -> Algorithm:
    if not isinstance(value, str):
        msg = "Invalid [tool.topsched].algorithm: expected string"
        raise ConfigError(msg)
    try:
        return Algorithm(value.lower())
    except ValueError:
        choices = ", ".join(f"'{a}'" for a in Algorithm)
        msg = f"Invalid [tool.topsched].algorithm '{value}'. Expected one of: {choices}"
        raise ConfigError(msg) from None


def load_config(pyproject_path: Path) -> TopschedConfig:
    """Load and validate [tool.topsched] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TopschedConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("topsched", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.topsched]: expected a table"
        raise ConfigError(msg)

    algorithm: Algorithm | None = None
    if "algorithm" in section:
        algorithm = _parse_algorithm(section["algorithm"])

    start: str | None = None
    if "start" in section:
        start_value = section["start"]
        if not isinstance(start_value, str):
            msg = "Invalid [tool.topsched].start: expected node name string"
            raise ConfigError(msg)
        start = start_value

    return TopschedConfig(algorithm=algorithm, start=start)


def get_config() -> TopschedConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TopschedConfig (may be empty if no pyproject.toml or no [tool.topsched] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TopschedConfig()
    return load_config(pyproject_path)
