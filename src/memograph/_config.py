"""Engine configuration: policy knobs, scoped overrides and pyproject.toml loading."""

from __future__ import annotations

import functools
import tomllib
from dataclasses import dataclass
from pathlib import Path

from scoped_context import NoContextError, ScopedContext

from ._errors import ConfigError


@dataclass(slots=True)
class EngineConfig(ScopedContext):
    """Policy settings for the evaluation engine.

    An instance can be used as a context manager to override the settings for
    the enclosed block:

        >>> with EngineConfig(strict_set=False):
        ...     set_value(node, 1.0)  # ignored with a warning instead of raising

    Attributes:
        strict_set: Raise NotAParameterError when a value is assigned to a node
            that is not a parameter. When False the assignment is ignored.
        track_visited: Visit each dependent at most once while invalidating.
            When False, nodes reachable through several paths are revisited.

    """

    strict_set: bool = True
    track_visited: bool = True


@functools.cache
def _project_config() -> EngineConfig:
    return get_config()


def active_config() -> EngineConfig:
    """Return the innermost config entered with ``with``.

    Outside any scope this is the ``[tool.memograph]`` config of the nearest
    pyproject.toml, loaded on first use and reused afterwards, or the defaults
    when there is none.

    Raises:
        ConfigError: If the project config is invalid

    """
    try:
        return EngineConfig.current()
    except NoContextError:
        return _project_config()


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


def _parse_flag(section: dict[str, object], key: str, *, default: bool) -> bool:
    if key not in section:
        return default
    value = section[key]
    if not isinstance(value, bool):
        msg = f"Invalid [tool.memograph].{key}: expected boolean, got {type(value).__name__}"
        raise ConfigError(msg)
    return value


def load_config(pyproject_path: Path) -> EngineConfig:
    """Load and validate [tool.memograph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed EngineConfig. Keys missing from the section keep their defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a setting has the wrong type

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("memograph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.memograph] configuration. Expected a table."
        raise ConfigError(msg)

    defaults = EngineConfig()
    return EngineConfig(
        strict_set=_parse_flag(section, "strict_set", default=defaults.strict_set),
        track_visited=_parse_flag(section, "track_visited", default=defaults.track_visited),
    )


def get_config() -> EngineConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        EngineConfig (defaults if no pyproject.toml or no [tool.memograph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return EngineConfig()
    return load_config(pyproject_path)
