"""Configuration loading from pyproject.toml.

Example:
    [tool.cgl]
    strict_inputs = true
    fail_fast = false

"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

from ._errors import ConfigError


@dataclass(slots=True, frozen=True)
class CGLConfig:
    """Builder behaviour settings.

    Attributes:
        strict_inputs: Reject fill inputs given for unknown or non-input
            nodes instead of ignoring them.
        fail_fast: Stop constraint checking at the first failure.

    """

    strict_inputs: bool = False
    fail_fast: bool = True


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


def load_config(pyproject_path: Path) -> CGLConfig:
    """Load and validate [tool.cgl] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed CGLConfig. Defaults if the file has no [tool.cgl] section.

    Raises:
        ConfigError: If the configuration is invalid

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("cgl", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.cgl] configuration: expected a table"
        raise ConfigError(msg)

    known = {f.name for f in fields(CGLConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        msg = f"Unknown [tool.cgl] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    for key, value in section.items():
        if not isinstance(value, bool):
            msg = f"Invalid [tool.cgl].{key}: expected boolean, got {type(value).__name__}"
            raise ConfigError(msg)

    return CGLConfig(**section)


def get_config() -> CGLConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        CGLConfig (defaults if no pyproject.toml or no [tool.cgl] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return CGLConfig()
    return load_config(pyproject_path)
