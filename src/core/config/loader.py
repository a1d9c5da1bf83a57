"""
Configuration loader — reads docs.yml into the DocsConfig model.

This is the primary entry point for loading documentation configuration.
It reads YAML, validates against Pydantic schemas, and returns a typed
config object that callers pass explicitly to the writer.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.core.models.config import DocsConfig

logger = logging.getLogger(__name__)

# Default config filename
DOCS_CONFIG_FILE = "docs.yml"


class ConfigError(Exception):
    """Raised when configuration or input files are invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for docs.yml starting from the given directory, walking up.

    This allows running commands from subdirectories and still finding
    the project root.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to docs.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / DOCS_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def read_yaml(path: Path) -> object:
    """Read and parse a YAML (or JSON) file, wrapping errors in ConfigError."""
    if not path.is_file():
        raise ConfigError(f"File not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path | None = None) -> DocsConfig:
    """Load and validate documentation configuration.

    Args:
        path: Explicit path to docs.yml. If None, searches upward.

    Returns:
        Validated DocsConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No {DOCS_CONFIG_FILE} found. "
            "Create one in your project root, or specify --config."
        )

    logger.debug("Loading docs config from %s", path)
    data = read_yaml(path)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "docs" key or be flat
    if isinstance(data.get("docs"), dict):
        data = data["docs"]

    try:
        config = DocsConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid docs configuration: {e}") from e

    logger.info("Loaded docs config '%s' (type=%s)", config.title, config.type)
    return config


def project_root(config_path: Path) -> Path:
    """Get the project root directory from a config file path."""
    return config_path.parent.resolve()
