"""
Config check use case — validate docs.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import get_args

from src.core.config.loader import ConfigError, find_config_file, load_config
from src.core.models.config import AuthStrategy, DocsConfig
from src.core.services.docs.markdown import CODE_SAMPLES

_NAMED_STRATEGIES = ("query", "body", "query_or_body", "header")


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: DocsConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "title": self.config.title if self.config else None,
            "type": self.config.type if self.config else None,
            "postman": self.config.postman.enabled if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate docs configuration and report issues.

    Args:
        config_path: Optional explicit path to docs.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    # Find config
    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.errors.append("No docs.yml found.")
        return result

    result.config_path = config_path

    # Load and validate
    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    auth = config.auth
    if auth.enabled:
        if auth.in_ not in get_args(AuthStrategy):
            result.warnings.append(
                f"Unknown auth strategy '{auth.in_}'. The authentication page "
                "will only contain a generic lead-in."
            )
        elif auth.in_ in _NAMED_STRATEGIES and not auth.name:
            result.errors.append(f"auth.name is required for auth strategy '{auth.in_}'.")

    unknown = [lang for lang in config.example_languages if lang not in CODE_SAMPLES]
    if unknown:
        result.warnings.append(
            f"No code samples for language(s): {', '.join(unknown)}. "
            f"Supported: {', '.join(CODE_SAMPLES)}."
        )

    if not config.example_languages:
        result.warnings.append("No example_languages set. Routes will have no code samples.")

    # Result
    result.valid = len(result.errors) == 0
    return result
