"""
Configuration module for the Org-mode MCP Server.

Uses pydantic-settings for server settings with environment variable support.
Environment variables use the ORGMODE_ prefix (e.g., ORGMODE_CONFIG_PATH);
the config file location is also read from CONFIG_PATH.

The config file is JSON listing glob patterns of org files:

    {"orgFiles": ["~/org/*.org", "notes/**/*.org"]}
"""

import glob
import json
import os
from pathlib import Path

import structlog
from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import ConfigValidationResult, OrgConfig
from .utils import ConfigError

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables:
    - ORGMODE_CONFIG_PATH (or CONFIG_PATH): Path to the JSON config file
    - ORGMODE_SERVER_NAME: Name reported to MCP clients
    - ORGMODE_SERVER_VERSION: Version reported to MCP clients
    - ORGMODE_LOG_LEVEL: Minimum log level
    """

    config_path: Path = Field(
        default=Path("./config.json"),
        validation_alias=AliasChoices("ORGMODE_CONFIG_PATH", "CONFIG_PATH"),
    )
    server_name: str = "orgmode-mcp"
    server_version: str = "1.0.0"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="ORGMODE_")


# Global settings instance
settings = Settings()


def _expand_pattern(pattern: str, config_dir: Path) -> list[str]:
    """Expand one org file pattern to sorted absolute file paths."""
    if pattern.startswith("~/"):
        pattern = str(Path.home()) + pattern[1:]

    search_pattern = pattern if os.path.isabs(pattern) else str(config_dir / pattern)

    matches = glob.glob(search_pattern, recursive=True)
    return sorted(os.path.abspath(m) for m in matches if os.path.isfile(m))


def load_config(config_path: str | Path | None = None) -> ConfigValidationResult:
    """Load the configuration file and expand its org file patterns.

    Args:
        config_path: Path to the config file (defaults to settings.config_path)

    Returns:
        A ConfigValidationResult with the deduplicated absolute paths
    """
    errors: list[str] = []
    warnings: list[str] = []

    resolved_path = Path(config_path or settings.config_path).expanduser().resolve()

    try:
        raw_config = json.loads(resolved_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        errors.append(f"Configuration file not found at: {resolved_path}")
        return ConfigValidationResult(is_valid=False, errors=errors, warnings=warnings)
    except json.JSONDecodeError as e:
        errors.append(f"Invalid JSON in configuration file: {e}")
        return ConfigValidationResult(is_valid=False, errors=errors, warnings=warnings)
    except (OSError, UnicodeDecodeError) as e:
        errors.append(f"Error reading configuration file: {e}")
        return ConfigValidationResult(is_valid=False, errors=errors, warnings=warnings)

    try:
        config = OrgConfig.model_validate(raw_config)
    except ValidationError as e:
        errors.append("Configuration validation failed:")
        for err in e.errors():
            location = ".".join(str(part) for part in err["loc"]) or "(root)"
            errors.append(f"  - {location}: {err['msg']}")
        return ConfigValidationResult(is_valid=False, errors=errors, warnings=warnings)

    expanded_paths: list[str] = []
    config_dir = resolved_path.parent

    for pattern in config.org_files:
        try:
            matches = _expand_pattern(pattern, config_dir)
        except (OSError, ValueError) as e:
            warnings.append(f"Error expanding pattern \"{pattern}\": {e}")
            continue

        if not matches:
            warnings.append(f"No files found matching pattern: {pattern}")
        else:
            expanded_paths.extend(matches)

    if not expanded_paths:
        errors.append("No org files found matching the specified patterns")
        return ConfigValidationResult(is_valid=False, config=config, errors=errors, warnings=warnings)

    # Patterns may overlap
    unique_paths = list(dict.fromkeys(expanded_paths))

    return ConfigValidationResult(
        is_valid=True,
        config=config,
        expanded_paths=unique_paths,
        errors=errors,
        warnings=warnings,
    )


def validate_and_load_config(config_path: str | Path | None = None) -> list[str]:
    """Load the configuration, log the outcome, and return the org file paths.

    Raises:
        ConfigError: If the configuration is invalid
    """
    result = load_config(config_path)

    for warning in result.warnings:
        logger.warning("config_warning", message=warning)

    if not result.is_valid or result.errors:
        for error in result.errors:
            logger.error("config_error", message=error)
        raise ConfigError(result.errors)

    logger.info("config_loaded", file_count=len(result.expanded_paths), files=result.expanded_paths)
    return result.expanded_paths
