"""
Settings and configuration management for the YouTube MCP Server.
Credential loading follows the environment first, then the project credentials.yml.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


API_KEY_ENV_VAR = "YOUTUBE_API_KEY"
LOG_LEVEL_ENV_VAR = "YOUTUBE_MCP_LOG_LEVEL"
REQUEST_TIMEOUT_ENV_VAR = "YOUTUBE_MCP_REQUEST_TIMEOUT"
VALIDATE_ARGUMENTS_ENV_VAR = "YOUTUBE_MCP_VALIDATE_ARGUMENTS"

DEFAULT_CREDENTIALS_PATH = "credentials.yml"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass
class Settings:
    """Configuration settings for the YouTube MCP Server."""

    # API Keys
    youtube_api_key: Optional[str]

    # Upstream Configuration
    request_timeout: float = 30.0

    # Server Configuration
    server_name: str = "youtube-mcp-server"
    log_level: str = "INFO"
    validate_arguments: bool = True

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.youtube_api_key is not None:
            self.youtube_api_key = _validate_api_key_format(self.youtube_api_key)
        if self.request_timeout <= 0:
            raise ConfigurationError("Request timeout must be positive")

        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")

    def require_api_key(self) -> str:
        """
        Return the YouTube API key or fail if it was never configured.

        Raises:
            ConfigurationError: If no API key is available
        """
        if not self.youtube_api_key:
            raise ConfigurationError(
                f"{API_KEY_ENV_VAR} environment variable is not set."
            )
        return self.youtube_api_key


def load_credentials(credentials_path: str = DEFAULT_CREDENTIALS_PATH) -> Dict[str, Any]:
    """
    Load credentials from YAML file.

    Args:
        credentials_path: Path to credentials file

    Returns:
        Dictionary containing API keys

    Raises:
        ConfigurationError: If the credentials file is missing or invalid
    """
    try:
        with open(credentials_path, 'r') as f:
            credentials = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Credentials file '{credentials_path}' not found. "
            f"Set {API_KEY_ENV_VAR} or create a credentials.yml file with a 'youtube' key."
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in credentials file: {e}")

    if not credentials or not isinstance(credentials, dict):
        raise ConfigurationError("credentials.yml file is empty or invalid")

    return credentials


def _extract_youtube_key(credentials: Dict[str, Any]) -> str:
    """
    Extract YouTube API key from credentials.

    Raises:
        ConfigurationError: If key extraction fails
    """
    youtube_key = credentials.get('youtube')
    if not youtube_key:
        raise ConfigurationError("youtube key not found in credentials.yml")

    if not isinstance(youtube_key, str):
        raise ConfigurationError("YouTube API key must be a string")

    return youtube_key.strip()


def _validate_api_key_format(youtube_key: str) -> str:
    """
    Validate YouTube API key format.

    Raises:
        ConfigurationError: If validation fails
    """
    youtube_key = youtube_key.strip()
    if len(youtube_key) < 10:
        raise ConfigurationError("YouTube API key appears to be invalid (too short)")

    # Google API keys start with 'AIza'; test and fake keys are allowed for testing
    if not youtube_key.startswith(('AIza', 'test', 'fake')):
        raise ConfigurationError(
            "YouTube API key format appears invalid "
            "(should start with 'AIza', 'test', or 'fake' for testing)"
        )

    return youtube_key


def load_api_key(credentials_path: str = DEFAULT_CREDENTIALS_PATH) -> str:
    """
    Load the YouTube API key from the environment, falling back to credentials.yml.

    Args:
        credentials_path: Path to credentials file used when the environment is empty

    Returns:
        Validated API key

    Raises:
        ConfigurationError: If no valid key can be found
    """
    env_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
    if env_key:
        return _validate_api_key_format(env_key)

    if not Path(credentials_path).is_file():
        raise ConfigurationError(f"{API_KEY_ENV_VAR} environment variable is not set.")

    credentials = load_credentials(credentials_path)
    return _validate_api_key_format(_extract_youtube_key(credentials))


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}")


def get_settings(credentials_path: str = DEFAULT_CREDENTIALS_PATH) -> Settings:
    """
    Get application settings with credentials loaded.

    Args:
        credentials_path: Path to credentials file

    Returns:
        Settings instance with loaded configuration

    Raises:
        ConfigurationError: If the API key or any setting is invalid
    """
    timeout_raw = os.environ.get(REQUEST_TIMEOUT_ENV_VAR)
    try:
        request_timeout = float(timeout_raw) if timeout_raw else 30.0
    except ValueError:
        raise ConfigurationError(f"Invalid request timeout: {timeout_raw!r}")

    validate_raw = os.environ.get(VALIDATE_ARGUMENTS_ENV_VAR)

    return Settings(
        youtube_api_key=load_api_key(credentials_path),
        request_timeout=request_timeout,
        log_level=os.environ.get(LOG_LEVEL_ENV_VAR, "INFO"),
        validate_arguments=_parse_bool(validate_raw) if validate_raw else True,
    )
