"""Load, validate and store Commit Digest configuration.

Values come from three layers, later ones winning: built-in defaults, the
``KEY=VALUE`` config file, then non-empty environment variables.
"""

import os
import re
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from commit_digest.config import CONFIG_DIR_NAME, CONFIG_FILE_NAME
from commit_digest.errors import (
    ConfigError,
    InvalidConfigLineError,
    InvalidConfigValueError,
    UnknownConfigKeyError,
)
from commit_digest.schemas import CommitDigestConfig
from commit_digest.settings import commit_digest_logger

# Load .env automatically
load_dotenv()

logger = commit_digest_logger(__name__)

_ESCAPE_SEQUENCE = re.compile(r"\\(\\|n)")


CONFIG_KEYS: Dict[str, str] = {
    "OLLAMA_BASE_URL": "ollama_url",
    "OLLAMA_MODEL": "ollama_model",
    "OLLAMA_CONTEXT_LENGTH": "context_length",
    "OLLAMA_TEMPERATURE": "temperature",
    "OLLAMA_REQUEST_TIMEOUT": "request_timeout",
    "SYSTEM_PROMPT": "system_prompt",
    "SUMMARY_PROMPT": "summary_prompt",
    "COMMIT_MESSAGE_PROMPT": "commit_message_prompt",
}


def config_file_path(get_env: Callable[[str], Optional[str]] = os.getenv) -> Path:
    """Return the config file location under ``$XDG_CONFIG_HOME`` (or ``~/.config``)."""

    config_home = get_env("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def parse_config_file(path: Path) -> Dict[str, str]:
    """Read raw values from *path*, keyed by config field name.

    A missing file is not an error and yields no values.

    Raises:
        InvalidConfigLineError: If a line is not ``KEY=VALUE``.
        UnknownConfigKeyError: If a key is not one of :data:`CONFIG_KEYS`.
        ConfigError: If the file exists but cannot be read.
    """
    if not path.is_file():
        logger.debug("No config file at %s, using defaults", path)
        return {}

    logger.debug("Reading config file %s", path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e

    values: Dict[str, str] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            raise InvalidConfigLineError(f"Invalid config line: {line}")

        key = key.strip()
        if key not in CONFIG_KEYS:
            raise UnknownConfigKeyError(f"Unknown config key: {key}")

        values[CONFIG_KEYS[key]] = _unescape(value.strip())

    return values


def load_config(
    path: Optional[Path] = None,
    get_env: Callable[[str], Optional[str]] = os.getenv,
) -> CommitDigestConfig:
    """Build the effective configuration from file and environment.

    Args:
        path: Config file to read; defaults to :func:`config_file_path`.
        get_env: Function to retrieve environment variables.

    Returns:
        A validated, immutable configuration.

    Raises:
        ConfigError: If the file is malformed or a value is invalid.
    """
    path = path or config_file_path(get_env)
    values = parse_config_file(path)

    for env_var, field in CONFIG_KEYS.items():
        override = get_env(env_var)
        if override:
            logger.debug("Using %s from environment", env_var)
            values[field] = override

    return _validate(values)


def write_config_file(config: CommitDigestConfig, path: Path) -> Path:
    """Write every setting of *config* to *path*, creating its directory."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(_render(config), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error writing config file {path}: {e}") from e

    logger.info("Configuration written to %s", path)
    return path


def describe_config(config: CommitDigestConfig) -> str:
    """Render the effective configuration one ``KEY: value`` line per setting."""

    return "\n".join(
        f"  {key}: {value}" for key, value in _serialized(config).items()
    )


def _validate(values: Mapping[str, str]) -> CommitDigestConfig:
    try:
        return CommitDigestConfig(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{_key_for(error['loc'])}: {error['msg']}" for error in e.errors()
        )
        logger.debug("Invalid configuration: %s", problems)
        raise InvalidConfigValueError(f"Invalid configuration value(s): {problems}") from e


def _key_for(location: tuple) -> str:
    field = location[0] if location else ""
    for key, name in CONFIG_KEYS.items():
        if name == field:
            return key
    return str(field)


def _serialized(config: CommitDigestConfig) -> Dict[str, str]:
    dumped = config.model_dump()
    serialized: Dict[str, str] = {}
    for key, field in CONFIG_KEYS.items():
        value = dumped[field]
        if isinstance(value, float):
            value = f"{value:f}"
        serialized[key] = _escape(str(value))
    return serialized


def _render(config: CommitDigestConfig) -> str:
    return "".join(f"{key}={value}\n" for key, value in _serialized(config).items())


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("\n", "\\n")


def _unescape(value: str) -> str:
    return _ESCAPE_SEQUENCE.sub(
        lambda match: "\n" if match.group(1) == "n" else "\\", value
    )
