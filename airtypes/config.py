"""
Configuration management for airtypes.

Loads the TOML config file, validates it and resolves the API key and
output path into a ParsedConfig.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT = "airtable-types.ts"
DEFAULT_API_KEY_ENV = "AIRTABLE_API_KEY"
CONFIG_FILE_NAMES = ("airtypes.toml", "config.toml")
REDACTED = "[redacted]"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class BaseConfig:
    """Scoping and overrides for one remote base."""

    base_name: str
    base_id: str
    table_ids: Optional[List[str]] = None
    view_ids: Optional[List[str]] = None
    # Table id or display name -> field ids, display names or identifiers
    required_fields: Optional[Dict[str, List[str]]] = None


@dataclass
class ParsedConfig:
    """Validated configuration for one run."""

    api_key: str
    output: Path
    bases: List[BaseConfig] = field(default_factory=list)


def resolve_config_path(
    cwd: Union[str, Path, None] = None,
    config: Optional[Union[str, Path]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Find the configuration file to use.

    Args:
        cwd: Directory relative paths and discovery are based on
        config: Explicit path (``--config``)
        config_file: Alias of ``config`` (``--config-file``)

    Returns:
        Absolute path of the config file

    Raises:
        ConfigError: No explicit path was given and no default file exists
    """
    base_dir = Path(cwd) if cwd else Path.cwd()
    explicit = config or config_file
    if explicit:
        return (base_dir / explicit).resolve()

    for name in CONFIG_FILE_NAMES:
        candidate = base_dir / name
        if candidate.exists():
            logger.debug(f"Using config file {candidate}")
            return candidate.resolve()

    raise ConfigError(
        f"No config file found. Pass --config or create one of: "
        f"{', '.join(CONFIG_FILE_NAMES)}"
    )


def read_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read and validate a TOML config file without resolving secrets.

    Raises:
        ConfigError: The file is missing, empty, not TOML or invalid
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not raw:
        raise ConfigError(f"Config file is empty: {path}")

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file {path}: {e}") from e

    return validate_raw_config(data)


def _optional_string(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value.strip()


def _required_string(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{where}: '{key}' must be a non-empty string")
    return value.strip()


def _string_list(value: Any, key: str, where: str) -> List[str]:
    if not isinstance(value, list):
        raise ConfigError(f"{where}: '{key}' must be a list of strings")
    items = []
    for item in value:
        if not isinstance(item, str) or not item.strip():
            raise ConfigError(f"{where}: '{key}' entries must be non-empty strings")
        items.append(item.strip())
    return items


def _validate_base(entry: Any, index: int) -> Dict[str, Any]:
    where = f"bases[{index}]"
    if not isinstance(entry, dict):
        raise ConfigError(f"{where} must be a table")

    base: Dict[str, Any] = {
        "name": _required_string(entry, "name", where),
        "base_id": _required_string(entry, "base_id", where),
    }

    for key in ("table_ids", "view_ids"):
        if entry.get(key) is not None:
            base[key] = _string_list(entry[key], key, where)

    required = entry.get("required_fields")
    if required is not None:
        if not isinstance(required, dict):
            raise ConfigError(f"{where}: 'required_fields' must be a table")
        base["required_fields"] = {
            str(table_key): _string_list(tokens, f"required_fields.{table_key}", where)
            for table_key, tokens in required.items()
        }

    return base


def validate_raw_config(data: Any) -> Dict[str, Any]:
    """
    Validate parsed TOML data and return it with only the known keys.

    Raises:
        ConfigError: A key has the wrong type or shape
    """
    if not isinstance(data, dict):
        raise ConfigError("Config must be a table")

    validated: Dict[str, Any] = {}
    for key in ("api_key", "api_key_env", "output"):
        value = _optional_string(data, key)
        if value is not None:
            validated[key] = value

    bases = data.get("bases")
    if bases is not None:
        if not isinstance(bases, list) or not bases:
            raise ConfigError("'bases' must be a non-empty array of tables")
        validated["bases"] = [_validate_base(b, i) for i, b in enumerate(bases)]

    return validated


def resolve_api_key(
    data: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None
) -> str:
    """
    Resolve the API key: ``api_key``, then ``api_key_env``, then the default
    environment variable.

    Raises:
        ConfigError: No key could be found
    """
    env = os.environ if environ is None else environ
    api_key = data.get("api_key")
    if not api_key and data.get("api_key_env"):
        api_key = env.get(data["api_key_env"])
    if not api_key:
        api_key = env.get(DEFAULT_API_KEY_ENV)
    if not api_key:
        raise ConfigError(
            f"Missing api key. Set api_key, api_key_env, or {DEFAULT_API_KEY_ENV} "
            "in the environment."
        )
    return api_key


def to_base_config(base: Mapping[str, Any]) -> BaseConfig:
    """Convert a validated base entry; empty lists count as not configured."""
    return BaseConfig(
        base_name=base["name"],
        base_id=base["base_id"],
        table_ids=base.get("table_ids") or None,
        view_ids=base.get("view_ids") or None,
        required_fields=base.get("required_fields"),
    )


def load_config(
    config_path: Union[str, Path],
    out: Optional[Union[str, Path]] = None,
    cwd: Union[str, Path, None] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> ParsedConfig:
    """
    Load the full configuration for a run.

    Args:
        config_path: Path to the TOML file
        out: Output path override (``--out``)
        cwd: Directory relative output paths are resolved against
        environ: Environment used for API key lookup

    Returns:
        ParsedConfig with API key, absolute output path and bases

    Raises:
        ConfigError: The file is invalid, or bases or the API key are missing
    """
    data = read_config_file(config_path)
    api_key = resolve_api_key(data, environ)

    if not data.get("bases"):
        raise ConfigError("Missing bases configuration. Set bases in the TOML config.")

    base_dir = Path(cwd) if cwd else Path.cwd()
    output = Path(out) if out else Path(data.get("output", DEFAULT_OUTPUT))

    return ParsedConfig(
        api_key=api_key,
        output=(base_dir / output).resolve(),
        bases=[to_base_config(b) for b in data["bases"]],
    )


def redact_config(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of validated config data with secrets hidden."""
    redacted = dict(data)
    if redacted.get("api_key"):
        redacted["api_key"] = REDACTED
    return redacted
