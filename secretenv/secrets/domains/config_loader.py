"""Bindings file loader for secretenv."""
import os
import re
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .models import VARIABLE_PATTERN, SecretBinding, SecretKind

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SECRETENV_CONFIG"


def default_config_path() -> Path:
    """Default bindings file location (XDG style)."""
    return Path.home() / ".config" / "secretenv" / "bindings.yml"


class ConfigError(Exception):
    """Bindings file error exception."""
    pass


def get_config_path(explicit: Optional[str] = None) -> str:
    """
    Resolve the bindings file path.

    Priority order:
    1. Explicit path (e.g. ``--config``)
    2. SECRETENV_CONFIG environment variable
    3. Default location: ~/.config/secretenv/bindings.yml

    Returns:
        Absolute path to the bindings file

    Raises:
        FileNotFoundError: If no bindings file exists at the resolved location
    """
    if explicit:
        config_path = Path(explicit).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Bindings file not found: {config_path}")
        return str(config_path.resolve())

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        config_path = Path(env_path).expanduser()
        if config_path.exists():
            logger.info(f"Using bindings from {CONFIG_ENV_VAR}: {config_path}")
            return str(config_path.resolve())
        logger.warning(f"{CONFIG_ENV_VAR} points to a missing file: {config_path}")

    default_config = default_config_path()
    if default_config.exists():
        logger.info(f"Using default bindings location: {default_config}")
        return str(default_config)

    raise FileNotFoundError(
        "Bindings file not found. Provide one using one of these methods:\n\n"
        "1. Use the default location:\n"
        f"   mkdir -p {default_config.parent}\n"
        f"   cp /path/to/bindings.yml {default_config}\n\n"
        "2. Point to an existing file:\n"
        f"   export {CONFIG_ENV_VAR}=/path/to/bindings.yml\n\n"
        "3. Pass it explicitly:\n"
        "   secretenv apply --config /path/to/bindings.yml\n"
    )


def _parse_mapping(index: int, raw: Any) -> Dict[str, str]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"secrets[{index}].mapping must be a mapping of field: VARIABLE")
    for field, variable in raw.items():
        if not isinstance(field, str) or not isinstance(variable, str) or not variable:
            raise ConfigError(
                f"secrets[{index}].mapping entry {field!r}: {variable!r} "
                f"must map a field name to a variable name"
            )
        if not re.fullmatch(VARIABLE_PATTERN, variable):
            raise ConfigError(
                f"secrets[{index}].mapping entry {field!r}: invalid variable name {variable!r}\n"
                f"Variable names must start with a letter or underscore and contain "
                f"only letters, numbers and underscores."
            )
    return dict(raw)


def _parse_binding(index: int, entry: Any) -> SecretBinding:
    if not isinstance(entry, dict):
        raise ConfigError(f"secrets[{index}] must be a mapping")

    name = entry.get("name")
    if not name or not isinstance(name, str):
        raise ConfigError(f"Missing 'name' in secrets[{index}]")

    if "kind" not in entry:
        raise ConfigError(f"Missing 'kind' for secret '{name}'")
    try:
        kind = SecretKind(entry["kind"])
    except ValueError:
        raise ConfigError(
            f"Unsupported secret kind for '{name}': {entry['kind']}\n"
            f"Supported kinds: {', '.join(k.value for k in SecretKind)}"
        )

    mapping = _parse_mapping(index, entry.get("mapping"))
    if kind is SecretKind.KEY_VALUE and not mapping:
        raise ConfigError(f"Secret '{name}' of kind key_value needs an explicit 'mapping'")

    source = entry.get("source")
    if source is not None and not isinstance(source, str):
        raise ConfigError(f"'source' for secret '{name}' must be a variable name")

    return SecretBinding(
        name=name,
        kind=kind,
        mapping=mapping,
        optional=bool(entry.get("optional", False)),
        source=source,
    )


def load_bindings(path: Optional[str] = None) -> List[SecretBinding]:
    """
    Load and validate secret bindings from a YAML file.

    Expected format:
        secrets:
          - name: SCW_DB_SECRET
            kind: database_credentials
            mapping:
              host: MY_DB_HOST
            optional: false

    Raises:
        FileNotFoundError: If the bindings file cannot be located
        ConfigError: If the file is unreadable, empty or malformed
    """
    config_path = get_config_path(path)

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML bindings at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read bindings file at {config_path}: {e}")

    if not config:
        raise ConfigError(f"Bindings file at {config_path} is empty")

    if not isinstance(config, dict) or 'secrets' not in config:
        raise ConfigError(
            f"Missing 'secrets' section in bindings at {config_path}\n"
            f"Required format:\n"
            f"secrets:\n"
            f"  - name: MY_SECRET\n"
            f"    kind: basic_credentials"
        )

    entries = config['secrets']
    if not isinstance(entries, list):
        raise ConfigError("'secrets' must be a list of bindings")

    bindings = [_parse_binding(i, entry) for i, entry in enumerate(entries)]

    logger.info(f"Loaded {len(bindings)} secret binding(s) from {config_path}")
    return bindings
