"""Configuration loader for git-credential-1password."""
import os
import logging
from pathlib import Path
from typing import Dict, Optional
import yaml

from .errors import CredentialHelperError
from .models import HelperConfig

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "GIT_CREDENTIAL_1PASSWORD_CONFIG"
ALLOWED_KEYS = ("account", "vault", "prefix", "op_path")

# Environment overrides, checked after command-line flags
ENV_OVERRIDES = {
    "account": "OP_ACCOUNT",
    "vault": "OP_VAULT",
    "prefix": "GIT_CREDENTIAL_1PASSWORD_PREFIX",
    "op_path": "GIT_CREDENTIAL_1PASSWORD_OP_PATH",
}


class ConfigError(CredentialHelperError):
    """Configuration error exception."""
    pass


def default_config_path() -> Path:
    """Default config location under the XDG config directory."""
    return Path.home() / ".config" / "git-credential-1password" / "config.yml"


def _get_config_path(explicit_path: Optional[str] = None) -> Optional[Path]:
    """
    Get the config file path.

    Priority order:
    1. Path passed on the command line
    2. GIT_CREDENTIAL_1PASSWORD_CONFIG environment variable
    3. Default location: ~/.config/git-credential-1password/config.yml

    Returns:
        Path to an existing config file, or None if the default file is absent

    Raises:
        ConfigError: If an explicitly requested config file doesn't exist
    """
    requested = explicit_path or os.getenv(CONFIG_PATH_ENV)
    if requested:
        config_path = Path(requested).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Configuration file not found at: {config_path}")
        logger.debug(f"Using config file: {config_path}")
        return config_path

    config_path = default_config_path()
    if config_path.is_file():
        logger.debug(f"Using default config location: {config_path}")
        return config_path

    return None


def load_config(explicit_path: Optional[str] = None) -> Dict[str, str]:
    """
    Load and validate the YAML config file.

    A missing default config file yields an empty configuration.

    Args:
        explicit_path: Config file requested on the command line

    Returns:
        Dict with any of the keys: account, vault, prefix, op_path

    Raises:
        ConfigError: If the file is unreadable, not valid YAML, or has invalid keys or values
    """
    config_path = _get_config_path(explicit_path)
    if config_path is None:
        return {}

    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML config at {config_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read config file at {config_path}: {e}")

    # An empty file is a valid, empty configuration
    if config is None:
        return {}

    if not isinstance(config, dict):
        raise ConfigError(f"Config file at {config_path} must contain a mapping")

    unknown = sorted(set(config) - set(ALLOWED_KEYS))
    if unknown:
        raise ConfigError(
            f"Unknown key(s) in config at {config_path}: {', '.join(map(str, unknown))}\n"
            f"Allowed keys: {', '.join(ALLOWED_KEYS)}"
        )

    for key, value in config.items():
        if not isinstance(value, str):
            raise ConfigError(f"Config key '{key}' at {config_path} must be a string")

    logger.debug(f"Configuration loaded from {config_path}")
    return config


def resolve_config(
    account: Optional[str] = None,
    vault: Optional[str] = None,
    prefix: Optional[str] = None,
    op_path: Optional[str] = None,
    config_path: Optional[str] = None,
) -> HelperConfig:
    """
    Merge command-line flags, environment variables and the config file.

    Flags win over environment variables, which win over the config file.

    Returns:
        Resolved helper configuration

    Raises:
        ConfigError: If the config file is invalid
    """
    file_config = load_config(config_path)
    flags = {"account": account, "vault": vault, "prefix": prefix, "op_path": op_path}

    resolved = {}
    for key in ALLOWED_KEYS:
        if flags[key] is not None:
            resolved[key] = flags[key]
        elif os.getenv(ENV_OVERRIDES[key]):
            resolved[key] = os.getenv(ENV_OVERRIDES[key])
        elif key in file_config:
            resolved[key] = file_config[key]

    return HelperConfig(
        account=resolved.get("account") or None,
        vault=resolved.get("vault") or None,
        prefix=resolved.get("prefix", ""),
        op_path=resolved.get("op_path") or "op",
    )
