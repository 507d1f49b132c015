import json
import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .exceptions import ConfigurationError
from .utils import REDACTED, merge_dicts, validate_int, validate_string

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://basecamp.com"
DEFAULT_IDENTIFIER = "API::Basecamp (Python)"
ENV_PREFIX = "BASECAMP_"
# never type-converted, "0042" stays "0042"
STRING_KEYS = frozenset({
    "client.account",
    "client.username",
    "client.password",
    "client.identifier",
    "client.base_url"
})

@dataclass(frozen=True)
class ClientConfig:
    """Fixed identity and operational knobs of a client instance"""
    account: str
    username: str
    password: str
    identifier: str = DEFAULT_IDENTIFIER
    version: int = 1
    debug: bool = False
    fatal: bool = False
    retries: int = 0
    timeout: float = 10
    base_url: str = DEFAULT_BASE_URL
    retry_delay: float = 0.0

    def __post_init__(self) -> None:
        # frozen: normalised values go through object.__setattr__
        object.__setattr__(self, "account", validate_string(self.account, "account"))
        object.__setattr__(self, "username", validate_string(self.username, "username", strip=False))
        object.__setattr__(self, "password", validate_string(self.password, "password", strip=False))
        object.__setattr__(self, "base_url", validate_string(self.base_url, "base_url"))
        object.__setattr__(self, "identifier", str(self.identifier or DEFAULT_IDENTIFIER))
        object.__setattr__(self, "debug", bool(self.debug))
        object.__setattr__(self, "fatal", bool(self.fatal))

        validate_int(self.version, "version", minimum=1)
        validate_int(self.retries, "retries", minimum=0)
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ConfigurationError("timeout must be a positive number of seconds")
        if isinstance(self.retry_delay, bool) or not isinstance(self.retry_delay, (int, float)) or self.retry_delay < 0:
            raise ConfigurationError("retry_delay must be a non-negative number of seconds")

    @property
    def userinfo(self) -> str:
        return f"{self.username}:{self.password}"

    @property
    def base_segments(self) -> Tuple[str, ...]:
        """Segments of the canonical account/version base path"""
        return (self.account, "api", f"v{self.version}")

    @property
    def base_path(self) -> str:
        return "/" + "/".join(self.base_segments)

    def redacted(self) -> Dict[str, Any]:
        """Dictionary view of the config with the password masked"""
        data = asdict(self)
        data["password"] = REDACTED
        return data

    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self.redacted().items())
        return f"ClientConfig({fields})"

class Config:
    """
    Layered settings store for the client and its logging.

    Values come from built-in defaults, then ``BASECAMP_*`` environment
    variables, then an optional JSON or YAML file. Keys are addressed with
    dot notation, e.g. ``client.retries``.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self._config: Dict[str, Any] = {}
        self._load_defaults()
        self._load_environment_variables()
        if config_path:
            self.load(config_path)
        self.validate(self._config)

    def _load_defaults(self) -> None:
        """Load default configuration values"""
        self._config = {
            "client": {
                "base_url": DEFAULT_BASE_URL,
                "identifier": DEFAULT_IDENTIFIER,
                "version": 1,
                "debug": False,
                "fatal": False,
                "retries": 0,
                "timeout": 10,
                "retry_delay": 0.0
            },
            "logging": {
                "level": "INFO",
                "file": None,
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "max_size": 1024 * 1024,
                "backup_count": 3,
                "console_output": False
            }
        }

    def _load_environment_variables(self) -> None:
        """Load configuration from environment variables"""
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                # BASECAMP_CLIENT_RETRY_DELAY -> client.retry_delay
                parts = key[len(ENV_PREFIX):].lower().split('_')
                if len(parts) < 2:
                    continue
                config_key = f"{parts[0]}.{'_'.join(parts[1:])}"
                if parts[0] == "client" and config_key[len("client."):] not in ClientConfig.__dataclass_fields__:
                    logger.warning(f"Ignoring unknown client setting from environment: {key}")
                    continue
                if config_key in STRING_KEYS:
                    self.set(config_key, value)
                else:
                    self.set(config_key, self._convert_value(value))

    def load(self, path: Path) -> None:
        """Load configuration from a JSON or YAML file"""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                if path.suffix in ('.yaml', '.yml'):
                    file_config = yaml.safe_load(f) or {}
                else:
                    file_config = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load config from {path}: {str(e)}")
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        self.update(file_config)

    def save(self, path: Path) -> None:
        """Save configuration to a JSON or YAML file"""
        path = Path(path)
        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix in ('.yaml', '.yml'):
                yaml.safe_dump(self._config, f)
            else:
                json.dump(self._config, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot notation key"""
        try:
            value = self._config
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dot notation key"""
        keys = key.split('.')
        d = self._config
        for k in keys[:-1]:
            if not isinstance(d.get(k), dict):
                d[k] = {}
            d = d[k]
        d[keys[-1]] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update configuration with dictionary"""
        self._config = merge_dicts(self._config, config_dict)

    def validate(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        client = config.get("client") or {}
        if "version" in client:
            validate_int(client["version"], "client.version", minimum=1)
        if "retries" in client:
            validate_int(client["retries"], "client.retries", minimum=0)
        if "timeout" in client:
            timeout = client["timeout"]
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError("client.timeout must be positive")
        if "retry_delay" in client:
            delay = client["retry_delay"]
            if isinstance(delay, bool) or not isinstance(delay, (int, float)) or delay < 0:
                raise ConfigurationError("client.retry_delay must not be negative")

    def client_config(self, **overrides: Any) -> ClientConfig:
        """Build a ClientConfig from the client section plus overrides"""
        values = dict(self.get("client", {}))
        values.update({k: v for k, v in overrides.items() if v is not None})
        missing = [name for name in ("account", "username", "password") if name not in values]
        if missing:
            raise ConfigurationError(
                f"Missing required client settings: {', '.join(missing)}",
                details={"missing": missing}
            )
        known = ClientConfig.__dataclass_fields__
        unknown = sorted(set(values) - set(known))
        if unknown:
            raise ConfigurationError(f"Unknown client settings: {', '.join(unknown)}")
        # env/file values may have been converted to int
        for name in ("account", "username", "password"):
            if values[name] is not None and not isinstance(values[name], str):
                values[name] = str(values[name])
        return ClientConfig(**values)

    @staticmethod
    def _convert_value(value: str) -> Any:
        """Convert string value to appropriate type"""
        if value.lower() == "true":
            return True
        if value.lower() == "false":
            return False

        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            return value
