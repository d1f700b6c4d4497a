# src/natgateway/config/defaults.py
import copy
import json
import logging
import os
import re
from enum import Enum
from typing import Any, Dict, Optional

from natgateway.domain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LogLevel(str, Enum):
    """Log level enumeration."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogDestination(str, Enum):
    """Log destination enumeration."""
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"


DEFAULT_CONFIG = {
    # AWS client configuration
    "AWS_REGION": "${AWS_REGION:us-east-1}",
    "AWS_ENDPOINT_URL": "${AWS_ENDPOINT_URL:}",
    "AWS_CONNECTION_TIMEOUT_MS": 10000,
    "AWS_REQUEST_RETRY_ATTEMPTS": 3,

    # Lifecycle handler configuration
    "HANDLER_CONFIG": {
        "callback_delay_seconds": 15,
        "stabilization_timeout_seconds": 1800,
        "list_page_size": 0,
        "reserved_tag_prefix": "aws:"
    },

    # Logging configuration
    "LOGGING_CONFIG": {
        "level": "${NATGW_LOG_LEVEL:INFO}",
        "destination": "${NATGW_LOG_DESTINATION:stdout}",
        "file": {
            "path": "${NATGW_LOGDIR:logs}/natgateway.log",
            "max_size_mb": 10,
            "backup_count": 5
        }
    },

    # Validation ranges and rules
    "VALIDATION_RULES": {
        "AWS_REQUEST_RETRY_ATTEMPTS": {
            "min": 0,
            "max": 10,
            "type": "int"
        },
        "AWS_CONNECTION_TIMEOUT_MS": {
            "min": 100,
            "type": "int"
        },
        "required_fields": [
            "AWS_REGION"
        ]
    }
}

# Environment variables that override top-level keys directly
ENV_OVERRIDES = [
    "AWS_REGION",
    "AWS_ENDPOINT_URL",
    "AWS_CONNECTION_TIMEOUT_MS",
    "AWS_REQUEST_RETRY_ATTEMPTS",
]

# Environment variables that override HANDLER_CONFIG entries
HANDLER_ENV_OVERRIDES = {
    "NATGW_CALLBACK_DELAY_SECONDS": "callback_delay_seconds",
    "NATGW_STABILIZATION_TIMEOUT_SECONDS": "stabilization_timeout_seconds",
    "NATGW_LIST_PAGE_SIZE": "list_page_size",
    "NATGW_RESERVED_TAG_PREFIX": "reserved_tag_prefix",
}

_PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")


def interpolate_values(config: Any) -> Any:
    """
    Expand ``${VAR}`` and ``${VAR:default}`` placeholders recursively.

    Unset variables without a default are left as written.
    """
    if isinstance(config, str):
        def _replace(match):
            name, default = match.group(1), match.group(2)
            if name in os.environ:
                return os.environ[name]
            return default if default is not None else match.group(0)
        return _PLACEHOLDER.sub(_replace, config)
    elif isinstance(config, dict):
        return {k: interpolate_values(v) for k, v in config.items()}
    elif isinstance(config, list):
        return [interpolate_values(v) for v in config]
    return config


def deep_update(target: Dict[str, Any], source: Dict[str, Any]) -> None:
    """Merge ``source`` into ``target`` in place, descending into dicts."""
    for key, value in source.items():
        if key in target and isinstance(target[key], dict) and isinstance(value, dict):
            deep_update(target[key], value)
        else:
            target[key] = value


class ConfigurationManager:
    """
    Manages application configuration with defaults and overrides.

    This class handles:
    - Loading default configuration
    - Applying user configuration from a JSON file
    - Applying environment variable overrides
    - Variable interpolation
    - Configuration validation
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration manager with defaults.

        Args:
            config_file: Optional path to configuration file. If not provided,
                        NATGW_CONFIG_FILE is used when set.
        """
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        config_file = config_file or os.environ.get('NATGW_CONFIG_FILE')
        if config_file:
            self._load_config_file(config_file)

        # Environment variables have the highest priority
        self._load_env_vars()

        self.validate_config()

    def _load_config_file(self, config_path: str) -> None:
        """Load configuration from file."""
        try:
            with open(config_path, 'r') as f:
                user_config = json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {str(e)}")
        if not isinstance(user_config, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a JSON object")
        deep_update(self._config, user_config)
        logger.debug("Loaded configuration file %s", config_path)

    def _load_env_vars(self) -> None:
        """Load and apply environment variable overrides."""
        for env_var in ENV_OVERRIDES:
            if env_var in os.environ:
                self._config[env_var] = os.environ[env_var]
        for env_var, key in HANDLER_ENV_OVERRIDES.items():
            if env_var in os.environ:
                self._config["HANDLER_CONFIG"][key] = os.environ[env_var]

    def update_config(self, user_config: Dict[str, Any]) -> None:
        """
        Update configuration with user-provided values.

        Args:
            user_config: Configuration dictionary overriding current values
        """
        deep_update(self._config, user_config)
        self.validate_config()

    def get_config(self) -> Dict[str, Any]:
        """
        Get the complete configuration with all interpolations applied.

        Returns:
            Dict containing the complete configuration
        """
        return interpolate_values(self._config)

    def get_app_config(self):
        """Get the validated, typed configuration."""
        from natgateway.config.schemas import AppConfig
        return AppConfig.from_dict(self.get_config())

    def validate_config(self) -> None:
        """
        Validate the configuration.

        Validates:
        - Required fields are present
        - Numeric values are within allowed ranges
        - Logging level and destination are known

        Raises:
            ConfigurationError: If configuration is invalid with detailed error messages
        """
        config = self.get_config()
        errors = []
        missing = []

        for field in config["VALIDATION_RULES"]["required_fields"]:
            if not config.get(field):
                missing.append(field)
                errors.append(f"{field} is required")

        log_config = config["LOGGING_CONFIG"]
        log_level = str(log_config["level"]).upper()
        if log_level not in LogLevel.__members__:
            errors.append(f"Invalid log level: {log_level}")

        log_dest = str(log_config["destination"]).lower()
        try:
            LogDestination(log_dest)
        except ValueError:
            errors.append(
                f"Invalid log destination: {log_dest}. "
                f"Must be one of: {', '.join(d.value for d in LogDestination)}"
            )

        for field, rules in config["VALIDATION_RULES"].items():
            if isinstance(rules, dict) and rules.get("type") == "int":
                value = config.get(field)
                if value is None:
                    continue
                try:
                    value = int(value)
                except (TypeError, ValueError):
                    errors.append(f"{field} must be an integer")
                    continue
                if "min" in rules and value < rules["min"]:
                    errors.append(f"{field} must be at least {rules['min']}")
                if "max" in rules and value > rules["max"]:
                    errors.append(f"{field} must be at most {rules['max']}")

        if errors:
            raise ConfigurationError("\n".join(errors), missing_fields=missing)
