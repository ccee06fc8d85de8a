import importlib
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypedDict

import yaml

from waypoint.exceptions import WaypointConfigError

logger = logging.getLogger(__name__)

# Default config file name
DEFAULT_CONFIG_FILE = "waypoint.config.yaml"
DEFAULT_SEPARATOR = "::"


class RouterSection(TypedDict, total=False):
    domain: str
    separator: str
    namespace: str


class WaypointConfig(TypedDict, total=False):
    router: RouterSection
    controllers: dict[str, str]


@dataclass(frozen=True)
class RouterConfig:
    """Immutable router settings.

    Attributes:
        domain: Base URL prepended to generated route URLs, without a trailing slash
        separator: Separator between class and method in controller references
        namespace: Initial controller namespace
    """

    domain: str = ""
    separator: str = DEFAULT_SEPARATOR
    namespace: str = ""

    def __post_init__(self):
        if not self.separator:
            raise WaypointConfigError("Controller separator must not be empty")

        object.__setattr__(self, "domain", self.domain.rstrip("/"))
        object.__setattr__(self, "namespace", self.namespace.strip("."))

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "RouterConfig":
        unknown = set(config) - {"domain", "separator", "namespace"}
        if unknown:
            raise WaypointConfigError(
                f"Unknown router settings: {', '.join(sorted(unknown))}"
            )

        return cls(
            domain=str(config.get("domain") or ""),
            separator=str(config.get("separator") or DEFAULT_SEPARATOR),
            namespace=str(config.get("namespace") or ""),
        )


def import_from_string(import_str: str) -> Any:
    """Import a class, function, or variable from a module by string.

    Args:
        import_str: String in the format "module.path:symbol". The symbol may
            be a dotted attribute path.

    Returns:
        The imported object.

    Raises:
        WaypointConfigError: If the string is malformed or the import fails.

    Examples:
        ```python
        controller = import_from_string("myapp.controllers:UserController")
        router = import_from_string("myapp.routes:router")
        ```
    """
    if ":" not in import_str:
        raise WaypointConfigError(
            f"Invalid import string format '{import_str}'. Expected 'module.path:symbol'."
        )

    module_path, object_path = import_str.split(":", 1)

    try:
        module = importlib.import_module(module_path)

        # Handle nested attributes
        target = module
        for part in object_path.split("."):
            target = getattr(target, part)

        return target
    except (ImportError, AttributeError) as e:
        raise WaypointConfigError(f"Failed to import '{import_str}': {str(e)}") from e


def load_raw_config(config_path: str | Path) -> dict[str, Any]:
    """
    Load a configuration file.

    A missing file is not an error and yields an empty configuration.

    Raises:
        WaypointConfigError: If the file could not be parsed or is not a mapping.
    """
    try:
        config_path_obj = Path(config_path)
        if not config_path_obj.exists():
            logger.debug(f"No config file at {config_path_obj}, using defaults")
            return {}

        with open(config_path_obj) as f:
            config = yaml.safe_load(f)

        if config is None:  # Empty file
            config = {}

        if not isinstance(config, dict):
            raise WaypointConfigError(
                f"Invalid configuration format in {config_path}. Expected a dictionary."
            )

        return config
    except Exception as e:
        if isinstance(e, WaypointConfigError):
            raise
        raise WaypointConfigError(
            f"Error loading configuration from {config_path}: {str(e)}"
        ) from e


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """
    Substitute ${VAR_NAME} references with environment variable values.

    Raises:
        WaypointConfigError: If a referenced environment variable is not set
    """
    env_pattern = re.compile(r"\$\{([^}]+)\}")

    def replace_env_var(match):
        env_var = match.group(1)
        env_value = os.getenv(env_var)

        if env_value is None:
            raise WaypointConfigError(
                f"Required environment variable '{env_var}' is not set"
            )

        return env_value

    def substitute_value(value: Any) -> Any:
        if isinstance(value, str):
            return env_pattern.sub(replace_env_var, value)

        elif isinstance(value, dict):
            return {k: substitute_value(v) for k, v in value.items()}

        elif isinstance(value, list):
            return [substitute_value(item) for item in value]

        else:
            return value

    return substitute_value(config)


def load_config(config_path: str | Path = DEFAULT_CONFIG_FILE) -> WaypointConfig:
    """
    Load a configuration file and substitute environment variables.

    Raises:
        WaypointConfigError: If the configuration is invalid
    """
    config = _substitute_env_vars(load_raw_config(config_path))

    router_section = config.get("router", {})
    if not isinstance(router_section, dict):
        raise WaypointConfigError("The 'router' section must be a mapping")

    controllers = config.get("controllers", {})
    if not isinstance(controllers, dict):
        raise WaypointConfigError("The 'controllers' section must be a mapping")

    return config


def load_router_config(config_path: str | Path = DEFAULT_CONFIG_FILE) -> RouterConfig:
    """Load only the router settings from a configuration file."""
    return RouterConfig.from_dict(load_config(config_path).get("router", {}))
