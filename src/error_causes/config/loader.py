"""Load error taxonomies and dispatcher settings from YAML."""

import os
import re
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from error_causes.errors import CONFIG_INVALID, CausedError, ErrorTaxonomy, create_error
from error_causes.logging import get_logger
from error_causes.types import DispatchConfig, DispatchMode, LogLevel, ValidationMode

CONFIG_PATH_ENV = "ERROR_CAUSES_PATH"
DEFAULT_CONFIG_FILE = "error-causes.yaml"

_ENUM_FIELDS = {
    "mode": DispatchMode,
    "validation": ValidationMode,
    "log_level": LogLevel,
}


def _config_error(detail: str, cause: BaseException | None = None) -> CausedError:
    return create_error(
        CONFIG_INVALID,
        message=f"{CONFIG_INVALID['message']}: {detail}",
        detail=detail,
        cause=cause,
    )


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        CausedError: ConfigInvalid if a required var is not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            raise _config_error(operand or f"Required environment variable {var_name} not set")
        raise _config_error(f"Required environment variable {var_name} not set")

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve env vars in data structure.

    Args:
        data: Data structure (dict, list, str, etc.)

    Returns:
        Data with env vars resolved
    """
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


class CausesLoader:
    """Load a taxonomy and dispatcher configuration from a YAML document.

    Expected layout::

        causes:
          NotFound:
            code: 404
            message: The requested resource was not found
        dispatch:
          mode: strict
          validation: eager
          log_unhandled: true
    """

    def __init__(self) -> None:
        self._logger = get_logger("config")

    def load(self, path: str | Path | None = None) -> tuple[ErrorTaxonomy, DispatchConfig]:
        """Load taxonomy and config from a file.

        Resolution order if path not specified:
        1. ERROR_CAUSES_PATH environment variable
        2. ./error-causes.yaml

        Args:
            path: Optional path to the YAML file

        Returns:
            Taxonomy and dispatcher configuration

        Raises:
            CausedError: ConfigInvalid if the file is missing or invalid
        """
        if path is None:
            path = os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_FILE
        config_path = Path(path)

        if not config_path.is_file():
            raise _config_error(f"Configuration file not found: {config_path}")

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise _config_error(f"Invalid YAML in config file: {e}", e) from e
        except (OSError, UnicodeDecodeError) as e:
            raise _config_error(f"Cannot read config file {config_path}: {e}", e) from e

        data = _resolve_env_vars_recursive(data)
        taxonomy, config = self.load_from_dict(data)
        self._logger.causes_loaded(config_path, taxonomy.names())
        return taxonomy, config

    def load_from_dict(self, data: Any) -> tuple[ErrorTaxonomy, DispatchConfig]:
        """Build taxonomy and config from parsed data.

        Args:
            data: Parsed document

        Returns:
            Taxonomy and dispatcher configuration

        Raises:
            CausedError: ConfigInvalid if the document has the wrong shape
        """
        if not isinstance(data, dict):
            raise _config_error("Top level must be a mapping")

        causes = data.get("causes") or {}
        if not isinstance(causes, dict):
            raise _config_error("'causes' must be a mapping of cause name to template")
        for name, template in causes.items():
            if not isinstance(name, str) or not name:
                raise _config_error(f"Cause names must be non-empty strings, got {name!r}")
            if template is not None and not isinstance(template, dict):
                raise _config_error(f"Cause '{name}' must be a mapping")

        taxonomy = ErrorTaxonomy({name: template or {} for name, template in causes.items()})
        return taxonomy, self._parse_dispatch(data.get("dispatch") or {})

    def _parse_dispatch(self, data: Any) -> DispatchConfig:
        """Parse the ``dispatch`` section.

        Args:
            data: Section contents

        Returns:
            DispatchConfig with defaults for omitted fields
        """
        if not isinstance(data, dict):
            raise _config_error("'dispatch' must be a mapping")

        known = {f.name for f in fields(DispatchConfig)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise _config_error(f"Unknown dispatch settings: {', '.join(unknown)}")

        values: dict[str, Any] = {}
        for key, value in data.items():
            enum_type = _ENUM_FIELDS.get(key)
            if enum_type is None:
                if not isinstance(value, bool):
                    raise _config_error(f"'dispatch.{key}' must be a boolean")
                values[key] = value
                continue
            raw = str(value).strip()
            try:
                values[key] = enum_type(raw.upper() if enum_type is LogLevel else raw.lower())
            except ValueError as e:
                allowed = ", ".join(member.value for member in enum_type)
                raise _config_error(f"'dispatch.{key}' must be one of: {allowed}", e) from e
        return DispatchConfig(**values)


def load_causes(path: str | Path | None = None) -> tuple[ErrorTaxonomy, DispatchConfig]:
    """Convenience function to load a taxonomy file.

    Args:
        path: Optional path to the YAML file

    Returns:
        Taxonomy and dispatcher configuration
    """
    return CausesLoader().load(path)
