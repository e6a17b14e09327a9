# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Client configuration loading and merging.

This module resolves the settings used to construct an FcrepoClient from
three layers, each overriding the one before it:

1. **Built-in defaults** (DEFAULTS below)
2. **YAML file** (the `client:` mapping of e.g. fcrepo.yaml)
3. **Environment variables** (FCREPO_USERNAME, FCREPO_PASSWORD, ...),
    optionally loaded from a .env file

Merge Behavior:
    - **Dicts**: Recursively merged (keys from overlay override base)
    - **Scalars**: Overwritten (strings, numbers, booleans)

Example YAML:

    client:
      username: fedoraAdmin
      password: secret
      auth_scope: localhost
      throw_exception_on_failure: true
      timeout: 30

Example:
    ```python
    from pathlib import Path
    from fcrepo import FcrepoClient
    from fcrepo.config import load_client_config

    config = load_client_config(Path("fcrepo.yaml"))
    client = FcrepoClient.from_config(config)
    ```

Error Handling:
    - ConfigError: missing or empty files, YAML parse errors, non-mapping
        documents, unknown keys and malformed environment values
    - All errors are chained with "from err" for better debugging
"""

from __future__ import annotations

from dataclasses import dataclass, fields
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
import yaml

from fcrepo.client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from fcrepo.exceptions import ConfigError

# -------------------------------
# Data types
# -------------------------------


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for FcrepoClient.

    Attributes:
        username: Basic-auth user, or None for anonymous access.
        password: Basic-auth password.
        auth_scope: Host credentials are limited to.
        throw_exception_on_failure: Raise on statuses >= 400.
        timeout: Per-request timeout in seconds.
        retries: Retry attempts for transient failures.
        backoff_factor: Backoff factor between retries.
        user_agent: User-Agent header value.
    """

    username: str | None = None
    password: str | None = None
    auth_scope: str | None = None
    throw_exception_on_failure: bool = False
    timeout: float = DEFAULT_TIMEOUT
    retries: int = 3
    backoff_factor: float = 0.5
    user_agent: str = DEFAULT_USER_AGENT


DEFAULTS: dict[str, Any] = {
    "client": {f.name: f.default for f in fields(ClientConfig)},
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


# -------------------------------
# YAML helpers
# -------------------------------


def _load_yaml_file(p: Path) -> Any:
    """Loads a YAML file and returns the parsed Python object.

    Raises:
        ConfigError: When file does not exist, invalid YAML (parse error), or empty files.
    """
    if not p.exists():
        raise ConfigError(f"file not found: {p}")
    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigError(f"Error parsing YAML: {p}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {p}")
    return data


# -------------------------------
# Merge logic
# -------------------------------


def _deep_merge_dicts(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Deep-merges two dicts with "overlay wins" semantics.

    This function does not mutate inputs; returns a new dict.
    """
    result: dict[str, Any] = dict(base)
    for k, v in overlay.items():
        if k in result and isinstance(result[k], dict) and isinstance(v, dict):
            result[k] = _deep_merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# -------------------------------
# Environment overrides
# -------------------------------


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def _coerce(name: str, default: Any, value: Any) -> Any:
    """Converts a setting to the type of its ClientConfig default.

    Strings (from the environment or quoted YAML) are parsed; YAML scalars of
    the right type pass through. Optional string settings accept None.

    Raises:
        ConfigError: If the value cannot be converted.
    """
    try:
        if isinstance(default, bool):
            if isinstance(value, bool):
                return value
            if isinstance(value, str):
                return _parse_bool(name, value)
        elif isinstance(default, int):
            if isinstance(value, (str, int)) and not isinstance(value, bool):
                return int(value)
        elif isinstance(default, float):
            if isinstance(value, (str, int, float)) and not isinstance(value, bool):
                return float(value)
        elif value is None and default is None:
            return None
        elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
            return str(value)
    except ValueError as err:
        raise ConfigError(f"invalid value for {name}: {value!r}") from err
    raise ConfigError(f"invalid value for {name}: {value!r}")


def _yaml_settings(section: dict[str, Any], path: Path) -> dict[str, Any]:
    """Validates the `client:` mapping and converts its values.

    Raises:
        ConfigError: On unknown keys or values of the wrong type.
    """
    defaults = DEFAULTS["client"]
    unknown = sorted(set(section) - set(defaults))
    if unknown:
        raise ConfigError(f"unknown client setting(s): {', '.join(unknown)}: {path}")
    return {
        key: _coerce(f"client.{key}", defaults[key], value)
        for key, value in section.items()
    }


def _env_overrides(env_prefix: str) -> dict[str, Any]:
    """Collects client settings from environment variables.

    Each ClientConfig field maps to <env_prefix><FIELD_NAME_UPPER>, e.g.
    FCREPO_THROW_EXCEPTION_ON_FAILURE. Values are converted to the field's
    type.

    Raises:
        ConfigError: If a value cannot be converted.
    """
    overrides: dict[str, Any] = {}
    for f in fields(ClientConfig):
        name = f"{env_prefix}{f.name.upper()}"
        raw = os.getenv(name)
        if raw is not None:
            overrides[f.name] = _coerce(name, f.default, raw)
    return overrides


# -------------------------------
# Public API
# -------------------------------


def load_client_config(
    path: Path | None = None,
    *,
    env_prefix: str = "FCREPO_",
    load_env_file: bool = True,
) -> ClientConfig:
    """Loads the effective client configuration.

    Performs the following operations:

    1. Start from built-in defaults
    2. Merge the `client:` mapping of the YAML file, if given
    3. Load a .env file into the environment (unless disabled)
    4. Merge environment variable overrides

    Args:
        path: Optional YAML configuration file.
        env_prefix: Prefix of the environment variables to read.
        load_env_file: If True, load variables from the nearest .env file at
            or above the working directory. Existing environment variables
            are not replaced.

    Returns:
        The resolved ClientConfig.

    Raises:
        ConfigError: On YAML parse errors, empty files, invalid structure,
            unknown keys, or malformed environment values.
    """
    from fcrepo.logging import get_global_logger

    logger = get_global_logger()
    merged = DEFAULTS

    if path is not None:
        path = Path(path).resolve()
        logger.verbose("CONFIG", f"Loading: {path}")
        document = _load_yaml_file(path)
        if not isinstance(document, dict):
            raise ConfigError(f"top-level YAML must be a mapping (dict): {path}")
        section = document.get("client", {})
        if not isinstance(section, dict):
            raise ConfigError(f"'client' must be a mapping (dict): {path}")
        merged = _deep_merge_dicts(merged, {"client": _yaml_settings(section, path)})

    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True))
    env = _env_overrides(env_prefix)
    if env:
        logger.verbose(
            "CONFIG", f"Environment overrides: {', '.join(sorted(env.keys()))}"
        )
        merged = _deep_merge_dicts(merged, {"client": env})

    client_section = merged["client"]
    shown = {k: v for k, v in client_section.items() if k != "password"}
    logger.debug("CONFIG", f"Effective client settings: {shown}")
    return ClientConfig(**client_section)
