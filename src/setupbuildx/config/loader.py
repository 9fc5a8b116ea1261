"""Configuration file loading and merging.

Handles loading configuration with:
- Global config (~/.setupbuildx/config/config.yml)
- Project config (.setup-buildx.yml) or an explicit --config file
- GitHub Actions inputs (INPUT_* environment variables)
- CLI overrides
- Environment variable expansion (${VAR}) in YAML values
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from setupbuildx.bootstrap.paths import SetupBuildxPaths
from setupbuildx.config.models import SetupBuildxConfig
from setupbuildx.config.validation import (
    BOOL_KEYS,
    FALSE_STRINGS,
    LIST_KEYS,
    TRUE_STRINGS,
    validate_config,
)
from setupbuildx.core.errors import SetupBuildxError
from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

PROJECT_CONFIG_NAMES = [".setup-buildx.yml", ".setup-buildx.yaml"]
GLOBAL_CONFIG_NAME = "config.yml"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

# Action input name -> config key
ACTION_INPUTS: Dict[str, str] = {
    "version": "version",
    "driver": "driver",
    "driver-opts": "driver_opts",
    "buildkitd-flags": "buildkitd_flags",
    "install": "install",
    "use": "use",
    "endpoint": "endpoint",
    "config": "config",
    "github-token": "github_token",
}

# driver-opts values may themselves contain commas
NO_COMMA_SPLIT_KEYS = {"driver_opts"}


class ConfigError(SetupBuildxError):
    """Configuration loading or parsing error."""

    pass


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SetupBuildxConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. GitHub Actions inputs (INPUT_* variables)
    3. Custom config file (cli_config_path) OR project config (.setup-buildx.yml)
    4. Global config (~/.setupbuildx/config/config.yml)
    5. Built-in defaults

    Raises:
        ConfigError: If a config file is missing, unparsable or an input is invalid.
    """
    env = os.environ if environ is None else environ
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    global_path = find_global_config()
    if global_path is not None:
        try:
            global_dict = load_yaml_file(global_path, env)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (yaml.YAMLError, ConfigError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = _merge_file(merged, cli_config_path, sources, "custom", env)
    else:
        project_path = find_project_config(project_root)
        if project_path is not None:
            merged = _merge_file(merged, project_path, sources, "project", env)

    inputs = read_action_inputs(env)
    if inputs:
        merged = merge_configs(merged, inputs)
        sources.append("inputs")
        LOGGER.debug(f"Applied action inputs: {sorted(inputs)}")

    if cli_overrides:
        overrides = {k: v for k, v in cli_overrides.items() if v is not None}
        merged = merge_configs(merged, overrides)
        sources.append("cli")

    config = dict_to_config(merged)
    config._config_sources = sources
    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _merge_file(
    merged: Dict[str, Any],
    path: Path,
    sources: List[str],
    kind: str,
    environ: Mapping[str, str],
) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path, environ)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    validate_config(data, source=str(path))
    sources.append(f"{kind}:{path}")
    LOGGER.debug(f"Loaded {kind} config from {path}")
    return merge_configs(merged, data)


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find a config file in the project root."""
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.exists():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Find the global config at ~/.setupbuildx/config/config.yml."""
    config_path = SetupBuildxPaths.default().config_dir / GLOBAL_CONFIG_NAME
    if config_path.exists():
        return config_path
    return None


def load_yaml_file(path: Path, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load a YAML config file and expand environment variables.

    Args:
        path: YAML file to read.
        environ: Variables used for ${VAR} expansion, os.environ by default.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data, environ)


def expand_env_vars(data: Any, environ: Optional[Mapping[str, str]] = None) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in config values."""
    env = os.environ if environ is None else environ
    if isinstance(data, dict):
        return {k: expand_env_vars(v, env) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item, env) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(lambda match: _env_var_replacer(match, env), data)
    else:
        return data


def _env_var_replacer(match: re.Match[str], environ: Mapping[str, str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def input_env_name(name: str) -> str:
    """Environment variable carrying an action input."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def read_action_inputs(environ: Mapping[str, str]) -> Dict[str, Any]:
    """Read non-empty GitHub Actions inputs from the environment.

    Raises:
        ConfigError: If a boolean input has an invalid value.
    """
    inputs: Dict[str, Any] = {}
    for input_name, key in ACTION_INPUTS.items():
        raw = environ.get(input_env_name(input_name), "").strip()
        if not raw:
            continue
        if key in BOOL_KEYS:
            inputs[key] = parse_bool_input(input_name, raw)
        elif key in LIST_KEYS:
            inputs[key] = parse_list_input(raw, ignore_comma=key in NO_COMMA_SPLIT_KEYS)
        else:
            inputs[key] = raw
    return inputs


def parse_bool_input(name: str, value: str) -> bool:
    """Parse a boolean input using the YAML 1.2 core schema spellings."""
    if value in TRUE_STRINGS:
        return True
    if value in FALSE_STRINGS:
        return False
    raise ConfigError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def parse_list_input(value: str, ignore_comma: bool = False) -> List[str]:
    """Split a multi-line input into items.

    Lines are split on commas too unless ignore_comma is set. Empty items
    are dropped and the rest stripped.
    """
    items: List[str] = []
    for line in re.split(r"\r?\n", value):
        if not line:
            continue
        parts = [line] if ignore_comma else [p for p in line.split(",") if p]
        items.extend(p.strip() for p in parts)
    return [item for item in items if item]


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two config dicts, overlay taking precedence.

    Scalars and lists are replaced; nested dicts are merged recursively.
    """
    result = base.copy()
    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value
    return result


def dict_to_config(data: Dict[str, Any]) -> SetupBuildxConfig:
    """Convert a merged dict to a typed SetupBuildxConfig.

    Raises:
        ConfigError: If a boolean key holds something other than a boolean.
    """
    defaults = SetupBuildxConfig()

    driver_opts = data.get("driver_opts", defaults.driver_opts)
    if isinstance(driver_opts, str):
        driver_opts = parse_list_input(driver_opts, ignore_comma=True)

    def _str(key: str, default: str) -> str:
        value = data.get(key)
        return default if value is None else str(value)

    def _bool(key: str, default: bool) -> bool:
        value = data.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return parse_bool_input(key, value.strip())
        raise ConfigError(f"'{key}' must be a boolean, got {type(value).__name__}")

    return SetupBuildxConfig(
        version=_str("version", defaults.version),
        driver=_str("driver", defaults.driver) or defaults.driver,
        driver_opts=[str(opt) for opt in driver_opts],
        buildkitd_flags=_str("buildkitd_flags", defaults.buildkitd_flags) or defaults.buildkitd_flags,
        install=_bool("install", defaults.install),
        use=_bool("use", defaults.use),
        endpoint=_str("endpoint", defaults.endpoint),
        config=_str("config", defaults.config),
        github_token=_str("github_token", defaults.github_token),
        docker_config_home=_str("docker_config_home", defaults.docker_config_home),
    )
