"""Configuration validation for setupbuildx.

Warns on unknown keys and wrong value types. Does not raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from setupbuildx.core.logging import get_logger

LOGGER = get_logger(__name__)

STRING_KEYS: Set[str] = {
    "version",
    "driver",
    "buildkitd_flags",
    "endpoint",
    "config",
    "github_token",
    "docker_config_home",
}

BOOL_KEYS: Set[str] = {
    "install",
    "use",
}

LIST_KEYS: Set[str] = {
    "driver_opts",
}

# YAML 1.2 core schema spellings accepted for booleans given as strings
TRUE_STRINGS: Set[str] = {"true", "True", "TRUE"}
FALSE_STRINGS: Set[str] = {"false", "False", "FALSE"}

VALID_KEYS: Set[str] = STRING_KEYS | BOOL_KEYS | LIST_KEYS


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(
    data: Dict[str, Any],
    source: str,
) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source description for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        warning = ConfigValidationWarning(
            message=f"Config must be a mapping, got {type(data).__name__}",
            source=source,
        )
        _log_warning(warning)
        return [warning]

    for key, value in data.items():
        if key not in VALID_KEYS:
            warning = ConfigValidationWarning(
                message=f"Unknown key '{key}'",
                source=source,
                key=key,
                suggestion=_suggest_key(str(key), VALID_KEYS),
            )
        elif key in BOOL_KEYS and not _is_bool_value(value):
            warning = ConfigValidationWarning(
                message=f"'{key}' must be a boolean, got {type(value).__name__}",
                source=source,
                key=key,
            )
        elif key in LIST_KEYS and not isinstance(value, (list, str)):
            warning = ConfigValidationWarning(
                message=f"'{key}' must be a list or string, got {type(value).__name__}",
                source=source,
                key=key,
            )
        elif key in STRING_KEYS and value is not None and not isinstance(value, (str, int, float)):
            warning = ConfigValidationWarning(
                message=f"'{key}' must be a string, got {type(value).__name__}",
                source=source,
                key=key,
            )
        else:
            continue
        warnings.append(warning)
        _log_warning(warning)

    return warnings


def _is_bool_value(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.strip() in TRUE_STRINGS | FALSE_STRINGS


def _suggest_key(key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest the closest valid key for a typo."""
    matches = get_close_matches(key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    message = f"{warning.source}: {warning.message}"
    if warning.suggestion:
        message += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(message)
