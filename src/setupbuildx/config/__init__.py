"""Configuration module for setupbuildx.

Provides configuration loading from YAML files, GitHub Actions inputs and
CLI overrides, plus validation of known keys.
"""

from setupbuildx.config.models import SetupBuildxConfig
from setupbuildx.config.loader import ConfigError, load_config, find_project_config, find_global_config
from setupbuildx.config.validation import validate_config, ConfigValidationWarning

__all__ = [
    "SetupBuildxConfig",
    "ConfigError",
    "load_config",
    "find_project_config",
    "find_global_config",
    "validate_config",
    "ConfigValidationWarning",
]
