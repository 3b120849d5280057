"""
Configuration validation.

Components:
- validate_config: Cross-field rules applied after parsing
- exceptions: ConfigParseError / ConfigValidationError
"""

from cohere_processor.validation.config_rules import validate_config
from cohere_processor.validation.exceptions import (
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
)

__all__ = [
    "validate_config",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
]
