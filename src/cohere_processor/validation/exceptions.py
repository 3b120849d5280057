"""
Configuration exceptions raised while configuring a processor.

Both are fatal: the host surfaces them and the processor never starts.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError


class ConfigError(Exception):
    """
    Base exception for all configuration errors.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize configuration error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        return self.message


class ConfigParseError(ConfigError):
    """
    Raised when the raw configuration cannot be mapped onto ProcessorConfig.
    
    Covers missing required keys, unknown keys and type mismatches
    (e.g. "not-a-number" for backoffRetry.count).
    """
    
    def __init__(self, message: str, errors: list[dict[str, str]] | None = None):
        """
        Initialize parse error.
        
        Args:
            message: Error description
            errors: One {"parameter", "error"} entry per offending key
        """
        details = {}
        if errors:
            details["errors"] = errors
        super().__init__(message, details)
    
    @classmethod
    def from_validation_error(cls, exc: PydanticValidationError) -> "ConfigParseError":
        """Build a parse error naming every offending parameter."""
        errors = []
        for error in exc.errors():
            parameter = ".".join(str(part) for part in error["loc"])
            errors.append({"parameter": parameter, "error": error["msg"]})
        
        message = "; ".join(
            f'error validating "{e["parameter"]}": {e["error"]}' for e in errors
        )
        return cls(f"config invalid: {message}", errors=errors)


class ConfigValidationError(ConfigError):
    """
    Raised when a parsed configuration violates a cross-field rule.
    
    Only the first violated rule is reported.
    """
    
    def __init__(self, message: str, rule_name: str | None = None, invalid_value: Any | None = None):
        """
        Initialize validation error.
        
        Args:
            message: Error description
            rule_name: Name of the violated rule (e.g., "embed_config_required")
            invalid_value: The value that caused the violation
        """
        details = {}
        if rule_name:
            details["rule_name"] = rule_name
        if invalid_value is not None:
            details["invalid_value"] = str(invalid_value)
        super().__init__(message, details)
