"""
Record-level exceptions for field references.
"""


class RecordError(Exception):
    """
    Base exception for record addressing errors.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ReferenceParseError(RecordError):
    """
    Raised when a field-path expression (e.g. response.body) is malformed.
    
    Detected at configuration time, so the processor never starts.
    """
    pass


class FieldResolutionError(RecordError):
    """
    Raised when a reference cannot be read or assigned on a given record.
    
    Examples:
    - Setting a nested field on raw (unstructured) payload data
    - Setting a non-string value into .Metadata
    - Setting an unknown operation into .Operation
    
    Fails the affected record only.
    """
    pass
