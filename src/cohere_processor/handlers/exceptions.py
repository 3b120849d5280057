"""
Handler exceptions.
"""


class PayloadError(Exception):
    """
    Raised when a record's payload cannot be turned into a vendor request.
    
    Example: a rerank record whose .Payload.After is not a JSON object with
    "query" and "documents".
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
