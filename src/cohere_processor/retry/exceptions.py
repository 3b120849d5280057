"""
Retry exceptions for the embed handler.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cohere_processor.llm.exceptions import VendorError


class ProcessingCancelled(Exception):
    """
    Raised when cancellation is signalled while waiting to retry.
    
    Ends the current record with an error result; the remaining records of
    the batch are not processed.
    
    Attributes:
        last_error: Vendor error that triggered the interrupted retry
    """

    def __init__(self, last_error: "VendorError | None" = None) -> None:
        self.last_error = last_error
        super().__init__("processing cancelled while waiting to retry")
