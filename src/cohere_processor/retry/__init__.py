"""
Retry support for vendor calls.

Main Components:
    - Backoff: Deterministic capped exponential backoff with an attempt counter
    - wait_for_cancellation: Sleep that returns early when the host cancels
    - ProcessingCancelled: Terminal outcome of a retry wait interrupted by the host

Usage:
    >>> from cohere_processor.retry import Backoff
    >>> backoff = Backoff(factor=2, min_delay=timedelta(milliseconds=100), max_delay=timedelta(seconds=5))
    >>> backoff.next_delay()
    datetime.timedelta(microseconds=100000)
"""

from cohere_processor.retry.backoff import Backoff
from cohere_processor.retry.cancellation import wait_for_cancellation
from cohere_processor.retry.exceptions import ProcessingCancelled

__all__ = [
    "Backoff",
    "wait_for_cancellation",
    "ProcessingCancelled",
]
