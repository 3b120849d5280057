"""
Cancellable wait used between retries.

The host signals cancellation by setting an asyncio.Event; a pending wait
returns as soon as the event is set instead of sleeping the full delay.
"""

import asyncio
from datetime import timedelta
from typing import Optional


async def wait_for_cancellation(delay: timedelta, cancel: Optional[asyncio.Event] = None) -> bool:
    """
    Wait for delay, or until cancel is set, whichever comes first.

    Args:
        delay: How long to wait
        cancel: Cancellation signal (None = plain sleep)

    Returns:
        True if the wait ended because of cancellation, False if the delay elapsed
    """
    seconds = max(delay.total_seconds(), 0.0)

    if cancel is None:
        await asyncio.sleep(seconds)
        return False

    if cancel.is_set():
        return True

    try:
        await asyncio.wait_for(cancel.wait(), timeout=seconds)
    except asyncio.TimeoutError:
        return False
    return True
