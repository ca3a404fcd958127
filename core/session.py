"""
Sender Session State
Classifies a sender as new, active or inactive and serializes their requests
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import timedelta
from enum import Enum
from typing import Dict, Optional

from config import INACTIVITY_MINUTES

INACTIVITY_THRESHOLD = timedelta(minutes=INACTIVITY_MINUTES)


class SenderState(str, Enum):
    NEW = "new"
    ACTIVE = "active"
    INACTIVE = "inactive"


def classify_sender(session_exists: bool, last_active_age: Optional[timedelta],
                    threshold: timedelta = INACTIVITY_THRESHOLD) -> SenderState:
    """
    Decide which state a sender is in for the current message.

    Args:
        session_exists: Whether a session row was found
        last_active_age: Time since the previous message, None if never recorded
        threshold: Inactivity cut-off; an age equal to it counts as inactive

    Returns:
        SenderState
    """
    if not session_exists:
        return SenderState.NEW
    # No recorded activity keeps the sender active
    if last_active_age is None:
        return SenderState.ACTIVE
    if last_active_age < threshold:
        return SenderState.ACTIVE
    return SenderState.INACTIVE


class SenderLocks:
    """
    One asyncio.Lock per sender, created on demand and dropped once no
    request holds or waits on it.
    """

    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, sender: str):
        lock = self._locks.setdefault(sender, asyncio.Lock())
        self._waiters[sender] = self._waiters.get(sender, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[sender] -= 1
            if not self._waiters[sender]:
                del self._waiters[sender]
                del self._locks[sender]

    def __len__(self):
        return len(self._locks)
