"""
Solution Selector

Picks the hidden word for a new game, either uniformly at random or
deterministically for the current UTC day. Daily selection must agree with
the browser client bit for bit, so the xorshift32 generator below follows
JavaScript's 32-bit integer semantics exactly (including the signed right
shift).
"""

import logging
import math
import random
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence

from ..config.game_settings import DAILY_EPOCH, MS_PER_DAY
from ..models.errors import EmptyDictionary
from ..models.game import SelectionMode

logger = logging.getLogger(__name__)

_UINT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    """Reinterpret an unsigned 32-bit value as signed."""
    return value - 0x100000000 if value & 0x80000000 else value


def xorshift32(seed: int) -> Callable[[], float]:
    """
    Returns a seeded xorshift32 generator producing floats in [0, 1].

    A zero or negative seed is coerced to 1, since the generator never
    leaves state 0.
    """
    state = seed & _UINT32_MASK if seed > 0 else 1

    def next_value() -> float:
        nonlocal state
        x = state
        x = (x ^ (x << 13)) & _UINT32_MASK
        x = (x ^ (_to_int32(x) >> 17)) & _UINT32_MASK
        x = (x ^ (x << 5)) & _UINT32_MASK
        state = x
        return x / _UINT32_MASK

    return next_value


def _as_utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def days_since_epoch(now: datetime) -> int:
    """
    Whole days elapsed between the daily epoch and now.

    Plain elapsed time floored to milliseconds and then to days; no calendar
    or DST handling. Naive datetimes are taken as UTC.
    """
    elapsed_ms = (_as_utc(now) - DAILY_EPOCH) // timedelta(milliseconds=1)
    return elapsed_ms // MS_PER_DAY


def daily_seed(now: Optional[datetime] = None) -> int:
    """Seed for the daily word: elapsed days since the epoch."""
    if now is None:
        now = datetime.now(timezone.utc)
    days = days_since_epoch(now)
    if days < 0:
        logger.warning(f"Clock is before the daily epoch ({now.isoformat()}); daily seed coerced to 1")
    return days


def _index_for(value: float, count: int) -> int:
    # value can be exactly 1.0 for the generator state 0xFFFFFFFF
    return min(math.floor(value * count), count - 1)


def select_solution(words: Sequence[str],
                    mode: SelectionMode = SelectionMode.RANDOM,
                    now: Optional[datetime] = None,
                    rand: Optional[Callable[[], float]] = None) -> str:
    """
    Selects the solution word from a word list.

    Args:
        words: Candidate words (already normalized)
        mode: SelectionMode.RANDOM or SelectionMode.DAILY
        now: Current time for daily mode (defaults to the UTC clock)
        rand: Uniform [0, 1) source for random mode (defaults to random.random)

    Returns:
        str: The selected word

    Raises:
        EmptyDictionary: If words is empty
    """
    if not words:
        raise EmptyDictionary()

    if mode is SelectionMode.DAILY:
        generator = xorshift32(daily_seed(now))
        return words[_index_for(generator(), len(words))]

    if rand is None:
        rand = random.random
    return words[_index_for(rand(), len(words))]
