"""
Fragile registry - bookkeeping for context-dependent spellings.

Ups and lifts are spelled relative to the inflection sizes of the current
formatting context. When the context changes, values spelled with the old
sizes no longer lower back to themselves. Callers that care pass a registry
to up/down/lift/drop and ask it for repaired copies after a context change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from chuk_tuning.intervals.interval import Interval
    from chuk_tuning.intervals.val import Val

logger = logging.getLogger(__name__)


class FragileRegistry:
    """Values whose literal depends on the current inflection sizes."""

    def __init__(self) -> None:
        self._fragiles: list[Union[Interval, Val]] = []

    def track(self, value: Union[Interval, Val]) -> None:
        """Remember a context-dependent value."""
        self._fragiles.append(value)

    def __len__(self) -> int:
        return len(self._fragiles)

    def broken(self) -> list[Union[Interval, Val]]:
        """
        Context-free copies of every tracked value, in tracking order.

        The registry is emptied.
        """
        result = [fragile.broken() for fragile in self._fragiles]
        logger.debug(f"Broke {len(result)} fragile values")
        self._fragiles.clear()
        return result
