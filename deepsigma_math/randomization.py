"""Weighted random selection (sampling with replacement)."""
from __future__ import annotations

import logging
import math
import random
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, TypeVar

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class EmptyCollectionError(LookupError):
    """Raised when drawing from a selector that holds no positive weight."""


class InvalidWeightError(ValueError):
    """Raised when a weight is NaN or infinite."""


@dataclass(frozen=True)
class WeightedItem(Generic[T]):
    """A payload paired with its cumulative weight at insertion time."""

    item: T
    weight: float


class WeightedRandom(Generic[T]):
    """Select items with probability proportional to their weight.

    Items are appended with :meth:`add_item`; each stored entry keeps the running
    total of all accepted weights, so a draw is a binary search of a uniform
    number in ``[0, total_weight)`` over those prefix sums. Entry ``i`` is picked
    when the number falls in ``[cumulative[i - 1], cumulative[i])``.

    ``random_source`` is any zero-argument callable returning a float in
    ``[0, 1)``. When omitted, a ``random.Random`` seeded with ``seed`` (or from
    system entropy when ``seed`` is ``None``) is used.

    Instances are not thread-safe; serialize inserts externally.
    """

    def __init__(
        self,
        random_source: Optional[Callable[[], float]] = None,
        seed: Optional[int] = None,
    ) -> None:
        if random_source is None:
            random_source = random.Random(seed).random
        self._random_source = random_source
        self._items: List[WeightedItem[T]] = []
        self._cumulative: List[float] = []
        self._total_weight = 0.0

    @property
    def total_weight(self) -> float:
        return self._total_weight

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def add_item(self, item: T, weight: float) -> None:
        """Append ``item`` with ``weight``; non-positive weights are ignored."""

        weight = float(weight)
        if weight <= 0:
            LOGGER.debug("Ignoring %r with non-positive weight %s", item, weight)
            return
        if not math.isfinite(weight):
            raise InvalidWeightError(f"Weight for {item!r} must be finite (got {weight!r})")
        self._total_weight += weight
        self._items.append(WeightedItem(item, self._total_weight))
        self._cumulative.append(self._total_weight)

    def next(self) -> T:
        """Return one item drawn according to the weights."""

        if not self._items:
            raise EmptyCollectionError("No items to choose from.")

        r = self._random_source() * self._total_weight
        # First entry whose cumulative weight is strictly greater than r.
        index = bisect_right(self._cumulative, r)
        return self._items[min(index, len(self._items) - 1)].item

    def sample(self, count: int) -> List[T]:
        """Return ``count`` independent draws."""

        if count < 0:
            raise ValueError(f"count must be >= 0 (got {count})")
        return [self.next() for _ in range(count)]

    def items(self) -> List[T]:
        return [entry.item for entry in self._items]

    def cumulative_weights(self) -> List[float]:
        return list(self._cumulative)

    def probabilities(self) -> Dict[int, float]:
        """Selection probability of each entry, keyed by insertion index."""

        if not self._items:
            return {}
        result = {}
        previous = 0.0
        for index, cumulative in enumerate(self._cumulative):
            result[index] = (cumulative - previous) / self._total_weight
            previous = cumulative
        return result
