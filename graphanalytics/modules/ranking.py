# graphanalytics/modules/ranking.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from graphanalytics.modules.aggregate import Aggregator


@dataclass(frozen=True)
class RankedPair:
    key: str
    values: List[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.values)


def sort_pairs(data: Aggregator, inverse: bool = False) -> List[RankedPair]:
    """
    Sort entries by the number of values each key has, largest first
    (smallest first if `inverse`). Equal counts sort alphabetically by key
    in both directions.
    """
    pairs = [RankedPair(key, values) for key, values in data.items()]
    if inverse:
        return sorted(pairs, key=lambda p: (p.count, p.key))
    return sorted(pairs, key=lambda p: (-p.count, p.key))


def truncate(pairs: List[RankedPair], max_results: int) -> List[RankedPair]:
    """First `max_results` pairs; 0 keeps them all."""
    if max_results < 0:
        raise ValueError(f"max_results must be >= 0, got {max_results}")
    if max_results == 0:
        return list(pairs)
    return pairs[:max_results]


def rank(data: Aggregator, max_results: int, inverse: bool = False) -> List[RankedPair]:
    return truncate(sort_pairs(data, inverse=inverse), max_results)
