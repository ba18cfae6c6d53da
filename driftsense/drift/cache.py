"""
Shortcuts that make repeated drift checks cheap.

- ResultCache: LRU memoization keyed by a content fingerprint of the sample.
- AdaptiveSampler: skips recomputation when a sample's mean and std are close
  to the last fully computed check.
"""

from __future__ import annotations

import struct
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .numeric import mean_std
from .schema import DriftResult

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF

SKIP_REASON = "Data unchanged from last check (adaptive sampling)"


def fingerprint(values: Sequence[float]) -> int:
    """
    Order-sensitive 64-bit FNV-1a hash, folding one IEEE-754 word per value.

    Bit-identical samples always share a fingerprint; 0.0 and -0.0 do not.
    """

    h = FNV_OFFSET_BASIS
    for (word,) in struct.iter_unpack("<Q", struct.pack(f"<{len(values)}d", *values)):
        h ^= word
        h = (h * FNV_PRIME) & _MASK_64
    return h


class ResultCache:
    """
    Bounded LRU map from sample fingerprint to drift result.
    """

    def __init__(self, max_size: int = 100):
        if max_size < 1:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self.max_size = max_size
        self._entries: "OrderedDict[int, DriftResult]" = OrderedDict()

    def get(self, key: int) -> Optional[DriftResult]:
        result = self._entries.get(key)
        if result is not None:
            self._entries.move_to_end(key)
        return result

    def put(self, key: int, result: DriftResult) -> None:
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: int) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass
class LastCheck:
    """Snapshot of the most recent full computation."""

    result: DriftResult
    mean: float
    std: float


@dataclass
class AdaptiveSampler:
    """
    Decides whether a sample is close enough to the last check to reuse it.

    Relative change is measured against |mean| and std of the last check,
    falling back to an absolute change when that reference is 0.
    """

    tolerance: float = 0.05
    last: Optional[LastCheck] = field(default=None)

    def record(self, result: DriftResult, values: Sequence[float]) -> None:
        mean, std = mean_std(values)
        self.last = LastCheck(result=result, mean=mean, std=std)

    def reset(self) -> None:
        self.last = None

    def should_skip(self, values: Sequence[float]) -> bool:
        if self.last is None:
            return False
        mean, std = mean_std(values)
        mean_change = abs(mean - self.last.mean) / (abs(self.last.mean) or 1.0)
        std_change = abs(std - self.last.std) / (self.last.std or 1.0)
        return mean_change < self.tolerance and std_change < self.tolerance
