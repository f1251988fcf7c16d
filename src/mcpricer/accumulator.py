# accumulator.py
# Sufficient statistics of discounted payoffs: count, sum, sum of squares.
# Partial statistics from disjoint trial batches combine by field-wise
# addition, which is what makes the parallel reduction exact.

from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass
from typing import Iterable

from .core import PricingResult


__all__ = ["RunningStatistics"]


@dataclass
class RunningStatistics:
    """Online accumulator for the mean and standard error of a sample.

    ``push`` folds a single trial, ``push_many`` folds a batch and is
    equivalent to pushing each element. Batch sums use numpy's pairwise
    summation, which keeps round-off growth logarithmic in the batch size.
    """
    count: int = 0
    total: float = 0.0
    total_sq: float = 0.0

    def push(self, x: float) -> None:
        x = float(x)
        self.count += 1
        self.total += x
        self.total_sq += x * x

    def push_many(self, xs) -> None:
        xs = np.asarray(xs, dtype=float).ravel()
        self.count += int(xs.size)
        self.total += float(xs.sum())
        self.total_sq += float((xs * xs).sum())

    # ---- merge ----
    def __add__(self, other: RunningStatistics) -> RunningStatistics:
        if not isinstance(other, RunningStatistics):
            return NotImplemented
        return RunningStatistics(
            self.count + other.count,
            self.total + other.total,
            self.total_sq + other.total_sq,
        )

    @classmethod
    def merge(cls, parts: Iterable[RunningStatistics]) -> RunningStatistics:
        out = cls()
        for s in parts:
            out = out + s
        return out

    @classmethod
    def from_samples(cls, xs) -> RunningStatistics:
        out = cls()
        out.push_many(xs)
        return out

    # ---- derived quantities ----
    @property
    def mean(self) -> float:
        if self.count == 0:
            return float("nan")
        return self.total / self.count

    @property
    def variance(self) -> float:
        """Population variance, clamped at zero against round-off."""
        if self.count == 0:
            return float("nan")
        mean = self.total / self.count
        return max(0.0, self.total_sq / self.count - mean * mean)

    @property
    def stderr(self) -> float:
        if self.count == 0:
            return float("nan")
        return math.sqrt(self.variance / self.count)

    def to_result(self) -> PricingResult:
        return PricingResult(price=self.mean, stderr=self.stderr, n_trials=self.count)
