"""Sparse per-token feature storage and its dot product with dense weights.

Feature numbers follow the svm_light convention: they are positive integers,
and the dense weight array is indexed by feature number directly (slot 0 is
never referenced by a well-formed vector).
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Sequence, Tuple, Union

import numpy as np

__all__ = ["FeatureIndexError", "SparseFeatureVector", "Weights"]

Weights = Union[np.ndarray, Sequence[float]]


class FeatureIndexError(IndexError):
    """Raised by the checked dot product when a feature does not fit the weights."""


class SparseFeatureVector:
    """
    A sparse numeric vector stored as index -> value pairs.

    Entries that were never set are implicitly zero. Each vector belongs to a
    single `Token`; copies are always independent.
    """

    def __init__(self, pairs: Iterable[Tuple[int, float]] = ()) -> None:
        self._entries: Dict[int, float] = {}
        for index, value in pairs:
            self.set(index, value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, float]]) -> "SparseFeatureVector":
        return cls(pairs)

    def set(self, index: int, value: float) -> None:
        """Sets feature `index` to `value`, replacing any previous value."""
        self._entries[int(index)] = float(value)

    def add(self, index: int, value: float) -> None:
        """Adds `value` to feature `index`."""
        index = int(index)
        self._entries[index] = self._entries.get(index, 0.0) + float(value)

    def get(self, index: int) -> float:
        return self._entries.get(index, 0.0)

    def remove(self, index: int) -> None:
        self._entries.pop(index, None)

    def clear(self) -> None:
        self._entries.clear()

    def items(self) -> List[Tuple[int, float]]:
        """The stored (index, value) pairs in ascending index order."""
        return sorted(self._entries.items())

    def max_index(self) -> int:
        """The largest stored feature index, or 0 for an empty vector."""
        return max(self._entries, default=0)

    def twonorm_sq(self) -> float:
        return float(sum(v * v for v in self._entries.values()))

    def copy(self) -> "SparseFeatureVector":
        clone = SparseFeatureVector()
        clone._entries = dict(self._entries)
        return clone

    def dot_product(self, weights: Weights) -> float:
        """
        Inner product with a dense weight array.

        This is the hot path used while scoring, so it does no bounds
        checking of its own: `weights` must be long enough to be indexed by
        every stored feature number. Use `checked_dot_product` when that is
        not guaranteed.

        Args:
            weights: Dense weights indexed by feature number.

        Returns:
            The sum of value * weights[index] over stored entries; 0.0 for an
            empty vector regardless of `weights`.
        """
        if not self._entries:
            return 0.0
        indices = np.fromiter(self._entries.keys(), dtype=np.intp, count=len(self._entries))
        values = np.fromiter(self._entries.values(), dtype=np.float64, count=len(self._entries))
        return float(np.dot(np.asarray(weights, dtype=np.float64)[indices], values))

    def checked_dot_product(self, weights: Weights) -> float:
        """
        Same as `dot_product`, but validates every index against `weights`.

        Raises:
            FeatureIndexError: If a stored index is negative or not smaller
                than `len(weights)`.
        """
        if self._entries:
            size = len(weights)
            low, high = min(self._entries), max(self._entries)
            if low < 0 or high >= size:
                bad = low if low < 0 else high
                raise FeatureIndexError(
                    f"Feature index {bad} is out of range for a weight vector of length {size}."
                )
        return self.dot_product(weights)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, index: object) -> bool:
        return index in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SparseFeatureVector):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = " ".join(f"{i}:{v:g}" for i, v in self.items())
        return f"SparseFeatureVector({body})"
