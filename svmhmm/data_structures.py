from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

import numpy as np

from .config import StructLearnParm
from .types import Label, Pattern

__all__ = ["Example", "StructModel", "StructTestStats"]


@dataclass
class Example:
    """
    One training or test example: a pattern and its aligned label.

    Attributes:
        pattern: The observed token sequence.
        label: The gold (or predicted) tag IDs, same length as `pattern`.
        qid: The example number taken from the input file.
    """
    pattern: Pattern
    label: Label
    qid: int = 0


@dataclass
class StructModel:
    """
    The structural model handed to and returned by the optimizer.

    Attributes:
        w: Dense learned weights, indexed by feature number (slot 0 unused).
        svm_model: The optimizer's own model object; opaque to this package.
        size_psi: The maximum feature number of the joint feature map.
    """
    w: np.ndarray
    svm_model: Any = None
    size_psi: int = 0

    @classmethod
    def create(cls, parm: StructLearnParm, num_tags: int) -> "StructModel":
        """
        Sizes an all-zero model for `num_tags` tags.

        The joint feature space holds one block of `feature_space_size`
        emission weights per tag followed by a `num_tags` x `num_tags` block
        of transition weights. The result is not checked against the data.
        """
        size_psi = num_tags * parm.feature_space_size + num_tags * num_tags
        return cls(w=np.zeros(size_psi + 1, dtype=np.float64), size_psi=size_psi)


@dataclass
class StructTestStats:
    """Token-level counts accumulated while evaluating predictions."""

    num_tokens: int = 0
    num_correct_tags: int = 0

    def record(self, gold: Label, predicted: Label) -> None:
        """
        Adds one example's counts.

        Every gold token counts; positions missing from a shorter prediction
        count as wrong.
        """
        self.num_tokens += len(gold)
        self.num_correct_tags += sum(1 for g, p in zip(gold, predicted) if g == p)

    def merge(self, other: "StructTestStats") -> None:
        self.num_tokens += other.num_tokens
        self.num_correct_tags += other.num_correct_tags

    def accuracy(self) -> float:
        if not self.num_tokens:
            return 0.0
        return self.num_correct_tags / self.num_tokens

    def to_dict(self, extra: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        out = {
            "num_tokens": self.num_tokens,
            "num_correct_tags": self.num_correct_tags,
            "accuracy": self.accuracy(),
        }
        out.update(extra or {})
        return out
