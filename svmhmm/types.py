# C:\dev\svm_hmm\svmhmm\types.py

"""Core example representation: tokens, patterns (x) and labels (y).

A `Pattern` is the observed input of one example and a `Label` the aligned
tag sequence. Both are lightweight *handles* onto a backing list. Copying a
handle (`copy()` or `copy.copy`) is O(1) and shares that list, so a mutation
made through one handle is seen through every copy. A handle stops seeing
those mutations only when it is pointed at a different list with
`set_emissions_vector` / `set_tags_vector`. The backing list lives as long as
the last handle that references it.

Nothing here forks automatically on write. Callers that need an independent
label build a fresh list and redirect their handle first.
"""
from __future__ import annotations
from typing import Iterator, List, Optional

from .features import SparseFeatureVector, Weights

__all__ = ["Tag", "TagID", "Token", "Pattern", "Label"]

Tag = str
TagID = int


class Token:
    """
    One observable unit of a sequence, e.g. a word, with its sparse features.

    Attributes:
        text: Display text of the token (may be empty).
        features: The token's own `SparseFeatureVector`. It is the only way to
            populate or alter the features and is always a valid (possibly
            empty) vector.
    """

    __slots__ = ("text", "_features")

    def __init__(self, text: str = "") -> None:
        self.text = text
        self._features = SparseFeatureVector()

    @property
    def features(self) -> SparseFeatureVector:
        return self._features

    def dot_product(self, weights: Weights) -> float:
        """Unchecked dot product of the token's features with `weights`."""
        return self._features.dot_product(weights)

    def checked_dot_product(self, weights: Weights) -> float:
        return self._features.checked_dot_product(weights)

    def copy(self) -> "Token":
        """Returns a deep copy: text and feature vector are not shared."""
        clone = Token(self.text)
        clone._features = self._features.copy()
        return clone

    def assign(self, other: "Token") -> "Token":
        """Overwrites this token in place with a deep copy of `other`."""
        self.text = other.text
        self._features = other._features.copy()
        return self

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> "Token":
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self.text == other.text and self._features == other._features

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {len(self._features)} features)"


class Pattern:
    """The x-part of an example: an ordered sequence of tokens."""

    __slots__ = ("_emissions",)

    def __init__(self, emissions: Optional[List[Token]] = None) -> None:
        self._emissions: List[Token] = [] if emissions is None else emissions

    def __len__(self) -> int:
        return len(self._emissions)

    def get_token(self, index: int) -> Token:
        """
        Returns the stored token at `index`.

        The token itself is returned, not a copy, so editing it edits the
        backing list. Indexing is not range-checked beyond what Python lists
        already do.
        """
        return self._emissions[index]

    __getitem__ = get_token

    def last_token(self) -> Token:
        return self._emissions[-1]

    def append_token(self, token: Token) -> None:
        """Appends a deep copy of `token` to the shared backing list."""
        self._emissions.append(token.copy())

    def set_emissions_vector(self, emissions: List[Token]) -> None:
        """Points this handle at `emissions` without copying it."""
        self._emissions = emissions

    def emissions_vector(self) -> List[Token]:
        """The backing list itself, e.g. to splice it into another pattern."""
        return self._emissions

    def copy(self) -> "Pattern":
        """Returns a second handle onto the same backing list."""
        return Pattern(self._emissions)

    __copy__ = copy

    def __iter__(self) -> Iterator[Token]:
        return iter(self._emissions)

    def texts(self) -> List[str]:
        return [t.text for t in self._emissions]

    def __repr__(self) -> str:
        return f"Pattern({self.texts()!r})"


class Label:
    """The y-part of an example: tag IDs aligned one-to-one with a pattern."""

    __slots__ = ("_tags",)

    def __init__(self, tags: Optional[List[TagID]] = None) -> None:
        self._tags: List[TagID] = [] if tags is None else tags

    def is_empty(self) -> bool:
        return not self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        # Predicted labels are compared to gold labels by content.
        if not isinstance(other, Label):
            return NotImplemented
        return self._tags == other._tags

    __hash__ = None  # type: ignore[assignment]

    def get_tag(self, index: int) -> TagID:
        return self._tags[index]

    __getitem__ = get_tag

    def last_tag(self) -> TagID:
        return self._tags[-1]

    def append_tag(self, tag_id: TagID) -> None:
        self._tags.append(tag_id)

    def set_tag(self, index: int, tag_id: TagID) -> None:
        self._tags[index] = tag_id

    __setitem__ = set_tag

    def set_length(self, length: int) -> None:
        """
        Resizes the backing list to exactly `length` entries.

        New positions hold tag ID 0 and must be overwritten by the caller.
        The resize is seen by every handle sharing the list; redirect with
        `set_tags_vector` first when this label must change on its own.

        Raises:
            ValueError: If `length` is negative.
        """
        if length < 0:
            raise ValueError(f"Label length must not be negative, got {length}")
        current = len(self._tags)
        if length < current:
            del self._tags[length:]
        else:
            self._tags.extend([0] * (length - current))

    def set_tags_vector(self, tags: List[TagID]) -> None:
        """Points this handle at `tags` without copying it."""
        self._tags = tags

    def tags_vector(self) -> List[TagID]:
        return self._tags

    def copy(self) -> "Label":
        """Returns a second handle onto the same backing list."""
        return Label(self._tags)

    __copy__ = copy

    def __iter__(self) -> Iterator[TagID]:
        return iter(self._tags)

    def __repr__(self) -> str:
        return f"Label({self._tags!r})"
