# C:\dev\svm_hmm\svmhmm\tags.py

"""Interning of textual tags into small, dense integer identifiers.

Downstream algorithms (dynamic programming over tag sequences, feature
indexing by tag) work with integers, not strings. The `TagRegistry` is the
single place that translates between the two. A registry is created once per
parse/train run and handed to everything that reads or writes tags, so tests
can start from a fresh one.
"""
from __future__ import annotations
import threading
from typing import Dict, Iterator, List

from .types import Tag, TagID

__all__ = ["InvalidTagIDError", "TagRegistry", "FIRST_TAG_ID"]

FIRST_TAG_ID: TagID = 0


class InvalidTagIDError(ValueError):
    """Raised when a tag ID that was never assigned is looked up."""


class TagRegistry:
    """
    A bidirectional, append-only mapping between tags and tag IDs.

    IDs are handed out in registration order starting at `FIRST_TAG_ID`, and
    once assigned an ID is never reused or reassigned. Registration takes a
    lock so that several reader threads may share one registry.

    Attributes:
        None public; use the methods below.
    """

    def __init__(self) -> None:
        self._ids: Dict[Tag, TagID] = {}
        self._tags: List[Tag] = []
        self._lock = threading.Lock()

    def register_tag(self, tag: Tag) -> TagID:
        """
        Returns the ID of `tag`, assigning the next free ID if it is new.

        Args:
            tag: The textual tag, e.g. "NOUN" or "B-NP".

        Returns:
            The tag's ID. Calling this again with the same tag returns the
            same ID.
        """
        with self._lock:
            tag_id = self._ids.get(tag)
            if tag_id is None:
                tag_id = FIRST_TAG_ID + len(self._tags)
                self._tags.append(tag)
                self._ids[tag] = tag_id
            return tag_id

    def num_tags(self) -> int:
        """Returns the number of distinct tags registered so far."""
        return len(self._tags)

    def tag_by_id(self, tag_id: TagID) -> Tag:
        """
        Returns the exact string that was registered under `tag_id`.

        Raises:
            InvalidTagIDError: If `tag_id` was never assigned by this registry.
        """
        pos = tag_id - FIRST_TAG_ID
        if not 0 <= pos < len(self._tags):
            raise InvalidTagIDError(f"Unknown tag ID: {tag_id}")
        return self._tags[pos]

    def id_for(self, tag: Tag) -> TagID:
        """Looks up the ID of an already registered tag without registering it."""
        try:
            return self._ids[tag]
        except KeyError:
            raise KeyError(f"Tag '{tag}' has not been registered") from None

    def tags(self) -> List[Tag]:
        """All registered tags, ordered by ID."""
        return list(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._ids

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags())
