"""Data layer of the SVM-HMM sequence tagger: tags, tokens, patterns and labels."""
from __future__ import annotations

from .config import StructLearnParm, load_config
from .data_structures import Example, StructModel, StructTestStats
from .features import FeatureIndexError, SparseFeatureVector
from .stream import InputStream, StrMatcher, match
from .tags import InvalidTagIDError, TagRegistry
from .types import Label, Pattern, Tag, TagID, Token

INST_NAME = "SVM-HMM"
INST_VERSION = "v2.13"
INST_VERSION_DATE = "10 / 11 / 06"

__all__ = [
    "INST_NAME",
    "INST_VERSION",
    "INST_VERSION_DATE",
    "Example",
    "FeatureIndexError",
    "InputStream",
    "InvalidTagIDError",
    "Label",
    "Pattern",
    "SparseFeatureVector",
    "StrMatcher",
    "StructLearnParm",
    "StructModel",
    "StructTestStats",
    "Tag",
    "TagID",
    "TagRegistry",
    "Token",
    "load_config",
    "match",
]
