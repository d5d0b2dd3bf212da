# C:\dev\svm_hmm\svmhmm\io_utils.py

"""Reading and writing SVM-HMM example files.

The training/test format puts one token per line:

    TAG qid:EXNUM FEATNUM:VALUE FEATNUM:VALUE ... # token text

Consecutive lines sharing a `qid` make up one example. Feature numbers are
positive and strictly ascending within a line. Blank lines and lines that
start with `#` are ignored. Tags are interned through the `TagRegistry`
passed in, so the same registry must be used for training and test files.

Prediction files hold one tag per line, with a blank line after each
example.
"""
from __future__ import annotations
from typing import Iterable, List, Sequence

import pandas as pd

from .config import MAX_NUM_EXAMPLES
from .data_structures import Example
from .stream import InputStream, match
from .tags import TagRegistry
from .types import Label, Pattern, Token

__all__ = [
    "parse_token_line",
    "read_examples",
    "write_examples",
    "read_predictions",
    "write_predictions",
    "tag_frequency_table",
]


def parse_token_line(line: str, registry: TagRegistry) -> tuple[int, int, Token]:
    """
    Parses one `TAG qid:N idx:val ... # text` line.

    Args:
        line: The line without its trailing newline.
        registry: Registry used to intern the tag.

    Returns:
        A `(qid, tag_id, token)` tuple.

    Raises:
        ValueError: If the line does not follow the format.
    """
    s = InputStream(line)
    tag = s.read_word()
    s.skip_whitespace(newlines=False)
    s >> match("qid:")
    qid = s.read_int()
    if s.fail():
        raise ValueError("expected 'TAG qid:EXNUM' at the start of the line")

    token = Token()
    last_index = 0
    while True:
        s.skip_whitespace(newlines=False)
        ch = s.peek()
        if ch == "":
            break
        if ch == "#":
            s >> match("#")
            # The writer puts one space after the marker; the rest is kept verbatim.
            text = s.read_line_rest()
            token.text = text[1:] if text.startswith(" ") else text
            break
        index = s.read_int()
        s >> match(":")
        value = s.read_float()
        if s.fail():
            raise ValueError("malformed feature, expected FEATNUM:VALUE")
        if index <= last_index:
            raise ValueError(
                f"feature numbers must be positive and ascending ({index} after {last_index})"
            )
        token.features.set(index, value)
        last_index = index

    return qid, registry.register_tag(tag), token


def read_examples(path: str, registry: TagRegistry) -> List[Example]:
    """
    Loads all examples from an SVM-HMM formatted file.

    Args:
        path: The path to the example file.
        registry: Registry that interns the tags found in the file.

    Returns:
        The examples in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a line is malformed (the message names file and line),
                    or the file holds more than `MAX_NUM_EXAMPLES` examples.
    """
    examples: List[Example] = []
    current: Example | None = None

    try:
        f = open(path, "r", encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"Example file not found at: {path}")

    with f:
        for lineno, raw in enumerate(f, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            try:
                qid, tag_id, token = parse_token_line(line, registry)
            except ValueError as e:
                raise ValueError(f"{path}:{lineno}: {e}") from None

            if current is None or qid != current.qid:
                if current is not None and qid < current.qid:
                    print(f"Warning: {path}:{lineno}: qid {qid} follows qid {current.qid}.")
                if len(examples) >= MAX_NUM_EXAMPLES:
                    raise ValueError(f"{path}: more than {MAX_NUM_EXAMPLES} examples")
                current = Example(pattern=Pattern(), label=Label(), qid=qid)
                examples.append(current)

            # The token is freshly built, so hand it over instead of copying.
            current.pattern.emissions_vector().append(token)
            current.label.append_tag(tag_id)

    return examples


def _format_token_line(tag: str, qid: int, token: Token) -> str:
    parts = [tag, f"qid:{qid}"]
    parts.extend(f"{i}:{v!r}" for i, v in token.features.items())
    if token.text:
        parts.append(f"# {token.text}")
    return " ".join(parts)


def write_examples(path: str, examples: Iterable[Example], registry: TagRegistry) -> None:
    """
    Saves examples in the format read by `read_examples`.

    Feature values are written with full float precision and token text
    as is, so reading the file back yields equal tokens.

    Raises:
        ValueError: If an example's pattern and label differ in length; the
                    file is not created in that case.
        InvalidTagIDError: If a label holds an ID unknown to `registry`.
    """
    examples = list(examples)
    for ex in examples:
        if len(ex.pattern) != len(ex.label):
            raise ValueError(
                f"Example qid {ex.qid} has {len(ex.pattern)} tokens but {len(ex.label)} tags."
            )

    with open(path, "w", encoding="utf-8") as f:
        for ex in examples:
            for token, tag_id in zip(ex.pattern, ex.label):
                f.write(_format_token_line(registry.tag_by_id(tag_id), ex.qid, token) + "\n")


def write_predictions(path: str, labels: Iterable[Label], registry: TagRegistry) -> None:
    """Writes one tag per line, with a blank line closing each label."""
    with open(path, "w", encoding="utf-8") as f:
        for label in labels:
            for tag_id in label:
                f.write(registry.tag_by_id(tag_id) + "\n")
            f.write("\n")


def read_predictions(path: str, registry: TagRegistry) -> List[Label]:
    """
    Reads a file written by `write_predictions`.

    Tags are looked up, not registered: a predicted tag that never occurred
    in the data raises `KeyError`.
    """
    labels: List[Label] = []
    current = Label()
    try:
        f = open(path, "r", encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"Prediction file not found at: {path}")
    with f:
        for raw in f:
            tag = raw.strip()
            if tag:
                current.append_tag(registry.id_for(tag))
            elif not current.is_empty():
                labels.append(current)
                current = Label()
    if not current.is_empty():
        labels.append(current)
    return labels


def tag_frequency_table(examples: Sequence[Example], registry: TagRegistry) -> pd.DataFrame:
    """
    Counts how often each registered tag occurs in the examples' labels.

    Returns:
        A DataFrame with `tag`, `tag_id` and `count` columns, one row per
        registered tag in ID order (tags that never occur count 0).
    """
    counts = [0] * registry.num_tags()
    for ex in examples:
        for tag_id in ex.label:
            counts[tag_id] += 1
    return pd.DataFrame(
        {
            "tag": registry.tags(),
            "tag_id": list(range(registry.num_tags())),
            "count": counts,
        }
    )
