import copy

import numpy as np
import pytest

from svmhmm.tags import TagRegistry
from svmhmm.types import Label, Pattern, Token


def _token(text: str, *pairs) -> Token:
    t = Token(text)
    for index, value in pairs:
        t.features.set(index, value)
    return t


# --- Token -----------------------------------------------------------------

def test_token_defaults_to_empty_text_and_features():
    t = Token()

    assert t.text == ""
    assert len(t.features) == 0
    assert t.dot_product(np.ones(4)) == 0.0


def test_token_copy_is_deep():
    original = _token("dog", (1, 1.0))
    clone = original.copy()
    clone.text = "cat"
    clone.features.set(2, 5.0)

    assert original.text == "dog"
    assert original.features.items() == [(1, 1.0)]
    assert copy.copy(original) == original
    assert copy.copy(original).features is not original.features
    assert copy.deepcopy(original) == original


def test_token_assign_deep_copies():
    source = _token("ran", (3, 2.0))
    target = _token("old", (1, 1.0))
    target.assign(source)
    source.features.set(3, 9.0)

    assert target.text == "ran"
    assert target.features.items() == [(3, 2.0)]


def test_token_features_cannot_be_replaced():
    t = Token("x")

    with pytest.raises(AttributeError):
        t.features = None  # type: ignore[misc]


def test_token_dot_product_uses_its_features():
    t = _token("the", (1, 2.0), (2, 3.0))
    weights = np.array([0.0, 0.5, -1.0])

    assert t.dot_product(weights) == pytest.approx(2.0 * 0.5 + 3.0 * -1.0)
    assert t.checked_dot_product(weights) == pytest.approx(-2.0)


# --- Pattern ---------------------------------------------------------------

def test_append_token_adds_a_copy():
    p = Pattern()
    t = _token("The", (1, 1.0))
    p.append_token(t)
    t.text = "changed"

    assert len(p) == 1
    assert p.get_token(0).text == "The"
    assert p.get_token(0) is not t
    assert p.last_token().features.items() == [(1, 1.0)]


def test_pattern_copies_share_backing_store():
    p = Pattern()
    p.append_token(Token("The"))
    alias = p.copy()
    shallow = copy.copy(p)

    p.append_token(Token("dog"))
    p.get_token(0).text = "A"

    assert len(alias) == 2
    assert alias.get_token(0).text == "A"
    assert shallow.texts() == ["A", "dog"]


def test_pattern_redirect_diverges():
    p = Pattern()
    p.append_token(Token("The"))
    alias = p.copy()

    alias.set_emissions_vector([Token("Fresh")])
    p.append_token(Token("dog"))
    alias.append_token(Token("start"))

    assert p.texts() == ["The", "dog"]
    assert alias.texts() == ["Fresh", "start"]


def test_set_emissions_vector_splices_without_copy():
    built = [Token("a"), Token("b")]
    p = Pattern()
    p.set_emissions_vector(built)

    assert p.get_token(1) is built[1]
    assert p.emissions_vector() is built


# --- Label -----------------------------------------------------------------

def test_label_equality_is_elementwise():
    assert Label([1, 2, 3]) == Label([1, 2, 3])
    assert Label([1, 2, 3]) != Label([1, 2, 4])
    assert Label([1, 2]) != Label([1, 2, 3])
    assert Label() == Label()
    assert Label([1]) != [1]


def test_label_is_empty_tracks_length():
    label = Label()
    assert label.is_empty() and len(label) == 0

    label.append_tag(4)
    assert not label.is_empty()
    assert len(label) == 1
    assert label.get_tag(0) == 4
    assert label.last_tag() == 4


def test_label_copies_share_until_redirect():
    gold = Label([0, 1, 2])
    hyp = gold.copy()

    gold.set_tag(0, 2)
    assert hyp.get_tag(0) == 2

    hyp.set_tags_vector(list(hyp.tags_vector()))
    hyp[1] = 0
    gold.append_tag(1)

    assert gold == Label([2, 1, 2, 1])
    assert hyp == Label([2, 0, 2])


def test_set_length_resizes_shared_store():
    label = Label([5, 6, 7])
    alias = label.copy()

    label.set_length(1)
    assert alias == Label([5])

    label.set_length(3)
    assert len(alias) == 3
    assert alias.get_tag(0) == 5
    assert alias.get_tag(1) == 0
    assert alias.get_tag(2) == 0

    label.set_tag(1, 9)
    label.set_tag(2, 8)
    assert alias == Label([5, 9, 8])


def test_set_length_rejects_negative_length():
    label = Label([1, 2, 3])

    with pytest.raises(ValueError):
        label.set_length(-1)
    assert label == Label([1, 2, 3])


def test_label_is_unhashable():
    with pytest.raises(TypeError):
        hash(Label([1]))


def test_sentence_pattern_and_label_align(registry: TagRegistry):
    pattern = Pattern()
    label = Label()
    for word, tag in [("The", "DET"), ("dog", "NOUN"), ("ran", "VERB")]:
        pattern.append_token(Token(word))
        label.append_tag(registry.register_tag(tag))

    assert len(pattern) == len(label) == 3
    assert registry.tag_by_id(label.get_tag(2)) == "VERB"
    assert [t.text for t in pattern] == ["The", "dog", "ran"]
