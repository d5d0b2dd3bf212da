import numpy as np
import pytest

from svmhmm.config import StructLearnParm
from svmhmm.data_structures import StructModel, StructTestStats
from svmhmm.types import Label, Token


def test_struct_model_sizes_emission_and_transition_blocks():
    model = StructModel.create(StructLearnParm(feature_space_size=10), num_tags=3)

    assert model.size_psi == 3 * 10 + 3 * 3
    assert model.w.shape == (model.size_psi + 1,)
    assert not model.w.any()
    assert model.svm_model is None


def test_token_scores_against_model_weights():
    model = StructModel.create(StructLearnParm(feature_space_size=4), num_tags=2)
    model.w[1] = 0.5
    model.w[4] = 2.0
    t = Token("word")
    t.features.set(1, 2.0)
    t.features.set(4, 1.0)

    assert t.dot_product(model.w) == pytest.approx(3.0)


def test_test_stats_accumulate_accuracy():
    stats = StructTestStats()
    stats.record(Label([0, 1, 2]), Label([0, 1, 1]))
    stats.record(Label([2, 2]), Label([2, 2]))

    assert stats.num_tokens == 5
    assert stats.num_correct_tags == 4
    assert stats.accuracy() == pytest.approx(0.8)


def test_test_stats_short_prediction_counts_as_wrong():
    stats = StructTestStats()
    stats.record(Label([0, 1, 2]), Label([0]))

    assert stats.num_tokens == 3
    assert stats.num_correct_tags == 1


def test_test_stats_merge_and_empty():
    empty = StructTestStats()
    assert empty.accuracy() == 0.0

    a = StructTestStats(num_tokens=4, num_correct_tags=3)
    a.merge(StructTestStats(num_tokens=6, num_correct_tags=2))

    assert a.to_dict() == {"num_tokens": 10, "num_correct_tags": 5, "accuracy": 0.5}
    assert np.isclose(a.accuracy(), 0.5)
