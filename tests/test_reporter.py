"""
Test result reporting
"""

import numpy as np
import pytest

from spkmeans_lib.clustering.sphere import cluster
from spkmeans_lib.reporting.reporter import rank_words, top_words, partition_summary, display_results


@pytest.fixture
def result(small_matrix):
    return cluster(small_matrix, 2)


def test_rank_words_stable_on_ties():
    np.testing.assert_array_equal(rank_words([0.5, 2.0, 0.5, 1.0], 10), [1, 3, 0, 2])
    np.testing.assert_array_equal(rank_words([0.5, 2.0, 0.5, 1.0], 2), [1, 3])


def test_top_word_of_first_partition(result):
    words = top_words(result, ["a", "b", "c"], n_words=1)
    assert words[0] == ["a"]
    assert words[1][0] in ("b", "c")


def test_top_words_capped_at_word_count(result):
    words = top_words(result, ["a", "b", "c"])
    assert [len(w) for w in words] == [3, 3]


def test_missing_vocabulary_entries(result):
    words = top_words(result, ["a", None, None], n_words=3)
    assert words[0][0] == "a"
    assert set(words[1][:2]) == {"#2", "#3"}


def test_partition_summary(result):
    df = partition_summary(result)
    assert list(df["size"]) == [2, 2]
    assert df["share"].sum() == pytest.approx(1.0)
    assert df["quality"].sum() == pytest.approx(result.quality)
    assert df.attrs["normalized_entropy"] == pytest.approx(1.0)


def test_display_results(result, capsys):
    display_results(result, ["a", "b", "c"], n_words=1)
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "Partition #1:"
    assert out[1] == "   a"
    assert out[2] == "Partition #2:"


def test_non_positive_word_count(result, capsys):
    assert top_words(result, ["a", "b", "c"], n_words=-1) == [[], []]
    assert top_words(result, ["a", "b", "c"], n_words=0) == [[], []]
    assert len(rank_words([1.0, 2.0], -5)) == 0
    display_results(result, ["a", "b", "c"], n_words=-1)
    assert capsys.readouterr().out.splitlines() == ["Partition #1:", "Partition #2:"]
