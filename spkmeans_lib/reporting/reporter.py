import pandas as pd
import numpy as np

from spkmeans_lib.clustering.results import ClusteringResult
from spkmeans_lib.constants import DEFAULT_N_WORDS
from spkmeans_lib.utils.clustering import normalized_entropy


def _word(vocabulary, index:int):
    word = vocabulary[index] if vocabulary is not None and index < len(vocabulary) else None
    return word if word is not None else f"#{index+1}"


def rank_words(weights, n_words:int = DEFAULT_N_WORDS):
    """
    Word indices sorted by descending weight, truncated to n_words.
    Equal weights keep ascending index order (stable sort).
    """
    n_words = max(0, min(n_words, len(weights)))
    return np.argsort(-np.asarray(weights), kind='stable')[:n_words]


def top_words(result:ClusteringResult, vocabulary, n_words:int = DEFAULT_N_WORDS):
    """
    Most weighted words of every partition.
    Args:
        result: a finished clustering
        vocabulary: list of wc words (None entries or a None vocabulary fall back to '#wordId')
        n_words: number of words per partition, capped at wc

    Returns:
        list of k lists of words
    """
    return [[_word(vocabulary, i) for i in rank_words(partition.sum(), n_words)] for partition in result.partitions]


def partition_summary(result:ClusteringResult):
    sizes = result.p_sizes
    qualities = [p.quality(cv) for p, cv in zip(result.partitions, result.concepts)]
    df = pd.DataFrame({'size': sizes,
                       'share': sizes / max(result.dc, 1),
                       'quality': qualities},
                      index=pd.Index(range(1, result.k + 1), name='partition'))
    df.attrs['normalized_entropy'] = normalized_entropy(sizes)
    df.attrs['total_quality'] = result.quality
    return df


def display_results(result:ClusteringResult, vocabulary, n_words:int = DEFAULT_N_WORDS):
    for i, words in enumerate(top_words(result, vocabulary, n_words)):
        print(f"Partition #{i+1}:")
        for word in words:
            print(f"   {word}")
