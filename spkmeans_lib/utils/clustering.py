import numpy as np
from sklearn.metrics.pairwise import cosine_similarity
from scipy.stats import entropy

from spkmeans_lib.constants import DEGENERATE_SIMILARITY


def similarity_matrix(X, concepts):
    """
    Compute cosine similarities between documents and concept vectors.
    Args:
        X: array-like of shape (n_docs, n_words) - The document vectors
        concepts: array-like of shape (k, n_words) - The concept vectors

    Returns:
        np.ndarray of shape (n_docs, k), with DEGENERATE_SIMILARITY wherever
        the document or the concept vector has zero norm
    """
    sims = cosine_similarity(X, concepts)
    # sklearn maps zero-norm rows to 0, push them to the bottom of the range instead
    sims[np.linalg.norm(X, axis=1) == 0, :] = DEGENERATE_SIMILARITY
    sims[:, np.linalg.norm(concepts, axis=1) == 0] = DEGENERATE_SIMILARITY
    return sims


def assign_to_concepts(X, concepts):
    """
    Index of the most similar concept vector for each document.
    np.argmax keeps the first maximum, so ties go to the lowest cluster index.
    """
    return np.argmax(similarity_matrix(X, concepts), axis=1)


def normalized_entropy(sizes):
    """
    Entropy of the partition sizes divided by its maximum (log k).
    Args:
        sizes: array-like of shape (k,) - Number of documents per partition

    Returns:
        float: 1.0 for perfectly balanced partitions, 0.0 when one partition holds everything
    """
    sizes = np.asarray(sizes, dtype=np.float64)
    if sizes.shape[0] < 2 or sizes.sum() == 0:
        return 0.0
    freq = sizes / sizes.sum()
    return float(entropy(freq) / np.log(sizes.shape[0]))
