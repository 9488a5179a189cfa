import numpy as np
from joblib import Parallel, delayed

from spkmeans_lib.utils.vectors import vec_sum, vec_dot, vec_multiply, vec_normalize


class Partition :
    """
    One cluster of documents: row indices into a shared document matrix.
    Members are never copied into the partition; they are read from the
    matrix on demand, so a partition is cheap to rebuild every iteration.
    """

    def __init__(self, matrix:np.ndarray, indices):
        self.matrix = matrix
        self.indices = np.asarray(indices, dtype=np.intp)

    def __len__(self):
        return self.indices.shape[0]

    def __repr__(self):
        return f"Partition(size={self.size})"

    @property
    def size(self):
        return len(self)

    @property
    def members(self):
        return self.matrix[self.indices]

    def sum(self):
        return vec_sum(self.members, self.matrix.shape[1])

    def concept(self, wc:int = None, strict:bool = False):
        """
        Concept vector: member sum scaled by 1/wc, then normalized.
        An empty partition gives the zero vector (or DegenerateVectorError if strict).
        """
        wc = self.matrix.shape[1] if wc is None else wc
        cv = self.sum()
        vec_multiply(cv, 1.0 / wc)
        return vec_normalize(cv, strict=strict)

    def quality(self, concept):
        return vec_dot(self.sum(), concept)


def initial_partitions(dc:int, k:int):
    """
    Positional seeding: k contiguous groups of dc // k documents in input order,
    the last group also taking the remainder.
    Returns a list of k index arrays.
    """
    split = dc // k
    bounds = [i * split for i in range(k)] + [dc]
    return [np.arange(bounds[i], bounds[i+1]) for i in range(k)]


def partitions_from_labels(matrix:np.ndarray, labels, k:int):
    labels = np.asarray(labels)
    return [Partition(matrix, np.flatnonzero(labels == i)) for i in range(k)]


def labels_from_partitions(partitions:list, dc:int):
    labels = np.full(dc, -1, dtype=int)
    for i, partition in enumerate(partitions):
        labels[partition.indices] = i
    return labels


def compute_concepts(partitions:list, wc:int, n_jobs:int = 1, strict:bool = False):
    if n_jobs == 1 or len(partitions) < 2:
        concepts = [p.concept(wc, strict=strict) for p in partitions]
    else :
        concepts = Parallel(n_jobs=n_jobs, prefer='threads')(delayed(p.concept)(wc, strict) for p in partitions)
    return np.vstack(concepts) if concepts else np.zeros((0, wc))


def total_quality(partitions:list, concepts):
    return sum(p.quality(cv) for p, cv in zip(partitions, concepts))
