import numpy as np

from spkmeans_lib.constants import DEGENERATE_SIMILARITY
from spkmeans_lib.exceptions import DegenerateVectorError


def vec_norm(v):
    """
    Euclidean (L2) norm of a vector.
    Args:
        v: array-like of shape (n,)

    Returns:
        float: the norm, 0.0 for the zero vector
    """
    return float(np.sqrt(np.dot(v, v)))


def vec_dot(a, b):
    if len(a) != len(b):
        raise ValueError(f"Vectors lengths differ ({len(a)} vs {len(b)})")
    return float(np.dot(a, b))


def vec_sum(vectors, n:int):
    """
    Elementwise sum of a set of vectors of length n.
    Args:
        vectors: array of shape (count, n), or a sequence of count arrays of shape (n,)
        n: vector length, used to shape the result when vectors is empty

    Returns:
        np.ndarray of shape (n,), newly allocated - the zero vector when count is 0
    """
    total = np.zeros(n, dtype=np.float64)
    if len(vectors) == 0:
        return total
    # summing on top of the zeros keeps the result a fresh array
    total += np.sum(np.asarray(vectors, dtype=np.float64), axis=0)
    return total


def vec_multiply(v, scalar:float):
    v *= scalar
    return v


def vec_divide(v, scalar:float):
    # Division by zero follows IEEE semantics (inf / nan), warnings are silenced
    with np.errstate(divide='ignore', invalid='ignore'):
        v /= scalar
    return v


def vec_normalize(v, strict:bool = False):
    """
    Scale v to unit length, in place.
    The zero vector is left untouched unless strict is set, in which case
    DegenerateVectorError is raised.
    """
    norm = vec_norm(v)
    if norm == 0:
        if strict:
            raise DegenerateVectorError("Cannot normalize a zero-norm vector")
        return v
    return vec_divide(v, norm)


def cosine_similarity(a, b):
    """
    Cosine of the angle between a and b.
    Zero-norm operands are least similar to everything and get DEGENERATE_SIMILARITY.
    """
    denominator = vec_norm(a) * vec_norm(b)
    if denominator == 0:
        return DEGENERATE_SIMILARITY
    return vec_dot(a, b) / denominator
