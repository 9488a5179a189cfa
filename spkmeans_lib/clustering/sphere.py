import numpy as np
import time
import warnings
from dataclasses import dataclass, asdict
from joblib import Parallel, delayed, effective_n_jobs
from sklearn.preprocessing import normalize
from sklearn.exceptions import ConvergenceWarning

from spkmeans_lib.clustering.partition import Partition, initial_partitions, partitions_from_labels, labels_from_partitions, compute_concepts, total_quality
from spkmeans_lib.clustering.results import ClusteringResult
from spkmeans_lib.constants import DEFAULT_K, DEFAULT_MAX_ITER, Q_THRESHOLD, DEGENERATE_POLICIES
from spkmeans_lib.exceptions import InvalidParameterError, DegenerateVectorError
from spkmeans_lib.preprocessing.loader import DocumentMatrix
from spkmeans_lib.utils.clustering import assign_to_concepts


@dataclass
class ClusteringConfig:
    k: int = DEFAULT_K
    q_threshold: float = Q_THRESHOLD
    max_iter: int = DEFAULT_MAX_ITER
    n_jobs: int = 1
    degenerate: str = 'ignore'
    verbose: bool = False


class SphericalKMeans :
    """
    Spherical K-Means over word-frequency document vectors.

    Documents are normalized to unit length (TXN scheme), split positionally
    into k groups, then repeatedly reassigned to the cluster whose concept
    vector is the most cosine-similar until the total quality improves by no
    more than q_threshold.

    Args:
        n_clusters: number of partitions k, 1 <= k <= number of documents
        q_threshold: convergence threshold on the quality change between two iterations
        max_iter: iteration cap, None to iterate until convergence only
        n_jobs: threads used by the reassignment and concept passes (-1 for all cores)
        degenerate: 'ignore' keeps zero-norm vectors as least similar to everything,
            'raise' aborts with DegenerateVectorError
        verbose: print progress
    """

    def __init__(self,
                n_clusters:int = DEFAULT_K,
                q_threshold:float = Q_THRESHOLD,
                max_iter:int = DEFAULT_MAX_ITER,
                n_jobs:int = 1,
                degenerate:str = 'ignore',
                verbose:bool = True):
        self.n_clusters = n_clusters
        self.q_threshold = q_threshold
        self.max_iter = max_iter
        self.n_jobs = n_jobs
        self.degenerate = degenerate
        self.verbose = verbose

    def _check_params(self, dc:int):
        k = self.n_clusters
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or not 1 <= k <= dc:
            raise InvalidParameterError(f"n_clusters must be an integer between 1 and the number of documents ({dc}), got {k}")
        if isinstance(self.q_threshold, bool) or not isinstance(self.q_threshold, (int, float, np.integer, np.floating)) or not np.isfinite(self.q_threshold):
            raise InvalidParameterError(f"q_threshold must be a finite number, got {self.q_threshold}")
        if self.max_iter is not None and (not isinstance(self.max_iter, (int, np.integer)) or self.max_iter < 1):
            raise InvalidParameterError(f"max_iter must be a positive integer or None, got {self.max_iter}")
        if not isinstance(self.n_jobs, (int, np.integer)) or (self.n_jobs < 1 and self.n_jobs != -1):
            raise InvalidParameterError(f"n_jobs must be a positive integer or -1, got {self.n_jobs}")
        if self.degenerate not in DEGENERATE_POLICIES:
            raise InvalidParameterError(f"degenerate must be one of {DEGENERATE_POLICIES}, got '{self.degenerate}'")

    @staticmethod
    def _check_array(X):
        if isinstance(X, DocumentMatrix):
            X = X.data
        if not isinstance(X, np.ndarray) or X.dtype.kind != 'f':
            # Non-float input cannot be normalized in place, work on a copy
            X = np.asarray(X, dtype=np.float64)
        if X.ndim != 2:
            raise InvalidParameterError(f"Expected a 2D document x word matrix, got {X.ndim} dimension(s)")
        return X

    def _txn_scheme(self, X):
        if self.degenerate == 'raise' and (np.linalg.norm(X, axis=1) == 0).any():
            raise DegenerateVectorError("Zero-norm document vector found before normalization")
        X[:] = normalize(X, norm='l2', axis=1)

    def _reassign(self, X, concepts):
        n_jobs = effective_n_jobs(self.n_jobs)
        if n_jobs == 1 or X.shape[0] < 2 * n_jobs:
            return assign_to_concepts(X, concepts)
        chunks = np.array_split(np.arange(X.shape[0]), n_jobs)
        labels = Parallel(n_jobs=n_jobs, prefer='threads')(delayed(assign_to_concepts)(X[chunk], concepts) for chunk in chunks)
        return np.concatenate(labels)

    def _stop_reason(self, stop_event):
        if self.max_iter is not None and self.n_iter_ >= self.max_iter:
            return f"max_iter={self.max_iter} reached"
        if stop_event is not None and stop_event.is_set():
            return "cancelled"
        return None

    def fit(self, X, stop_event = None):
        """
        Cluster the rows of X. A float ndarray is normalized in place.
        stop_event: optional threading.Event, checked before each iteration.
        """
        X = self._check_array(X)
        dc, wc = X.shape
        self._check_params(dc)
        k = int(self.n_clusters)
        strict = self.degenerate == 'raise'
        n_jobs = effective_n_jobs(self.n_jobs)

        t0 = time.time()
        self._txn_scheme(X)

        partitions = [Partition(X, indices) for indices in initial_partitions(dc, k)]
        if self.verbose :
            print(f"Split = {dc // k}")
            for p in partitions:
                print(f"Created new partition of size {p.size}")

        concepts = compute_concepts(partitions, wc, n_jobs=n_jobs, strict=strict)
        quality = total_quality(partitions, concepts)
        self.quality_history_ = [quality]
        self.n_iter_ = 0
        self.converged_ = False
        if self.verbose :
            print(f"Initial quality: {quality}")

        while True:
            reason = self._stop_reason(stop_event)
            if reason is not None :
                warnings.warn(f"Spherical k-means stopped before convergence ({reason}) after {self.n_iter_} iterations", ConvergenceWarning)
                break
            self.n_iter_ += 1

            labels = self._reassign(X, concepts)
            partitions = partitions_from_labels(X, labels, k)
            concepts = compute_concepts(partitions, wc, n_jobs=n_jobs, strict=strict)

            new_quality = total_quality(partitions, concepts)
            dQ = new_quality - quality
            quality = new_quality
            self.quality_history_.append(quality)
            if self.verbose :
                print(f"Quality: {quality} (+{dQ})")
            # A drop in quality also ends the run
            if dQ <= self.q_threshold:
                self.converged_ = True
                break

        self.fit_time_ = time.time() - t0
        if self.verbose :
            print(f"Done in {self.fit_time_:.3f} seconds after {self.n_iter_} iterations.")

        self.partitions_ = partitions
        self.partition_sizes_ = np.array([p.size for p in partitions], dtype=int)
        self.cluster_centers_ = concepts
        self.labels_ = labels_from_partitions(partitions, dc)
        self.quality_ = quality
        self.n_features_in_ = wc
        return self

    def predict(self, X):
        if not hasattr(self, 'cluster_centers_'):
            raise ValueError("Call fit() before predict().")
        X = normalize(self._check_array(X), norm='l2', axis=1)
        return assign_to_concepts(X, self.cluster_centers_)

    def to_result(self):
        if not hasattr(self, 'partitions_'):
            raise ValueError("Call fit() before to_result().")
        return ClusteringResult(k=len(self.partitions_),
                                dc=self.labels_.shape[0],
                                wc=self.n_features_in_,
                                partitions=self.partitions_,
                                concepts=self.cluster_centers_,
                                quality=self.quality_,
                                n_iter=self.n_iter_,
                                converged=self.converged_,
                                quality_history=list(self.quality_history_))


def cluster(matrix, k:int = None, dc:int = None, wc:int = None, config:ClusteringConfig = None):
    """
    Run spherical k-means on a document matrix and return a ClusteringResult.
    dc and wc default to the matrix shape; when given they must match it.
    k overrides config.k when both are provided.
    """
    config = ClusteringConfig() if config is None else config
    params = asdict(config)
    if k is not None :
        params['k'] = k
    X = SphericalKMeans._check_array(matrix)
    for name, expected, actual in (('dc', dc, X.shape[0]), ('wc', wc, X.shape[1])):
        if expected is not None and expected != actual:
            raise InvalidParameterError(f"{name}={expected} does not match the matrix shape {X.shape}")
    model = SphericalKMeans(n_clusters=params.pop('k'), **params).fit(X)
    return model.to_result()
