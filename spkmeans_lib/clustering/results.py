from dataclasses import dataclass, field

import numpy as np

from spkmeans_lib.clustering.partition import labels_from_partitions


@dataclass
class ClusteringResult:
    """Final partitions and concept vectors of a spherical k-means run."""
    k: int
    dc: int
    wc: int
    partitions: list
    concepts: np.ndarray
    quality: float
    n_iter: int = 0
    converged: bool = True
    quality_history: list = field(default_factory=list)

    @property
    def p_sizes(self):
        return np.array([p.size for p in self.partitions], dtype=int)

    @property
    def labels(self):
        return labels_from_partitions(self.partitions, self.dc)
