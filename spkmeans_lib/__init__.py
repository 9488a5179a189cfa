from spkmeans_lib.clustering.sphere import SphericalKMeans, ClusteringConfig, cluster
from spkmeans_lib.clustering.results import ClusteringResult
from spkmeans_lib.preprocessing.loader import Loader, DocumentMatrix, load_doc_file, load_words_file
from spkmeans_lib.reporting.reporter import top_words, display_results, partition_summary

__all__ = [
    "SphericalKMeans",
    "ClusteringConfig",
    "cluster",
    "ClusteringResult",
    "Loader",
    "DocumentMatrix",
    "load_doc_file",
    "load_words_file",
    "top_words",
    "display_results",
    "partition_summary",
]
