"""
Command line entry point for spherical k-means document clustering.

Usage:
    spkmeans [data_file] [k] [num_threads] [--vocabulary PATH] [--top N]

Example:
    spkmeans ../TestData/docword.txt 4 2 --vocabulary ../TestData/vocabulary
"""

import argparse
import os
import sys

from spkmeans_lib.clustering.sphere import SphericalKMeans
from spkmeans_lib.constants import DEFAULT_DATA_PATH, DEFAULT_VOCABULARY_PATH, DEFAULT_K, DEFAULT_THREADS, DEFAULT_MAX_ITER, DEFAULT_N_WORDS, Q_THRESHOLD
from spkmeans_lib.exceptions import SPKMeansError
from spkmeans_lib.preprocessing.loader import Loader
from spkmeans_lib.reporting.reporter import display_results


def build_parser():
    parser = argparse.ArgumentParser(prog='spkmeans', description='Spherical K-Means clustering of a document/word matrix.')
    parser.add_argument('data_file', nargs='?', default=str(DEFAULT_DATA_PATH), help='triplet-encoded document file')
    parser.add_argument('k', nargs='?', type=int, default=DEFAULT_K, help='number of partitions')
    parser.add_argument('num_threads', nargs='?', type=int, default=DEFAULT_THREADS, help='threads used by the clustering passes')
    parser.add_argument('--vocabulary', default=str(DEFAULT_VOCABULARY_PATH), help='vocabulary file, one word per line')
    parser.add_argument('--top', type=int, default=DEFAULT_N_WORDS, help='words shown per partition')
    parser.add_argument('--threshold', type=float, default=Q_THRESHOLD, help='quality change under which the run stops')
    parser.add_argument('--max-iter', type=int, default=DEFAULT_MAX_ITER, help='iteration cap')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if not os.path.isfile(args.data_file):
        print(f'Error: file "{args.data_file}" does not exist.')
        return 1

    print(f'Running SPK Means on "{args.data_file}" with k={args.k} ({args.num_threads} threads).')
    vocabulary_path = args.vocabulary if os.path.isfile(args.vocabulary) else None
    try:
        loader = Loader(args.data_file, vocabulary_path)
        model = SphericalKMeans(n_clusters=args.k,
                                q_threshold=args.threshold,
                                max_iter=args.max_iter,
                                n_jobs=args.num_threads,
                                verbose=True).fit(loader.matrix)
        result = model.to_result()
        if loader.vocabulary is not None :
            display_results(result, loader.vocabulary, args.top)
        else :
            print(f'Vocabulary file "{args.vocabulary}" not found, skipping top words.')
    except SPKMeansError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
