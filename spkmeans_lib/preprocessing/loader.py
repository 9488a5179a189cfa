import pandas as pd
import numpy as np
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from scipy.sparse import coo_matrix

from spkmeans_lib.exceptions import ConfigurationError

TRIPLET_COLUMNS = ['doc_id', 'word_id', 'count']
EXTRA_COLUMN = 'extra'


@dataclass
class DocumentMatrix:
    """Dense document x word matrix built from a triplet file."""
    data: np.ndarray
    nnz_declared: int = 0
    n_skipped: int = 0

    @property
    def dc(self):
        return self.data.shape[0]

    @property
    def wc(self):
        return self.data.shape[1]


def _check_file(filepath):
    filepath = Path(filepath)
    if not os.path.isfile(filepath):
        raise ConfigurationError(f'File "{filepath}" does not exist.')
    return filepath


def _read_header(f):
    """
    First three integer tokens of the file, on one line or spread over several.
    Returns the header, the number of lines consumed and the tokens left on the last header line.
    """
    header = []
    n_lines = 0
    for line in f:
        n_lines += 1
        tokens = line.split()
        while tokens and len(header) < 3:
            token = tokens.pop(0)
            try:
                header.append(int(token))
            except ValueError:
                raise ConfigurationError(f"Malformed header token '{token}', expected an integer")
        if len(header) == 3:
            return header, n_lines, tokens
    raise ConfigurationError("Document file header must hold document, word and non-zero counts")


def _clean_triplets(df):
    # Rows that are not three integers are dropped silently
    df = df[df[EXTRA_COLUMN].isna()].drop(columns=EXTRA_COLUMN)
    df = df.apply(pd.to_numeric, errors='coerce').dropna()
    df = df[(df % 1 == 0).all(axis=1)]
    return df.astype(np.int64)


def _read_triplets(filepath):
    try:
        with open(filepath, encoding='utf-8') as f:
            header, n_lines, remainder = _read_header(f)
        try:
            body = pd.read_csv(filepath,
                               sep=r'\s+',
                               header=None,
                               skiprows=n_lines,
                               names=TRIPLET_COLUMNS + [EXTRA_COLUMN],
                               index_col=False,
                               on_bad_lines='skip',
                               dtype=str,
                               encoding='utf-8')
        except pd.errors.EmptyDataError:
            body = pd.DataFrame(columns=TRIPLET_COLUMNS + [EXTRA_COLUMN], dtype=str)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f'Cannot read document file "{filepath}": {e}') from e
    if len(remainder) == 3:
        body = pd.concat([pd.DataFrame([remainder], columns=TRIPLET_COLUMNS), body], ignore_index=True)
    return header, _clean_triplets(body)


def load_doc_file(filepath, verbose:bool = False):
    """
    Read a triplet-encoded document file into a dense matrix.
    Args:
        filepath: path to a file made of a 'dc wc nnz' header followed by
            'docId wordId count' lines (1-indexed)
        verbose: print a short summary once loaded

    Returns:
        DocumentMatrix holding a zero-initialised (dc, wc) float64 array with
        matrix[docId-1, wordId-1] = count for every valid triplet
    """
    filepath = _check_file(filepath)
    (dc, wc, nnz), triplets = _read_triplets(filepath)
    if dc < 0 or wc < 0:
        raise ConfigurationError(f"Negative matrix dimensions in header ({dc} x {wc})")

    # Later lines overwrite earlier ones for the same cell
    triplets = triplets.drop_duplicates(subset=['doc_id', 'word_id'], keep='last')
    in_range = triplets['doc_id'].between(1, dc) & triplets['word_id'].between(1, wc)
    n_skipped = int((~in_range).sum())
    if n_skipped > 0:
        warnings.warn(f"{n_skipped} triplet(s) outside the {dc} x {wc} matrix were skipped in {filepath}")
    triplets = triplets[in_range]

    matrix = coo_matrix((triplets['count'].to_numpy(dtype=np.float64),
                         (triplets['doc_id'].to_numpy() - 1, triplets['word_id'].to_numpy() - 1)),
                        shape=(dc, wc)).toarray()
    if verbose:
        print(f"Loaded {filepath}: {dc} documents x {wc} words, {triplets.shape[0]} non-zero entries ({nnz} declared)")
    return DocumentMatrix(data=np.ascontiguousarray(matrix), nnz_declared=nnz, n_skipped=n_skipped)


def load_words_file(filepath, wc:int):
    """
    Read a vocabulary file, one word per line, truncated to wc entries.
    Slots with no line in the file are left as None.
    """
    filepath = _check_file(filepath)
    words = [None] * wc
    try:
        with open(filepath, encoding='utf-8') as f:
            for i, line in enumerate(f):
                if i >= wc:
                    break
                words[i] = line.rstrip('\r\n')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f'Cannot read vocabulary file "{filepath}": {e}') from e
    return words


class Loader :

    def __init__(self, data_path, vocabulary_path = None, verbose:bool = False):
        self.data_path = Path(data_path)
        self.vocabulary_path = Path(vocabulary_path) if vocabulary_path is not None else None
        self.verbose = verbose
        self._load_matrix()
        self._load_vocabulary()

    def _load_matrix(self):
        self.document_matrix = load_doc_file(self.data_path, verbose=self.verbose)
        self.matrix = self.document_matrix.data
        self.dc, self.wc = self.matrix.shape

    def _load_vocabulary(self):
        if self.vocabulary_path is None :
            self.vocabulary = None
        else :
            self.vocabulary = load_words_file(self.vocabulary_path, self.wc)
            if self.verbose :
                n_missing = sum(w is None for w in self.vocabulary)
                print(f"Loaded vocabulary {self.vocabulary_path}: {self.wc - n_missing} of {self.wc} words")

    def to_frame(self):
        columns = [w if w is not None else f"#{i+1}" for i, w in enumerate(self.vocabulary)] if self.vocabulary is not None else [f"word_{i+1}" for i in range(self.wc)]
        index = [f"doc_{i+1}" for i in range(self.dc)]
        return pd.DataFrame(self.matrix, index=index, columns=columns)
