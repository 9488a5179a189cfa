import numpy as np
import pytest


@pytest.fixture
def small_matrix():
    return np.array([[1, 0, 0],
                     [1, 0, 0],
                     [0, 1, 0],
                     [0, 0, 1]], dtype=np.float64)


@pytest.fixture
def doc_file(tmp_path):
    path = tmp_path / "docword.txt"
    path.write_text("4 3 4\n"
                    "1 1 1\n"
                    "2 1 1\n"
                    "3 2 1\n"
                    "4 3 1\n")
    return path


@pytest.fixture
def vocabulary_file(tmp_path):
    path = tmp_path / "vocabulary"
    path.write_text("a\nb\nc\n")
    return path
