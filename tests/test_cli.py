"""
Test the command line entry point
"""

from spkmeans_lib.cli import main


def test_missing_data_file(tmp_path, capsys):
    missing = tmp_path / "data"
    assert main([str(missing)]) == 1
    assert f'Error: file "{missing}" does not exist.' in capsys.readouterr().out


def test_full_run(doc_file, vocabulary_file, capsys):
    assert main([str(doc_file), "2", "1", "--vocabulary", str(vocabulary_file), "--top", "1"]) == 0
    out = capsys.readouterr().out
    assert 'Running SPK Means on' in out
    assert "with k=2 (1 threads)." in out
    assert "Partition #1:\n   a\n" in out


def test_run_without_vocabulary(doc_file, tmp_path, capsys):
    assert main([str(doc_file), "2", "--vocabulary", str(tmp_path / "none")]) == 0
    assert "skipping top words" in capsys.readouterr().out


def test_invalid_k_reported(doc_file, capsys):
    assert main([str(doc_file), "9"]) == 1
    assert "Error:" in capsys.readouterr().out


def test_unreadable_vocabulary(doc_file, tmp_path, capsys):
    vocabulary = tmp_path / "latin1"
    vocabulary.write_bytes(b"caf\xe9\nb\nc\n")
    assert main([str(doc_file), "2", "1", "--vocabulary", str(vocabulary)]) == 1
    assert "Cannot read vocabulary file" in capsys.readouterr().out
