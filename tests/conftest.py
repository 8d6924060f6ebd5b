"""
Shared fixtures for clonesweep tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def hi_bye_files(temp_dir) -> Dict[str, Path]:
    """
    a.txt and b.txt share content "hi" (2 bytes); c.txt holds "bye" (3 bytes).
    """
    files = {
        "a": temp_dir / "a.txt",
        "b": temp_dir / "b.txt",
        "c": temp_dir / "c.txt",
    }
    files["a"].write_bytes(b"hi")
    files["b"].write_bytes(b"hi")
    files["c"].write_bytes(b"bye")
    return files


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for duplicate scenarios:
    - 3 identical 1KB files (one in a subdirectory)
    - 2 identical 200KB files (bigger than one hash chunk)
    - 2 files of 200KB with same head but different tail (front hash collides)
    - 2 files of 2KB with different content (size collides, digest differs)
    - 1 unique file
    """
    files = {}

    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.bin"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)

    big = bytes(range(256)) * 800  # 204800 bytes
    files["big_a"] = temp_dir / "big_a.dat"
    files["big_b"] = temp_dir / "big_b.dat"
    files["big_a"].write_bytes(big)
    files["big_b"].write_bytes(big)

    head = b"H" * (100 * 1024)
    files["tail_x"] = temp_dir / "tail_x.dat"
    files["tail_y"] = temp_dir / "tail_y.dat"
    files["tail_x"].write_bytes(head + b"X" * (100 * 1024))
    files["tail_y"].write_bytes(head + b"Y" * (100 * 1024))

    files["same_size_1"] = temp_dir / "same_size_1.txt"
    files["same_size_2"] = temp_dir / "same_size_2.txt"
    files["same_size_1"].write_bytes(b"C" * 2048)
    files["same_size_2"].write_bytes(b"D" * 2048)

    files["unique"] = temp_dir / "unique.txt"
    files["unique"].write_bytes(b"E" * 3000)

    return files
