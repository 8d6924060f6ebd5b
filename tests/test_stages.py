"""
Tests for the pipeline stages: SizeStage, FrontHashStage, DigestStage.
"""
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from clonesweep.core import (
    SizeStage, FrontHashStage, DigestStage, FileGrouperImpl, FileWalkerImpl,
    XXHashFrontHasherImpl, DuplicateGroup, ScanStats, size_only_digest
)


@pytest.fixture
def executor():
    with ThreadPoolExecutor(max_workers=2) as pool:
        yield pool


def walk(root):
    return list(FileWalkerImpl(str(root)).walk())


class TestSizeStage:

    def test_groups_carry_size_sentinel(self, hi_bye_files, temp_dir):
        groups = SizeStage(FileGrouperImpl()).process(walk(temp_dir))

        assert len(groups) == 1
        assert groups[0].digest == size_only_digest(2)
        assert {f.path for f in groups[0].files} == {str(hi_bye_files["a"]), str(hi_bye_files["b"])}

    def test_updates_stats(self, hi_bye_files, temp_dir):
        stats = ScanStats()
        SizeStage(FileGrouperImpl()).process(walk(temp_dir), stats=stats)

        assert stats.stage_stats["Size grouping"]["groups"] == 1
        assert stats.stage_stats["Size grouping"]["files"] == 3

    def test_stopped_returns_empty(self, hi_bye_files, temp_dir):
        assert SizeStage(FileGrouperImpl()).process(walk(temp_dir), stopped_flag=lambda: True) == []


class TestFrontHashStage:

    def test_small_buckets_pass_through_without_reading(self, executor):
        front_hasher = Mock(chunk_size=1024)
        grouper = FileGrouperImpl(front_hasher=front_hasher)
        group = DuplicateGroup(digest=size_only_digest(10), size=10, files=[])

        result = FrontHashStage(grouper).process([group], executor)

        assert result == [group]
        front_hasher.compute_front_hash.assert_not_called()

    def test_prunes_large_files_with_different_heads(self, test_files, temp_dir, executor):
        grouper = FileGrouperImpl(front_hasher=XXHashFrontHasherImpl(chunk_size=64 * 1024))
        candidates = SizeStage(grouper).process(walk(temp_dir))

        result = FrontHashStage(grouper).process(candidates, executor)
        paths = [{f.path for f in g.files} for g in result]

        # All four 200KB files share a size; the prefilter splits them by head only
        assert {str(test_files["tail_x"]), str(test_files["tail_y"])} in paths
        assert {str(test_files["big_a"]), str(test_files["big_b"])} in paths
        # 2KB files fit in one chunk and pass through as one candidate set
        assert {str(test_files["same_size_1"]), str(test_files["same_size_2"])} in paths


class TestDigestStage:

    def test_only_identical_content_survives(self, test_files, temp_dir, executor):
        grouper = FileGrouperImpl()
        candidates = SizeStage(grouper).process(walk(temp_dir))
        candidates = FrontHashStage(grouper).process(candidates, executor)

        result = DigestStage(grouper).process(candidates, executor)
        paths = sorted(sorted(f.path for f in g.files) for g in result)

        assert paths == sorted([
            sorted([str(test_files["dup1_a"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])]),
            sorted([str(test_files["big_a"]), str(test_files["big_b"])]),
        ])
        assert all(g.is_verified for g in result)
        assert all(len(g.digest) == 64 for g in result)
