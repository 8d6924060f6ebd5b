"""
Unit tests for FileWalkerImpl.
Verifies recursion, symlink safety, skipping of unreadable entries and root validation.
"""
import os
import sys
import pytest

from clonesweep.core import FileWalkerImpl, InvalidRootError

symlinks = pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")


def walk_paths(root, **kwargs):
    walker = FileWalkerImpl(str(root), **kwargs)
    return [r.path for r in walker.walk()], walker


class TestFileWalkerImpl:

    def test_finds_all_files_recursively(self, test_files, temp_dir):
        paths, _ = walk_paths(temp_dir)

        assert sorted(paths) == sorted(str(p) for p in test_files.values())

    def test_records_carry_size_and_metadata(self, hi_bye_files, temp_dir):
        walker = FileWalkerImpl(str(temp_dir))
        records = {r.name: r for r in walker.walk()}

        assert records["a.txt"].size == 2
        assert records["c.txt"].size == 3
        assert records["a.txt"].extension == "txt"
        assert os.path.isabs(records["a.txt"].path)

    def test_includes_empty_files(self, temp_dir):
        (temp_dir / "empty").write_bytes(b"")
        paths, _ = walk_paths(temp_dir)

        assert paths == [str(temp_dir / "empty")]

    def test_min_size_filter(self, hi_bye_files, temp_dir):
        paths, _ = walk_paths(temp_dir, min_size=3)

        assert paths == [str(hi_bye_files["c"])]

    def test_excluded_dirs_not_entered(self, test_files, temp_dir):
        paths, _ = walk_paths(temp_dir, excluded_dirs=[str(temp_dir / "subdir")])

        assert str(test_files["sub_dup"]) not in paths
        assert str(test_files["dup1_a"]) in paths

    def test_system_trash_not_entered(self, temp_dir):
        trash = temp_dir / ".Trash-1000" / "files"
        trash.mkdir(parents=True)
        (trash / "old.txt").write_bytes(b"old")
        (temp_dir / "kept.txt").write_bytes(b"new")

        paths, _ = walk_paths(temp_dir)

        assert paths == [str(temp_dir / "kept.txt")]

    @symlinks
    def test_symlink_cycle_terminates_and_reports_real_files_once(self, temp_dir):
        inner = temp_dir / "a" / "b"
        inner.mkdir(parents=True)
        (inner / "real.txt").write_bytes(b"data")
        os.symlink(str(temp_dir), str(inner / "loop"))
        os.symlink(str(temp_dir / "a"), str(temp_dir / "a_link"))

        paths, _ = walk_paths(temp_dir)

        assert paths == [str(inner / "real.txt")]

    @symlinks
    def test_symlinked_files_are_not_reported(self, temp_dir):
        target = temp_dir / "target.txt"
        target.write_bytes(b"x")
        os.symlink(str(target), str(temp_dir / "alias.txt"))

        paths, walker = walk_paths(temp_dir)

        assert paths == [str(target)]
        assert walker.skipped == 0

    @symlinks
    def test_broken_links_are_skipped_and_counted(self, temp_dir):
        os.symlink(str(temp_dir / "nowhere"), str(temp_dir / "dangling"))
        (temp_dir / "ok.txt").write_bytes(b"ok")

        paths, walker = walk_paths(temp_dir)

        assert paths == [str(temp_dir / "ok.txt")]
        assert walker.skipped == 1

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced for root / on Windows"
    )
    def test_unreadable_directory_is_skipped_not_fatal(self, temp_dir):
        locked = temp_dir / "locked"
        locked.mkdir()
        (locked / "secret.txt").write_bytes(b"s")
        (temp_dir / "open.txt").write_bytes(b"o")
        locked.chmod(0)
        try:
            paths, walker = walk_paths(temp_dir)
        finally:
            locked.chmod(0o755)

        assert paths == [str(temp_dir / "open.txt")]
        assert walker.skipped >= 1

    def test_stopped_flag_stops_walk(self, test_files, temp_dir):
        walker = FileWalkerImpl(str(temp_dir))

        assert list(walker.walk(stopped_flag=lambda: True)) == []

    def test_progress_reports_final_count(self, hi_bye_files, temp_dir):
        calls = []
        list(FileWalkerImpl(str(temp_dir)).walk(progress_callback=lambda *a: calls.append(a)))

        assert calls[-1] == ("Scanning", 3, None)


class TestRootValidation:

    def test_missing_root(self, temp_dir):
        with pytest.raises(InvalidRootError, match="does not exist"):
            FileWalkerImpl(str(temp_dir / "nope")).validate_root()

    def test_file_as_root(self, hi_bye_files):
        with pytest.raises(InvalidRootError, match="Not a directory"):
            FileWalkerImpl(str(hi_bye_files["a"])).validate_root()

    def test_walk_validates_root(self, temp_dir):
        with pytest.raises(InvalidRootError):
            list(FileWalkerImpl(str(temp_dir / "nope")).walk())
