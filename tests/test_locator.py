"""
Test cases for resolving the watch target.

Tests cover:
- Picking the most recently modified match
- Directory arguments
- Tie-breaking on equal modification times
- Fallback to the literal path when nothing matches
"""
from __future__ import annotations
import os
import pytest
from tailwatch.locator import find_last_file_like, resolve_target


def _touch(path, mtime_ns: int) -> None:
    path.write_text("x\n")
    os.utime(path, ns=(mtime_ns, mtime_ns))


class TestFindLastFileLike:
    """Resolution of paths, folders and patterns."""

    def test_literal_file(self, tmp_path):
        """A literal existing file resolves to itself."""
        target = tmp_path / "app.log"
        target.write_text("x\n")

        assert find_last_file_like(str(target)) == str(target)

    def test_pattern_picks_newest(self, tmp_path):
        """Among matches the newest modification time wins."""
        _touch(tmp_path / "app-1.log", 1_000_000_000_000_000_000)
        _touch(tmp_path / "app-2.log", 3_000_000_000_000_000_000)
        _touch(tmp_path / "app-3.log", 2_000_000_000_000_000_000)
        _touch(tmp_path / "other.txt", 4_000_000_000_000_000_000)

        found = find_last_file_like(str(tmp_path / "app-*.log"))
        assert found == str(tmp_path / "app-2.log")

    def test_directory_means_any_file(self, tmp_path):
        """A directory argument considers every file inside it."""
        _touch(tmp_path / "a.log", 1_000_000_000_000_000_000)
        _touch(tmp_path / "b.txt", 2_000_000_000_000_000_000)
        (tmp_path / "sub").mkdir()

        assert find_last_file_like(str(tmp_path)) == str(tmp_path / "b.txt")

    def test_subdirectories_are_not_candidates(self, tmp_path):
        """Only regular files can be picked."""
        (tmp_path / "logs.d").mkdir()
        assert find_last_file_like(str(tmp_path / "logs*")) is None

    def test_equal_mtime_breaks_on_name(self, tmp_path):
        """Equal timestamps pick the greatest file name."""
        same = 1_500_000_000_000_000_000
        _touch(tmp_path / "b.log", same)
        _touch(tmp_path / "c.log", same)
        _touch(tmp_path / "a.log", same)

        assert find_last_file_like(str(tmp_path / "*.log")) == str(tmp_path / "c.log")

    def test_no_match_in_existing_folder(self, tmp_path):
        """An existing folder without matches gives None."""
        assert find_last_file_like(str(tmp_path / "*.log")) is None

    def test_missing_folder(self, tmp_path):
        """A missing parent folder is not an error."""
        assert find_last_file_like(str(tmp_path / "nope" / "app.log")) is None


class TestResolveTarget:
    """The session's watch target."""

    def test_found_target_is_not_provisional(self, tmp_path):
        """A match is watched directly."""
        target = tmp_path / "app.log"
        target.write_text("x\n")

        watch = resolve_target(str(target))
        assert watch.path == str(target)
        assert watch.provisional is False

    def test_missing_target_falls_back_to_literal(self, tmp_path):
        """A miss waits for the literal path, made absolute."""
        missing = tmp_path / "nope" / "app.log"

        watch = resolve_target(str(missing))
        assert watch.path == os.path.abspath(str(missing))
        assert watch.provisional is True

    def test_relative_path_becomes_absolute(self, tmp_path, monkeypatch):
        """Relative arguments are resolved against the working directory."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "rel.log").write_text("x\n")

        watch = resolve_target("rel.log")
        assert os.path.isabs(watch.path)
        assert watch.path == os.path.abspath("rel.log")

    def test_literal_name_with_glob_characters(self, tmp_path):
        """An existing file is found even when its name looks like a glob."""
        target = tmp_path / "app[1].log"
        target.write_text("x\n")

        assert find_last_file_like(str(target)) == str(target)
        watch = resolve_target(str(target))
        assert watch.path == str(target)
        assert watch.provisional is False

    def test_symlink_is_not_resolved(self, tmp_path):
        """A symlinked log is watched through its link, not its current target."""
        real = tmp_path / "app.log.1"
        real.write_text("x\n")
        link = tmp_path / "app.log"
        try:
            os.symlink(real, link)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported here")

        assert find_last_file_like(str(link)) == str(link)
        assert find_last_file_like(str(tmp_path / "*.log")) == str(link)
        assert resolve_target(str(link)).path == str(link)
