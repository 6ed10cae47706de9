"""Tests for the local filesystem source."""

from __future__ import annotations

import os
import sys

import pytest

from hostsweep.models.finding import ScanFailure
from hostsweep.sources.filesystem import FileDescriptor, LocalFileSystem


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "top.txt").write_text("x")
    (tmp_path / "sub" / "deeper").mkdir(parents=True)
    (tmp_path / "sub" / "inner.exe").write_bytes(b"MZ")
    (tmp_path / "sub" / "deeper" / "leaf.dat").write_bytes(b"")
    return tmp_path


def test_walk_is_recursive(tree):
    items = list(LocalFileSystem().walk_files(str(tree)))

    assert all(isinstance(i, FileDescriptor) for i in items)
    assert sorted(os.path.relpath(i.path, tree) for i in items) == [
        os.path.join("sub", "deeper", "leaf.dat"),
        os.path.join("sub", "inner.exe"),
        "top.txt",
    ]


def test_walk_is_restartable(tree):
    fs = LocalFileSystem()
    first = [i.path for i in fs.walk_files(str(tree))]
    second = [i.path for i in fs.walk_files(str(tree))]
    assert first == second


def test_descriptor_fields(tree):
    fs = LocalFileSystem()
    inner = next(i for i in fs.walk_files(str(tree)) if i.name == "inner.exe")

    assert inner.path == str(tree / "sub" / "inner.exe")
    assert inner.extension == ".exe"
    assert inner.hidden is False
    assert inner.created is not None
    assert inner.last_accessed is not None


@pytest.mark.skipif(os.name == "nt", reason="dot-file convention is POSIX only")
def test_dot_files_are_hidden_on_posix(tmp_path):
    (tmp_path / ".cheatrc").write_text("x")

    (item,) = list(LocalFileSystem().walk_files(str(tmp_path)))

    assert item.hidden is True


@pytest.mark.skipif(os.name != "nt", reason="Windows-only")
def test_hidden_attribute_on_windows(tmp_path):
    import ctypes

    path = tmp_path / "hidden.txt"
    path.write_text("x")
    ctypes.windll.kernel32.SetFileAttributesW(str(path), 0x2)

    (item,) = list(LocalFileSystem().walk_files(str(tmp_path)))

    assert item.hidden is True


@pytest.mark.skipif(
    os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
    reason="permission bits are not enforced here",
)
def test_unreadable_subdirectory_is_skipped_silently(tmp_path):
    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "secret.txt").write_text("x")
    (tmp_path / "open.txt").write_text("x")
    locked.chmod(0)
    try:
        items = list(LocalFileSystem().walk_files(str(tmp_path)))
    finally:
        locked.chmod(0o755)

    assert [i.name for i in items] == ["open.txt"]


def test_missing_root_yields_failure(tmp_path):
    items = list(LocalFileSystem().walk_files(str(tmp_path / "gone")))

    assert len(items) == 1
    assert isinstance(items[0], ScanFailure)


def test_list_files_filters_suffix_and_depth(tmp_path):
    (tmp_path / "CHEAT.EXE-1.pf").write_bytes(b"")
    (tmp_path / "readme.txt").write_text("x")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "X.pf").write_bytes(b"")

    items = list(LocalFileSystem().list_files(str(tmp_path), ".pf"))

    assert [i.name for i in items] == ["CHEAT.EXE-1.pf"]


def test_exists(tmp_path):
    path = tmp_path / "f.txt"
    path.write_text("x")
    fs = LocalFileSystem()

    assert fs.exists(str(path))
    path.unlink()
    assert not fs.exists(str(path))
    assert fs.is_dir(str(tmp_path))


def test_drives_are_listed():
    drives = LocalFileSystem().drives()
    assert isinstance(drives, list)
    assert len(drives) == len(set(drives))


@pytest.mark.skipif(sys.platform in ("win32", "darwin"), reason="needs byte-oriented file names")
def test_undecodable_name_is_walked(tmp_path):
    with open(os.path.join(os.fsencode(tmp_path), b"hack\xff.txt"), "wb"):
        pass

    (item,) = list(LocalFileSystem().walk_files(str(tmp_path)))

    assert item.name == "hack\udcff.txt"


@pytest.fixture
def bad_timestamps(monkeypatch):
    """Make metadata conversion fail for files named old.* like pre-1970 NTFS times do."""
    original = FileDescriptor.from_stat

    def from_stat(cls, path, st):
        name = os.path.basename(path)
        if name == "old.txt":
            raise OSError(22, "Invalid argument")
        if name == "old.pf":
            raise ValueError("year 0 is out of range")
        return original(path, st)

    monkeypatch.setattr(FileDescriptor, "from_stat", classmethod(from_stat))


def test_bad_timestamp_fails_only_that_file(tmp_path, bad_timestamps):
    (tmp_path / "old.txt").write_text("x")
    (tmp_path / "new.txt").write_text("x")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "later.txt").write_text("x")

    items = list(LocalFileSystem().walk_files(str(tmp_path)))

    failures = [i for i in items if isinstance(i, ScanFailure)]
    assert failures == [ScanFailure(subject=str(tmp_path / "old.txt"), message="Invalid argument")]
    assert sorted(i.name for i in items if isinstance(i, FileDescriptor)) == ["later.txt", "new.txt"]


def test_bad_timestamp_in_listing(tmp_path, bad_timestamps):
    (tmp_path / "old.pf").write_bytes(b"")
    (tmp_path / "CHEAT.EXE-1.pf").write_bytes(b"")

    items = list(LocalFileSystem().list_files(str(tmp_path), ".pf"))

    assert ScanFailure(subject=str(tmp_path / "old.pf"), message="year 0 is out of range") in items
    assert [i.name for i in items if isinstance(i, FileDescriptor)] == ["CHEAT.EXE-1.pf"]
