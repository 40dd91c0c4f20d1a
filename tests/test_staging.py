import hashlib

import pytest

from kommito.initialize import BLOBS_DIR, INDEX_FILE, RepoError, init_repo
from kommito.staging import add_file, is_system_file


@pytest.fixture
def repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    init_repo()
    return tmp_path


def _index_lines():
    return INDEX_FILE.read_text(encoding="utf-8").splitlines()


@pytest.mark.parametrize(
    "name, expected",
    [
        (".git", True),
        (".KOMMITO", True),
        ("ntuser.dat", True),
        ("Kommito", True),
        ("My Documents", True),
        ("notes.txt", False),
        ("kommito.txt", False),
    ],
)
def test_is_system_file(name, expected):
    assert is_system_file(name) is expected


def test_add_single_file_writes_blob_and_index(repo):
    content = b"hello world\n"
    (repo / "a.txt").write_bytes(content)
    assert add_file("a.txt") == ["a.txt"]
    digest = hashlib.sha1(content).hexdigest()
    assert (BLOBS_DIR / digest).read_bytes() == content
    assert _index_lines() == [f"{digest} a.txt"]


def test_empty_file_hash(repo):
    (repo / "empty").write_bytes(b"")
    add_file("empty")
    assert _index_lines() == ["da39a3ee5e6b4b0d3255bfef95601890afd80709 empty"]


def test_adding_twice_appends(repo):
    (repo / "a.txt").write_bytes(b"one")
    add_file("a.txt")
    (repo / "a.txt").write_bytes(b"two")
    add_file("a.txt")
    lines = _index_lines()
    assert len(lines) == 2
    assert lines[0] != lines[1]
    assert all(line.endswith(" a.txt") for line in lines)


def test_add_dot_skips_dirs_and_system_files(repo, capsys):
    (repo / "b.txt").write_bytes(b"b")
    (repo / "a.txt").write_bytes(b"a")
    (repo / "sub").mkdir()
    (repo / "sub" / "inner.txt").write_bytes(b"x")
    (repo / "NTUSER.DAT").write_bytes(b"sys")
    assert add_file(".") == ["a.txt", "b.txt"]
    assert [line.split(" ", 1)[1] for line in _index_lines()] == ["a.txt", "b.txt"]
    assert "Successfully added 2 files!" in capsys.readouterr().out


def test_add_dot_with_nothing(repo, capsys):
    assert add_file(".") == []
    assert "No files to add!" in capsys.readouterr().out


def test_add_missing_file(repo):
    with pytest.raises(RepoError, match="failed to open file"):
        add_file("missing.txt")


def test_add_system_file_rejected(repo):
    (repo / "Cookies").write_bytes(b"c")
    with pytest.raises(RepoError, match="skipping system file: Cookies"):
        add_file("Cookies")


def test_add_without_repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"a")
    with pytest.raises(RepoError, match="failed to write blob"):
        add_file("a.txt")


def test_add_dot_without_repo_reports_errors(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"a")
    assert add_file(".") == []
    out = capsys.readouterr().out
    assert "Could not add a.txt" in out
    assert "No files to add!" in out