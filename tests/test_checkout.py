import hashlib
from pathlib import Path

import pytest

from kommito.branch import BranchManager
from kommito.checkout import checkout_target
from kommito.commit import commit_staged
from kommito.initialize import BLOBS_DIR, HEAD_FILE, RepoError, init_repo
from kommito.staging import add_file


@pytest.fixture
def repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    init_repo()
    Path("a.txt").write_text("one")
    add_file("a.txt")
    commit_hash = commit_staged("first")
    BranchManager(".").create_branch("first")
    return commit_hash


def test_checkout_branch_restores_files_and_head(repo, capsys):
    HEAD_FILE.write_text("other")
    Path("a.txt").write_text("edited")
    commit = checkout_target("first")
    assert commit.message == "first"
    assert Path("a.txt").read_text() == "one"
    assert HEAD_FILE.read_text() == repo
    assert "Checked out first" in capsys.readouterr().out


def test_checkout_hash_leaves_head(repo):
    HEAD_FILE.write_text("other")
    Path("a.txt").write_text("edited")
    checkout_target(repo)
    assert Path("a.txt").read_text() == "one"
    assert HEAD_FILE.read_text() == "other"


def test_checkout_removes_untracked_files(repo):
    Path("extra.txt").write_text("x")
    commit = checkout_target("first")
    assert commit.blobs == [hashlib.sha1(b"one").hexdigest()]
    assert not Path("extra.txt").exists()
    assert Path("a.txt").exists()


def test_checkout_keeps_directories_and_system_files(repo):
    Path("subdir").mkdir()
    Path("Cookies").write_text("keep")
    commit = checkout_target("first")
    assert commit.message == "first"
    assert Path("subdir").is_dir()
    assert Path("Cookies").read_text() == "keep"


def test_checkout_unknown_target(repo):
    with pytest.raises(RepoError, match="could not find commit or branch 'nope'"):
        checkout_target("nope")


def test_checkout_missing_blob(repo):
    (BLOBS_DIR / hashlib.sha1(b"one").hexdigest()).unlink()
    with pytest.raises(RepoError, match="failed to read blob for a.txt"):
        checkout_target("first")