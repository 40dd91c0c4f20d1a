import pytest

from kommito.branch import Branch, BranchManager
from kommito.commit import commit_staged
from kommito.initialize import HEAD_FILE, HEADS_DIR, INITIAL_HEAD, RepoError, init_repo


@pytest.fixture
def repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    init_repo()
    return tmp_path


@pytest.fixture
def bm(repo):
    return BranchManager(".")


def test_no_branches_initially(bm):
    assert bm.list_branches() == []


def test_missing_heads_dir_lists_nothing(tmp_path):
    assert BranchManager(tmp_path).list_branches() == []


def test_create_branch_records_head(bm):
    bm.create_branch("feature")
    assert bm.list_branches() == [Branch(name="feature", commit=INITIAL_HEAD)]


def test_create_duplicate(bm):
    bm.create_branch("feature")
    with pytest.raises(RepoError, match="branch 'feature' already exists"):
        bm.create_branch("feature")


def test_create_empty_name(bm):
    with pytest.raises(RepoError, match="cannot be empty"):
        bm.create_branch("")


def test_create_without_head(bm):
    HEAD_FILE.unlink()
    with pytest.raises(RepoError, match="failed to read HEAD"):
        bm.create_branch("feature")


def test_list_is_sorted_and_skips_directories(bm):
    bm.create_branch("zeta")
    bm.create_branch("alpha")
    (HEADS_DIR / "nested").mkdir()
    assert [branch.name for branch in bm.list_branches()] == ["alpha", "zeta"]


def test_current_branch_after_commit(bm):
    commit_hash = commit_staged("first")
    bm.create_branch("main")
    assert bm.get_current_branch() == "main"
    assert bm.get_branch_commit("main") == commit_hash


def test_not_on_any_branch(bm):
    with pytest.raises(RepoError, match="not on any branch"):
        bm.get_current_branch()


def test_switch_branch_moves_head(bm):
    first = commit_staged("first")
    bm.create_branch("old")
    second = commit_staged("second")
    bm.create_branch("new")
    assert HEAD_FILE.read_text(encoding="utf-8") == second
    bm.switch_branch("old")
    assert HEAD_FILE.read_text(encoding="utf-8") == first
    assert bm.get_current_branch() == "old"


def test_switch_missing_branch(bm):
    with pytest.raises(RepoError, match="branch 'ghost' does not exist"):
        bm.switch_branch("ghost")


def test_delete_current_branch_refused(bm):
    commit_staged("first")
    bm.create_branch("main")
    with pytest.raises(RepoError, match="cannot delete current branch"):
        bm.delete_branch("main")
    assert [branch.name for branch in bm.list_branches()] == ["main"]


def test_delete_other_branch(bm):
    commit_staged("first")
    bm.create_branch("old")
    commit_staged("second")
    bm.create_branch("main")
    bm.delete_branch("old")
    assert [branch.name for branch in bm.list_branches()] == ["main"]


def test_delete_missing_branch(bm):
    with pytest.raises(RepoError, match="branch 'ghost' does not exist"):
        bm.delete_branch("ghost")


def test_get_branch_commit_missing(bm):
    with pytest.raises(RepoError):
        bm.get_branch_commit("ghost")


def test_repo_path_other_than_cwd(tmp_path, monkeypatch):
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.chdir(project)
    init_repo()
    monkeypatch.chdir(tmp_path)
    manager = BranchManager(project)
    manager.create_branch("feature")
    assert (project / ".kommito" / "refs" / "heads" / "feature").read_text(
        encoding="utf-8"
    ) == INITIAL_HEAD
    assert manager.get_current_branch() == "feature"