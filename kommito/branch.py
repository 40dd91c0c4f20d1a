"""Branches stored as files under refs/heads."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .initialize import RepoError


@dataclass
class Branch:
    """A branch name and the HEAD content it records."""

    name: str
    commit: str


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


class BranchManager:
    """Creates, lists, switches and deletes branches of one repository."""

    def __init__(self, repo_path):
        self.repo_path = Path(repo_path)

    @property
    def _head_path(self) -> Path:
        return self.repo_path / ".kommito" / "HEAD"

    @property
    def _heads_path(self) -> Path:
        return self.repo_path / ".kommito" / "refs" / "heads"

    def _read_head(self) -> bytes:
        try:
            return self._head_path.read_bytes()
        except OSError as exc:
            raise RepoError(f"failed to read HEAD: {exc}") from exc

    def create_branch(self, name: str) -> None:
        """Create a branch recording the current HEAD."""
        if not name:
            raise RepoError("branch name cannot be empty")
        if any(branch.name == name for branch in self.list_branches()):
            raise RepoError(f"branch '{name}' already exists")

        head = self._read_head()
        branch_path = self._heads_path / name
        try:
            branch_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepoError(f"failed to create branch directory: {exc}") from exc
        try:
            branch_path.write_bytes(head)
        except OSError as exc:
            raise RepoError(f"failed to create branch: {exc}") from exc

    def switch_branch(self, name: str) -> None:
        """Point HEAD at what the named branch records."""
        branch_path = self._heads_path / name
        if not branch_path.exists():
            raise RepoError(f"branch '{name}' does not exist")
        try:
            content = branch_path.read_bytes()
        except OSError as exc:
            raise RepoError(f"failed to read branch: {exc}") from exc
        try:
            self._head_path.write_bytes(content)
        except OSError as exc:
            raise RepoError(f"failed to switch branch: {exc}") from exc

    def list_branches(self) -> list[Branch]:
        """Return every branch, sorted by name."""
        try:
            with os.scandir(self._heads_path) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise RepoError(f"failed to read branches: {exc}") from exc

        branches = []
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                continue
            try:
                commit = Path(entry.path).read_bytes()
            except OSError as exc:
                raise RepoError(
                    f"failed to read branch '{entry.name}': {exc}"
                ) from exc
            branches.append(Branch(name=entry.name, commit=_decode(commit)))
        return branches

    def delete_branch(self, name: str) -> None:
        """Remove a branch unless HEAD currently matches it."""
        branch_path = self._heads_path / name
        if not branch_path.exists():
            raise RepoError(f"branch '{name}' does not exist")
        head = self._read_head()
        try:
            content = branch_path.read_bytes()
        except OSError as exc:
            raise RepoError(f"failed to read branch: {exc}") from exc
        if head == content:
            raise RepoError("cannot delete current branch")
        try:
            branch_path.unlink()
        except OSError as exc:
            raise RepoError(f"failed to delete branch: {exc}") from exc

    def get_current_branch(self) -> str:
        """Return the first branch whose record matches HEAD."""
        head = _decode(self._read_head())
        for branch in self.list_branches():
            if branch.commit == head:
                return branch.name
        raise RepoError("not on any branch")

    def get_branch_commit(self, name: str) -> str:
        """Return what the named branch records."""
        try:
            return _decode((self._heads_path / name).read_bytes())
        except OSError as exc:
            raise RepoError(str(exc)) from exc