"""Restoring the working directory to a commit or branch."""

from __future__ import annotations

import os
from contextlib import suppress

from .branch import BranchManager
from .commit import Commit
from .initialize import BLOBS_DIR, HEAD_FILE, RepoError
from .merge import _blob_to_path_map, load_commit
from .staging import is_system_file


def checkout_target(target: str) -> Commit:
    """Restore staged files and, for a branch name, move HEAD to it."""
    manager = BranchManager(".")
    try:
        branches = manager.list_branches()
    except RepoError:
        branches = []
    branch = next((b for b in branches if b.name == target), None)
    commit_hash = branch.commit if branch is not None else target

    try:
        commit = load_commit(commit_hash)
    except RepoError as exc:
        raise RepoError(f"could not find commit or branch '{target}': {exc}") from exc

    files = {path: digest for digest, path in _blob_to_path_map().items()}

    try:
        with os.scandir(".") as it:
            entries = list(it)
    except OSError as exc:
        raise RepoError(f"failed to read directory: {exc}") from exc
    for entry in entries:
        if entry.is_dir(follow_symlinks=False) or is_system_file(entry.name):
            continue
        if entry.name not in files:
            with suppress(OSError):
                os.remove(entry.name)

    for path, digest in files.items():
        try:
            content = (BLOBS_DIR / digest).read_bytes()
        except OSError as exc:
            raise RepoError(f"failed to read blob for {path}: {exc}") from exc
        try:
            with open(path, "wb") as handle:
                handle.write(content)
        except OSError as exc:
            raise RepoError(f"failed to restore file {path}: {exc}") from exc

    if branch is not None:
        try:
            HEAD_FILE.write_bytes(
                branch.commit.encode("utf-8", errors="surrogateescape")
            )
        except OSError as exc:
            raise RepoError(f"failed to update HEAD: {exc}") from exc

    print(f"Checked out {target}")
    return commit