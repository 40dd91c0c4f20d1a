"""Loading commits and merging a branch into the current one."""

from __future__ import annotations

from pathlib import Path

from .branch import BranchManager
from .commit import Commit
from .history import _parse_commit
from .initialize import BLOBS_DIR, COMMITS_DIR, INDEX_FILE, RepoError


def load_commit(commit_hash: str) -> Commit:
    """Read and decode the commit object with the given hash."""
    try:
        data = (COMMITS_DIR / commit_hash).read_bytes()
    except OSError as exc:
        raise RepoError(f"failed to read commit object: {exc}") from exc
    try:
        return _parse_commit(data)
    except ValueError as exc:
        raise RepoError(f"failed to unmarshal commit: {exc}") from exc


def split_lines(text: str) -> list[str]:
    """Split on newlines, dropping the empty piece after a final newline."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _blob_to_path_map() -> dict[str, str]:
    """Map each staged blob hash to the path it was staged from."""
    try:
        text = INDEX_FILE.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as exc:
        raise RepoError(f"failed to read index: {exc}") from exc

    mapping: dict[str, str] = {}
    for line in split_lines(text):
        if not line:
            continue
        tokens = line.split()
        digest = tokens[0] if tokens else ""
        path = tokens[1] if len(tokens) > 1 else ""
        mapping[digest] = path
    return mapping


def merge_branches(target_branch: str) -> list[str]:
    """Write the files of the target branch's commit into the working directory.

    Returns the paths that were written.
    """
    manager = BranchManager(".")
    current_branch = manager.get_current_branch()
    if current_branch == target_branch:
        raise RepoError(f"cannot merge branch '{target_branch}' into itself")

    current_hash = manager.get_branch_commit(current_branch)
    target_hash = manager.get_branch_commit(target_branch)
    load_commit(current_hash)
    target_commit = load_commit(target_hash)

    blob_to_path = _blob_to_path_map()
    written: list[str] = []
    for blob in target_commit.blobs:
        blob_path = BLOBS_DIR / blob
        path = blob_to_path.get(blob)
        if path is None:
            try:
                blob_path.read_bytes()
            except OSError as exc:
                raise RepoError(f"failed to read blob: {exc}") from exc
            raise RepoError(f"failed to write file: no staged path for blob {blob}")

        try:
            content = blob_path.read_bytes()
        except OSError:
            content = b""
        try:
            with open(path, "wb") as handle:
                handle.write(content)
        except OSError as exc:
            raise RepoError(f"failed to write file: {exc}") from exc
        written.append(path)

    print("Merge completed successfully. No conflicts detected.")
    return written