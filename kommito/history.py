"""Showing the commit HEAD points at."""

from __future__ import annotations

import json

from .commit import Commit
from .initialize import COMMITS_DIR, HEAD_FILE, RepoError


def _parse_commit(data: bytes) -> Commit:
    payload = json.loads(data)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValueError("commit object is not a JSON object")
    blobs = payload.get("blobs") or []
    fields = {
        "author": payload.get("author") or "",
        "timestamp": payload.get("timestamp") or "",
        "message": payload.get("message") or "",
    }
    if not all(isinstance(value, str) for value in fields.values()):
        raise ValueError("commit fields must be strings")
    if not isinstance(blobs, list) or not all(isinstance(b, str) for b in blobs):
        raise ValueError("commit blobs must be a list of strings")
    return Commit(blobs=blobs, **fields)


def log_commits() -> Commit:
    """Print the commit that HEAD refers to and return it."""
    try:
        commit_hash = HEAD_FILE.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as exc:
        raise RepoError(f"failed to read HEAD: {exc}") from exc

    try:
        data = (COMMITS_DIR / commit_hash).read_bytes()
    except OSError as exc:
        raise RepoError(f"failed to read commit: {exc}") from exc

    try:
        commit = _parse_commit(data)
    except ValueError as exc:
        raise RepoError(f"failed to parse commit: {exc}") from exc

    print(
        f"🕐 Commit: {commit_hash}\n"
        f"📜 Message: {commit.message}\n"
        f"👤 Author: {commit.author}\n"
        f"🕰️ Date: {commit.timestamp}"
    )
    return commit