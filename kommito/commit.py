"""Recording staged files as commits."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .initialize import COMMITS_DIR, CONFIG_FILE, HEAD_FILE, INDEX_FILE, RepoError

DEFAULT_AUTHOR = "Kommito User"

_HTML_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass
class Commit:
    """A commit object: who, when, why and which blobs."""

    author: str
    timestamp: str
    message: str
    blobs: list[str] = field(default_factory=list)


def _encode(commit: Commit) -> bytes:
    payload = {
        "author": commit.author,
        "timestamp": commit.timestamp,
        "message": commit.message,
        "blobs": commit.blobs or None,
    }
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8", errors="surrogateescape")


def _now_rfc3339() -> str:
    now = datetime.now().astimezone().replace(microsecond=0)
    text = now.isoformat()
    if now.utcoffset() == timedelta(0):
        text = text[:-6] + "Z"
    return text


def _read_author() -> str:
    try:
        config = json.loads(CONFIG_FILE.read_bytes())
    except (OSError, ValueError):
        return DEFAULT_AUTHOR
    if isinstance(config, dict):
        name = config.get("name")
        if isinstance(name, str) and name:
            return name
    return DEFAULT_AUTHOR


def commit_staged(message: str) -> str:
    """Write a commit of every staged blob, point HEAD at it and return its hash."""
    try:
        index_text = INDEX_FILE.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as exc:
        raise RepoError(f"failed to read index: {exc}") from exc

    blobs = [line.split(" ", 1)[0] for line in index_text.strip().split("\n") if line]

    commit = Commit(
        author=_read_author(),
        timestamp=_now_rfc3339(),
        message=message,
        blobs=blobs,
    )
    data = _encode(commit)
    commit_hash = hashlib.sha1(data).hexdigest()

    try:
        (COMMITS_DIR / commit_hash).write_bytes(data)
    except OSError as exc:
        raise RepoError(f"failed to write commit object: {exc}") from exc

    try:
        HEAD_FILE.write_bytes(commit_hash.encode("ascii"))
    except OSError as exc:
        raise RepoError(f"failed to update HEAD: {exc}") from exc

    return commit_hash