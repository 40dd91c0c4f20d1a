"""Creation of the on-disk repository layout."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

REPO_DIR = Path(".kommito")
HEAD_FILE = REPO_DIR / "HEAD"
INDEX_FILE = REPO_DIR / "index"
CONFIG_FILE = REPO_DIR / "config.json"
COMMITS_DIR = REPO_DIR / "objects" / "commits"
BLOBS_DIR = REPO_DIR / "objects" / "blobs"
HEADS_DIR = REPO_DIR / "refs" / "heads"
INITIAL_HEAD = "ref: refs/heads/main"


class RepoError(Exception):
    """Raised when a repository operation cannot be completed."""


@dataclass
class Config:
    """Repository configuration stored in config.json."""

    name: str = "kommito"
    version: str = "0.1.0"


def _write(path: Path, data: bytes, what: str) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise RepoError(f"failed to create {what}: {exc}") from exc


def init_repo() -> None:
    """Create a fresh repository in the current directory."""
    try:
        REPO_DIR.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RepoError(f"failed to create .kommito directory: {exc}") from exc

    for directory in (COMMITS_DIR, BLOBS_DIR, HEADS_DIR):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepoError(
                f"failed to create directory {directory.as_posix()}: {exc}"
            ) from exc

    _write(HEAD_FILE, INITIAL_HEAD.encode("utf-8"), "HEAD file")
    _write(INDEX_FILE, b"", "index file")
    config_text = json.dumps(asdict(Config()), indent=2, ensure_ascii=False)
    _write(CONFIG_FILE, config_text.encode("utf-8"), "config.json")