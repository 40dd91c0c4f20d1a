"""Staging files into the index."""

from __future__ import annotations

import hashlib
import os

from .initialize import BLOBS_DIR, INDEX_FILE, RepoError

_SYSTEM_FILES = frozenset(
    name.lower()
    for name in (
        ".git",
        ".kommito",
        "Application Data",
        "Cookies",
        "Local Settings",
        "My Documents",
        "NTUSER.DAT",
        "NetHood",
        "PrintHood",
        "Recent",
        "SendTo",
        "Start Menu",
        "Templates",
        "ntuser.dat.LOG1",
        "ntuser.dat.LOG2",
        "My Music",
        "My Pictures",
        "My Videos",
        "Kommito",
    )
)


def is_system_file(name: str) -> bool:
    """Return True if the name is one that must never be tracked."""
    return name.lower() in _SYSTEM_FILES


def add_file(path: str) -> list[str]:
    """Stage a file, or every regular file of the current directory for ".".

    Returns the names that were staged.
    """
    if path != ".":
        _add_single_file(path)
        return [path]

    try:
        with os.scandir(".") as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        raise RepoError(f"failed to read directory: {exc}") from exc

    added: list[str] = []
    for entry in entries:
        if is_system_file(entry.name) or entry.is_dir(follow_symlinks=False):
            continue
        try:
            _add_single_file(entry.name)
        except RepoError as exc:
            print(f"(╥﹏╥) Could not add {entry.name}: {exc}")
            continue
        added.append(entry.name)

    if added:
        print(f"(＾▽＾) Successfully added {len(added)} files!")
    else:
        print("(⊙_☉) No files to add!")
    return added


def _add_single_file(file_path: str) -> None:
    if is_system_file(file_path):
        raise RepoError(f"skipping system file: {file_path}")

    try:
        with open(file_path, "rb") as handle:
            content = handle.read()
    except OSError as exc:
        raise RepoError(f"failed to open file: {exc}") from exc

    digest = hashlib.sha1(content).hexdigest()

    try:
        (BLOBS_DIR / digest).write_bytes(content)
    except OSError as exc:
        raise RepoError(f"failed to write blob: {exc}") from exc

    try:
        with open(INDEX_FILE, "a", encoding="utf-8", newline="") as index:
            index.write(f"{digest} {file_path}\n")
    except OSError as exc:
        raise RepoError(f"failed to update index: {exc}") from exc