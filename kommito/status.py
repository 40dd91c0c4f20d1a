"""Reporting staged, modified and untracked files."""

from __future__ import annotations

import hashlib
import os

from .initialize import INDEX_FILE


def _read_staged() -> dict[str, str]:
    try:
        text = INDEX_FILE.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError:
        text = ""
    staged: dict[str, str] = {}
    for line in text.strip().split("\n"):
        if not line:
            continue
        parts = line.split(" ", 1)
        if len(parts) == 2:
            staged[parts[1]] = parts[0]
    return staged


def _modified(staged: dict[str, str]) -> list[str]:
    changed = []
    for path, digest in staged.items():
        try:
            with open(path, "rb") as handle:
                content = handle.read()
        except OSError:
            continue
        if hashlib.sha1(content).hexdigest() != digest:
            changed.append(path)
    return changed


def _untracked(staged: dict[str, str]) -> list[str]:
    try:
        with os.scandir(".") as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError:
        return []
    return [
        entry.name
        for entry in entries
        if not entry.is_dir(follow_symlinks=False)
        and entry.name not in (".kommito", ".git")
        and entry.name not in staged
    ]


def _print_section(title: str, marker: str, names: list[str]) -> None:
    print(title)
    if not names:
        print("  (none)")
    for name in names:
        print(f"  {marker} {name}")


def status() -> None:
    """Print the staged, modified and untracked files of the working directory."""
    staged = _read_staged()
    _print_section("🗂️ Staged files:", "➕", list(staged))
    _print_section("\n✏️ Modified but unstaged files:", "📝", _modified(staged))
    _print_section("\n❓ Untracked files:", "❔", _untracked(staged))