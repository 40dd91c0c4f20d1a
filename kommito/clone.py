"""Cloning repositories from a local path or a Git remote."""

from __future__ import annotations

import os
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .commit import commit_staged
from .initialize import RepoError, init_repo
from .staging import add_file, is_system_file

GIT_COMMIT_MESSAGE = "Initial commit from Git repository"


def clone_repo(source, destination) -> None:
    """Clone a local repository, or import a Git repository by URL."""
    source = os.fspath(source)
    destination = os.fspath(destination)
    if source.startswith("http") or source.startswith("git@"):
        _clone_git_repo(source, destination)
        return

    source_repo = Path(source) / ".kommito"
    if not source_repo.exists():
        raise RepoError(
            f"source is not a valid Kommito repository: {source_repo} does not exist"
        )

    target = Path(destination)
    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RepoError(f"failed to create destination directory: {exc}") from exc

    try:
        copy_dir(source_repo, target / ".kommito")
    except OSError as exc:
        raise RepoError(f"failed to copy .kommito directory: {exc}") from exc

    try:
        index_text = (source_repo / "index").read_bytes().decode(
            "utf-8", errors="surrogateescape"
        )
    except OSError as exc:
        raise RepoError(f"failed to read index: {exc}") from exc

    for line in index_text.strip().split("\n"):
        if not line:
            continue
        parts = line.split(" ", 1)
        if len(parts) != 2:
            continue
        file_path = parts[1]
        dest_file = target / file_path
        try:
            dest_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepoError(
                f"failed to create parent directories for {file_path}: {exc}"
            ) from exc
        try:
            copy_file(Path(source) / file_path, dest_file)
        except OSError as exc:
            raise RepoError(f"failed to copy file {file_path}: {exc}") from exc


@contextmanager
def _working_directory(path: str) -> Iterator[None]:
    try:
        previous = os.getcwd()
    except OSError as exc:
        raise RepoError(f"failed to get current directory: {exc}") from exc
    try:
        os.chdir(path)
    except OSError as exc:
        raise RepoError(f"failed to change to destination directory: {exc}") from exc
    try:
        yield
    finally:
        os.chdir(previous)


def _clone_git_repo(git_url: str, destination: str) -> None:
    with tempfile.TemporaryDirectory(prefix="kommito-git-") as temp_dir:
        try:
            subprocess.run(
                ["git", "clone", git_url, temp_dir],
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise RepoError(f"failed to clone Git repository: {exc}") from exc

        try:
            os.makedirs(destination, exist_ok=True)
        except OSError as exc:
            raise RepoError(f"failed to create destination directory: {exc}") from exc

        with _working_directory(destination):
            try:
                init_repo()
            except RepoError as exc:
                raise RepoError(
                    f"failed to initialize Kommito repository: {exc}"
                ) from exc

            try:
                with os.scandir(temp_dir) as it:
                    entries = sorted(it, key=lambda entry: entry.name)
            except OSError as exc:
                raise RepoError(f"failed to read Git repository: {exc}") from exc

            added: list[str] = []
            for entry in entries:
                name = entry.name
                if name == ".git" or is_system_file(name):
                    continue
                if entry.is_dir(follow_symlinks=False):
                    try:
                        os.makedirs(name, exist_ok=True)
                    except OSError as exc:
                        print(f"(╥﹏╥) Could not create directory {name}: {exc}")
                        continue
                    try:
                        copy_dir(entry.path, name)
                    except OSError as exc:
                        print(f"(╥﹏╥) Could not copy directory {name}: {exc}")
                        continue
                else:
                    try:
                        copy_file(entry.path, name)
                    except OSError as exc:
                        print(f"(╥﹏╥) Could not copy file {name}: {exc}")
                        continue
                added.append(name)

            try:
                add_file(".")
            except RepoError as exc:
                raise RepoError(f"failed to add files to Kommito: {exc}") from exc

            try:
                commit_staged(GIT_COMMIT_MESSAGE)
            except RepoError as exc:
                raise RepoError(f"failed to create initial commit: {exc}") from exc

            print(f"(＾▽＾) Successfully added {len(added)} files!")


def copy_dir(src, dst) -> None:
    """Copy a directory tree, leaving out system files. Raises OSError."""
    target = Path(dst)
    target.mkdir(parents=True, exist_ok=True)
    with os.scandir(src) as it:
        entries = sorted(it, key=lambda entry: entry.name)
    for entry in entries:
        if is_system_file(entry.name):
            continue
        if entry.is_dir(follow_symlinks=False):
            copy_dir(entry.path, target / entry.name)
        else:
            copy_file(entry.path, target / entry.name)


def copy_file(src, dst) -> None:
    """Copy the bytes of one file to another. Raises OSError."""
    Path(dst).write_bytes(Path(src).read_bytes())