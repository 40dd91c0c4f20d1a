"""Command-line entry point."""

from __future__ import annotations

import argparse
from functools import partial

from .branch import BranchManager
from .checkout import checkout_target
from .clone import clone_repo
from .commit import commit_staged
from .history import log_commits
from .initialize import RepoError, init_repo
from .merge import merge_branches
from .staging import add_file
from .status import status

_DESCRIPTION = """(｡•́︿•̀｡) Kommito is a lightweight version control system inspired by Git.

🔮 Usage:
   kommito <command>

🧭 Available Commands:
   init    ⚙️  Initialize a brand new Kommito repo
   add     ➕  Stage files for commit
   commit  📝  Commit staged files
   log     📜  Show commit history
   status  🧭  Show repo status
   clone   📋  Clone a repository
   branch  🌿  Manage branches"""

_BRANCH_DESCRIPTION = """Manage branches in your repository.

Available subcommands:
  list     List all branches
  create   Create a new branch
  switch   Switch to a branch
  delete   Delete a branch"""

_MISSING_MESSAGE = """(⊙_☉) You need to provide a commit message!

✨ Example:
   kommito commit --message "Initial commit\""""


def _print_help(parser: argparse.ArgumentParser, _args: argparse.Namespace) -> int:
    parser.print_help()
    return 0


def _run_init(_args: argparse.Namespace) -> int:
    print(
        "(｀• ω •´)ゞ Roger that!\n\n"
        "⚒️  Spinning up your Kommito engine...\n"
        "🗂️  Setting up the repository chamber..."
    )
    try:
        init_repo()
    except RepoError as exc:
        print(f"(╥﹏╥) Oops! Something went wrong: {exc}")
        return 1
    print("✨ Repository initialized successfully!")
    return 0


def _run_add(args: argparse.Namespace) -> int:
    print("(ง •_•)ง Staging files...")
    try:
        add_file(args.file)
    except RepoError as exc:
        print(f"(╥﹏╥) Could not add files: {exc}")
        return 1
    return 0


def _run_commit(args: argparse.Namespace) -> int:
    if not args.message:
        print(_MISSING_MESSAGE)
        return 1
    print("(ﾉ◕ヮ◕)ﾉ*:･ﾟ✧ Creating your commit...")
    try:
        commit_staged(args.message)
    except RepoError as exc:
        print(f"(╥﹏╥) Commit failed: {exc}")
        return 1
    print("(づ｡◕‿‿◕｡)づ Commit created successfully!")
    return 0


def _run_log(_args: argparse.Namespace) -> int:
    try:
        log_commits()
    except RepoError as exc:
        print(f"(╥﹏╥) Could not show log: {exc}")
    return 0


def _run_status(_args: argparse.Namespace) -> int:
    status()
    return 0


def _run_clone(args: argparse.Namespace) -> int:
    print("(ﾉ◕ヮ◕)ﾉ*:･ﾟ✧ Cloning repository...")
    try:
        clone_repo(args.source, args.destination)
    except RepoError as exc:
        print(f"(╥﹏╥) Clone failed: {exc}")
        return 1
    print("(づ｡◕‿‿◕｡)づ Repository cloned successfully!")
    return 0


def _run_branch_list(_args: argparse.Namespace) -> int:
    manager = BranchManager(".")
    try:
        branches = manager.list_branches()
    except RepoError as exc:
        print(f"(╥﹏╥) Could not list branches: {exc}")
        return 1
    try:
        current = manager.get_current_branch()
    except RepoError:
        current = ""
    print("🌿 Branches:")
    for branch in branches:
        marker = "→ " if branch.name == current else "  "
        print(f"{marker}{branch.name}")
    return 0


def _run_branch_create(args: argparse.Namespace) -> int:
    try:
        BranchManager(".").create_branch(args.name)
    except RepoError as exc:
        print(f"(╥﹏╥) Could not create branch: {exc}")
        return 1
    print(f"✨ Branch '{args.name}' created successfully!")
    return 0


def _run_branch_switch(args: argparse.Namespace) -> int:
    try:
        BranchManager(".").switch_branch(args.name)
    except RepoError as exc:
        print(f"(╥﹏╥) Could not switch branch: {exc}")
        return 1
    print(f"✨ Switched to branch '{args.name}'")
    return 0


def _run_branch_delete(args: argparse.Namespace) -> int:
    try:
        BranchManager(".").delete_branch(args.name)
    except RepoError as exc:
        print(f"(╥﹏╥) Could not delete branch: {exc}")
        return 1
    print(f"✨ Branch '{args.name}' deleted successfully!")
    return 0


def _run_merge(args: argparse.Namespace) -> int:
    try:
        merge_branches(args.branch)
    except RepoError as exc:
        print(f"Merge failed: {exc}")
        return 1
    return 0


def _run_checkout(args: argparse.Namespace) -> int:
    try:
        checkout_target(args.target)
    except RepoError as exc:
        print(f"Checkout failed: {exc}")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every command and subcommand."""
    parser = argparse.ArgumentParser(
        prog="kommito",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    commands.add_parser(
        "init", help="Initialize a new Kommito repository"
    ).set_defaults(handler=_run_init)

    add = commands.add_parser("add", help="Stage files for commit")
    add.add_argument("file")
    add.set_defaults(handler=_run_add)

    commit = commands.add_parser("commit", help="Commit staged files")
    commit.add_argument("-m", "--message", required=True, help="Commit message")
    commit.set_defaults(handler=_run_commit)

    commands.add_parser("log", help="Show commit history").set_defaults(
        handler=_run_log
    )
    commands.add_parser("status", help="Show repository status").set_defaults(
        handler=_run_status
    )

    clone = commands.add_parser("clone", help="Clone a repository")
    clone.add_argument("source")
    clone.add_argument("destination")
    clone.set_defaults(handler=_run_clone)

    branch = commands.add_parser(
        "branch",
        help="Manage branches",
        description=_BRANCH_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    branch.set_defaults(handler=partial(_print_help, branch))
    branch_commands = branch.add_subparsers(dest="branch_command", metavar="<subcommand>")
    branch_commands.add_parser("list", help="List all branches").set_defaults(
        handler=_run_branch_list
    )
    for name, help_text, handler in (
        ("create", "Create a new branch", _run_branch_create),
        ("switch", "Switch to a branch", _run_branch_switch),
        ("delete", "Delete a branch", _run_branch_delete),
    ):
        sub = branch_commands.add_parser(name, help=help_text)
        sub.add_argument("name")
        sub.set_defaults(handler=handler)

    merge = commands.add_parser(
        "merge", help="Merge a branch into the current branch"
    )
    merge.add_argument("branch")
    merge.set_defaults(handler=_run_merge)

    checkout = commands.add_parser(
        "checkout", help="Restore working directory to a commit or branch"
    )
    checkout.add_argument("target", metavar="commit-or-branch")
    checkout.set_defaults(handler=_run_checkout)

    return parser


def main(argv=None) -> int:
    """Run the command line and return its exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args)