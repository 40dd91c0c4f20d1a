# kommito

A lightweight version control system for the command line. It keeps its data
in a `.kommito` directory inside the directory you work in. That directory holds
blob and commit objects, an index of staged files, `HEAD`, branch records under
`refs/heads` and a `config.json`.

## Installation

```
pip install .
```

This installs the `kommito` command.

## Usage

To create a repository in the current directory, run:

```
kommito init
```

To stage one file, or every regular file in the current directory, run one of:

```
kommito add notes.txt
kommito add .
```

Staging stores a copy of the file under its SHA-1 hash. It also appends a line
to the index. Directories and names such as `.git` and `.kommito` are skipped.

To commit everything in the index, run one of the following. The message is
required:

```
kommito commit --message "Initial commit"
kommito commit -m "Another change"
```

The author comes from the `name` field of `.kommito/config.json`. If that field
is missing, the author is "Kommito User".

To show the commit that `HEAD` points at, run:

```
kommito log
```

To show the state of the working directory, run:

```
kommito status
```

`status` prints three lists:

- staged files
- staged files whose content has changed since staging
- files that are not tracked

### Branches

```
kommito branch list
kommito branch create feature
kommito branch switch feature
kommito branch delete feature
```

A branch records the content of `HEAD` at the moment it was created.

- `switch` copies that record back into `HEAD`.
- The current branch is the first branch whose record matches `HEAD`. It is
  marked with `→` in `branch list`.
- You cannot delete the current branch.

### Merge

```
kommito merge feature
```

`merge` looks up each blob of the named branch's commit in the index. It writes
the blob's content to the path that blob was staged from. If a blob has no
staged path, the merge fails.

### Checkout

```
kommito checkout feature
kommito checkout <commit-hash>
```

`checkout` first checks that the branch or commit exists. It then removes the
regular files in the current directory that are not in the index, and writes
every indexed file back from its stored blob. When the target is a branch,
`HEAD` is moved to that branch's record.

### Cloning

To copy a local repository, run:

```
kommito clone path/to/source path/to/destination
```

This copies the `.kommito` directory and every file listed in the source's
index.

If the source starts with `http` or `git@`, it is fetched with `git clone`. Its
files are then imported into a new repository as the commit "Initial commit
from Git repository". For this to work, `git` must be on your `PATH`.

## Using it from Python

Each operation is available as a function that works on the current directory:

```python
from kommito.initialize import init_repo
from kommito.staging import add_file
from kommito.commit import commit_staged
from kommito.history import log_commits
from kommito.branch import BranchManager

init_repo()
add_file("notes.txt")
commit_hash = commit_staged("Initial commit")
commit = log_commits()

manager = BranchManager(".")
manager.create_branch("feature")
print([branch.name for branch in manager.list_branches()])
```

Other entry points:

- `kommito.status.status`
- `kommito.merge.merge_branches`
- `kommito.merge.load_commit`
- `kommito.checkout.checkout_target`
- `kommito.clone.clone_repo`
- `kommito.cli.main`

When an operation fails, it raises `kommito.initialize.RepoError`.

## What it does not do

- Commits do not record a parent. `log` therefore shows only the commit at
  `HEAD`, not a history.
- `merge` does not compare contents and does not write conflict markers.
- There is no diff command.
- There is no way to unstage a file. The index only grows until a new
  repository is initialised.