"""A lightweight version control system: staging, commits, branches, merge, checkout and clone."""

__version__ = "0.1.0"