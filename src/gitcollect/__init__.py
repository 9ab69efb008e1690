"""gitcollect - commit history and diff extraction for git repositories."""

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "collectors",
    "config",
    "file_types",
    "git",
    "github",
]
