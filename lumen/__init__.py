"""Git helpers: commit reference parsing, AI-proposed shell commands and diff viewer pieces."""

__version__ = "2.9.1"
__all__ = ["commit_reference", "operate", "diff"]