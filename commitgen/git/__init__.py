"""Git Operations Package"""

from commitgen.git.analyzer import GitAnalyzer, GitError, NoStagedChangesError, StagedChanges, DEFAULT_MAX_DIFF_CHARS

__all__ = [
    "GitAnalyzer",
    "GitError",
    "NoStagedChangesError",
    "StagedChanges",
    "DEFAULT_MAX_DIFF_CHARS",
]
