"""
Commit Message Generator

Drafts a conventional commit message for staged git changes and commits it
after interactive confirmation.
"""

__version__ = "1.0.0"

# Closed set of commit types - single source of truth
# Used by: prompts/builder.py, llm/base.py (extraction)
COMMIT_TYPE_NAMES = ('feat', 'fix', 'refactor', 'docs', 'style', 'test', 'chore', 'perf')

DEFAULT_MESSAGE = "chore: update code"

# Diff budget in characters, not lines
DEFAULT_MAX_DIFF_CHARS = 6000
