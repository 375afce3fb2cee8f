"""Git Analyzer - Read staged changes and create the commit."""

import subprocess
from dataclasses import dataclass

from commitgen import DEFAULT_MAX_DIFF_CHARS


@dataclass
class StagedChanges:
    """Snapshot of what's staged: the --stat summary and a truncated diff."""
    status: str
    diff: str = ""


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class NoStagedChangesError(GitError):
    """Raised when nothing is staged for commit."""
    pass


class GitAnalyzer:
    """Runs the read-only git queries and the final commit."""

    def __init__(self):
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def get_status(self) -> str:
        """Summary of staged changes ('git diff --cached --stat')."""
        status = self._run_git('diff', '--cached', '--stat')
        if not status.strip():
            raise NoStagedChangesError("No staged changes")
        return status

    def get_diff(self, max_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
        """Staged diff with one line of context, cut at max_chars.

        The cut ignores hunk boundaries, so the tail may be a partial hunk.
        """
        diff = self._run_git('diff', '--cached', '--unified=1')
        return diff[:max_chars]

    def get_staged_changes(self, max_chars: int = DEFAULT_MAX_DIFF_CHARS) -> StagedChanges:
        status = self.get_status()
        return StagedChanges(status=status, diff=self.get_diff(max_chars))

    def commit(self, message: str) -> None:
        """Run 'git commit' with the terminal attached so hook output shows."""
        try:
            subprocess.run(['git', 'commit', '-m', message], check=True)
        except subprocess.CalledProcessError as e:
            raise GitError(f"git commit exited with code {e.returncode}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")
