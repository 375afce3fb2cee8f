"""Claude Code CLI Client - local command-line fallback backend."""

import shutil
import subprocess

from commitgen.llm.base import LLMClient, LLMResponse, LLMError


class ClaudeCLIClient(LLMClient):
    """Pipes the prompt into a locally installed `claude` command."""

    DEFAULT_COMMAND = "claude"

    def __init__(self, command: str | None = None):
        self.command = command or self.DEFAULT_COMMAND
        self._path = shutil.which(self.command)
        if not self._path:
            raise LLMError(f"'{self.command}' not found in PATH")

    @property
    def name(self) -> str:
        return "Claude Code CLI"

    def generate(self, prompt: str, max_tokens: int | None = None) -> LLMResponse:
        # The prompt travels on stdin as plain data; no shell parses it.
        try:
            result = subprocess.run(
                [self._path],
                input=prompt,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or '').strip()
            raise LLMError(
                f"{self.command} exited with code {e.returncode}"
                + (f": {detail}" if detail else "")
                + f"\nMake sure it works: {self.command} --version"
            )
        except OSError as e:
            raise LLMError(f"Could not run {self.command}: {e}")

        return LLMResponse(content=result.stdout, model=self.command)
