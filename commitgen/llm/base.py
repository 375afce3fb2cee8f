"""LLM Base Classes and Shared Code"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from commitgen import COMMIT_TYPE_NAMES, DEFAULT_MAX_DIFF_CHARS, DEFAULT_MESSAGE
from commitgen.lang import Language
from commitgen.prompts import PromptBuilder

TYPES_PATTERN = '|'.join(COMMIT_TYPE_NAMES)

COMMIT_LINE_RE = re.compile(rf'^({TYPES_PATTERN})(\([^)]+\))?:.+')

# Same shape after a same-line lead-in ("Sure! feat: ..."); "prefix:" must not read as "fix:"
EMBEDDED_COMMIT_RE = re.compile(rf'(?<![\w-])({TYPES_PATTERN})(\([^)]+\))?:.+')


def extract_commit_line(text: str, fallback: str = DEFAULT_MESSAGE) -> str:
    """Pick the commit message out of free-form model output.

    First pass: the last non-empty line that starts with `type(scope): ...`.
    Second pass, only when no line starts that way: the last line containing
    one after some lead-in text, cut to start at the type. Otherwise the last
    non-empty line, then `fallback` when the output is blank.
    """
    lines = [line.strip().strip('`').strip() for line in text.splitlines()]
    lines = [line for line in lines if line]

    for line in reversed(lines):
        if COMMIT_LINE_RE.match(line):
            return line

    for line in reversed(lines):
        match = EMBEDDED_COMMIT_RE.search(line)
        if match:
            return line[match.start():].strip('`').strip()

    return lines[-1] if lines else fallback


@dataclass
class LLMResponse:
    """Structured response from any backend."""
    content: str
    model: str = ""
    tokens_used: int = 0


class LLMError(Exception):
    """Raised when LLM operations fail."""
    pass


class NoBackendError(LLMError):
    """Raised when neither backend can be used."""
    pass


class LLMClient(ABC):
    """Abstract base for generation backends."""

    DRAFT_MAX_TOKENS = 500
    REFINE_MAX_TOKENS = 300

    # Kept for --verbose stats
    last_prompt: str = ""
    last_response: LLMResponse | None = None

    @abstractmethod
    def generate(self, prompt: str, max_tokens: int | None = None) -> LLMResponse:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def draft(self, status: str, diff: str, lang: Language, max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
        """Draft a new commit message from the staged status and diff."""
        prompt = PromptBuilder().build_draft(status, diff, lang, max_diff_chars)
        response = self._complete(prompt, self.DRAFT_MAX_TOKENS)
        return extract_commit_line(response.content)

    def refine(self, original: str, feedback: str, lang: Language) -> str:
        """Patch an existing message according to user feedback."""
        prompt = PromptBuilder().build_refine(original, feedback, lang)
        response = self._complete(prompt, self.REFINE_MAX_TOKENS)
        return extract_commit_line(response.content, fallback=original)

    def _complete(self, prompt: str, max_tokens: int) -> LLMResponse:
        self.last_prompt = prompt
        self.last_response = None
        self.last_response = self.generate(prompt, max_tokens=max_tokens)
        return self.last_response
