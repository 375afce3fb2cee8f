"""LLM Client Package"""

from commitgen.llm.base import (
    LLMClient, LLMResponse, LLMError, NoBackendError,
    COMMIT_LINE_RE, EMBEDDED_COMMIT_RE, extract_commit_line,
)
from commitgen.llm.claude import ClaudeClient
from commitgen.llm.claude_cli import ClaudeCLIClient
from commitgen.llm.generator import CommitMessageGenerator, available_clients

__all__ = [
    "LLMClient",
    "LLMResponse",
    "LLMError",
    "NoBackendError",
    "COMMIT_LINE_RE",
    "EMBEDDED_COMMIT_RE",
    "extract_commit_line",
    "ClaudeClient",
    "ClaudeCLIClient",
    "CommitMessageGenerator",
    "available_clients",
]
