"""Ordered-fallback generator over the available backends."""

from typing import Callable, Optional

from commitgen import DEFAULT_MAX_DIFF_CHARS
from commitgen.config import Config
from commitgen.lang import Language
from commitgen.llm.base import LLMClient, LLMError, NoBackendError
from commitgen.llm.claude import ClaudeClient
from commitgen.llm.claude_cli import ClaudeCLIClient

# (failed client, error, next client)
FallbackHook = Callable[[LLMClient, LLMError, LLMClient], None]


def available_clients(config: Optional[Config] = None) -> list[LLMClient]:
    """Instantiate every backend whose precondition holds, remote API first."""
    config = config or Config()
    factories = [
        lambda: ClaudeClient(model=config.model, temperature=config.temperature),
        lambda: ClaudeCLIClient(command=config.cli_command),
    ]
    clients = []
    for factory in factories:
        try:
            clients.append(factory())
        except LLMError:
            continue
    return clients


class CommitMessageGenerator:
    """Tries each backend once, in order, until one produces a message."""

    def __init__(self, clients: list[LLMClient], on_fallback: Optional[FallbackHook] = None):
        self.clients = list(clients)
        self.on_fallback = on_fallback
        self.last_client: Optional[LLMClient] = None

    @classmethod
    def from_config(cls, config: Config, on_fallback: Optional[FallbackHook] = None) -> 'CommitMessageGenerator':
        return cls(available_clients(config), on_fallback=on_fallback)

    @property
    def has_backend(self) -> bool:
        return bool(self.clients)

    def draft(self, status: str, diff: str, lang: Language, max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
        return self._first_success(lambda client: client.draft(status, diff, lang, max_diff_chars))

    def refine(self, original: str, feedback: str, lang: Language) -> str:
        return self._first_success(lambda client: client.refine(original, feedback, lang))

    def _first_success(self, call: Callable[[LLMClient], str]) -> str:
        if not self.clients:
            raise NoBackendError("No LLM backend available")

        last_error = None
        for i, client in enumerate(self.clients):
            try:
                result = call(client)
            except LLMError as e:
                last_error = e
                if self.on_fallback and i + 1 < len(self.clients):
                    self.on_fallback(client, e, self.clients[i + 1])
                continue
            self.last_client = client
            return result

        raise LLMError(str(last_error))
