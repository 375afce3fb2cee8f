"""Language selection and localized terminal texts."""

import os
from enum import Enum
from typing import Mapping, Optional

LANG_ENV_VAR = "COMMIT_LANG"


class Language(str, Enum):
    EN = "EN"
    UA = "UA"


DEFAULT_LANGUAGE = Language.EN


def parse_language(value: Optional[str]) -> Optional[Language]:
    """Return the Language for a two-letter code, or None if unrecognized."""
    if not value:
        return None
    try:
        return Language(value.strip().upper())
    except ValueError:
        return None


def select_language(cli_value: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Language:
    """Resolve the language for prompts and messages.

    Precedence: COMMIT_LANG environment variable, then the --lang flag, then
    the default. Unrecognized values are skipped, never reported.
    """
    environ = os.environ if environ is None else environ
    return (
        parse_language(environ.get(LANG_ENV_VAR))
        or parse_language(cli_value)
        or DEFAULT_LANGUAGE
    )


MESSAGES = {
    Language.EN: {
        'title': "Git Commit Generator",
        'language': "Language: English",
        'no_staged': "No staged changes. Stage files first with git add",
        'git_failed': "Failed to read staged changes: {error}",
        'generating': "Generating commit message via {backend}...",
        'backend_failed': "{backend} unavailable: {error}",
        'switching': "Switching to {backend}...",
        'no_backend': "No way to generate a commit message found",
        'no_backend_hint': (
            "Choose one of:\n"
            "  1. Set ANTHROPIC_API_KEY:\n"
            "     export ANTHROPIC_API_KEY='your-key-here'\n"
            "  2. Install the Claude Code CLI: https://docs.claude.com/claude-code"
        ),
        'all_failed': "No available method to generate a commit message: {error}",
        'generated': "Generated commit message:",
        'confirm': "Confirm and commit?",
        'key_yes': "yes",
        'key_edit': "edit",
        'key_no': "cancel",
        'interrupted': "Cancelled (Ctrl+C)",
        'cancelled': "Commit cancelled",
        'current': "Current message: {message}",
        'feedback': "What to fix? (Enter - keep as is): ",
        'refining': "Refining commit message...",
        'manual': "AI unavailable, type the message manually:",
        'new_message': "New message: ",
        'refine_failed': "Refining failed: {error}",
        'commit_done': "Commit created successfully!",
        'commit_failed': "Failed to create commit: {error}",
        'critical': "Critical error: {error}",
    },
    Language.UA: {
        'title': "Git Commit Generator",
        'language': "Мова: Українська",
        'no_staged': "Немає staged changes. Спочатку додайте файли через git add",
        'git_failed': "Помилка при читанні staged changes: {error}",
        'generating': "Генерую commit message через {backend}...",
        'backend_failed': "{backend} недоступний: {error}",
        'switching': "Переключаюсь на {backend}...",
        'no_backend': "Не знайдено способу генерації commit message",
        'no_backend_hint': (
            "Оберіть один з варіантів:\n"
            "  1. Встановіть ANTHROPIC_API_KEY:\n"
            "     export ANTHROPIC_API_KEY='your-key-here'\n"
            "  2. Встановіть Claude Code CLI: https://docs.claude.com/claude-code"
        ),
        'all_failed': "Немає доступних методів для генерації commit message: {error}",
        'generated': "Згенерований commit message:",
        'confirm': "Підтвердити та виконати commit?",
        'key_yes': "так",
        'key_edit': "редагувати",
        'key_no': "скасувати",
        'interrupted': "Скасовано (Ctrl+C)",
        'cancelled': "Commit скасовано",
        'current': "Поточний message: {message}",
        'feedback': "Що треба виправити? (Enter - залишити як є): ",
        'refining': "Редагую commit message...",
        'manual': "AI недоступний, введіть message вручну:",
        'new_message': "Новий message: ",
        'refine_failed': "Помилка редагування: {error}",
        'commit_done': "Commit успішно створено!",
        'commit_failed': "Помилка при створенні commit: {error}",
        'critical': "Критична помилка: {error}",
    },
}


def message(lang: Language, key: str, **fields) -> str:
    text = MESSAGES[lang][key]
    return text.format(**fields) if fields else text
