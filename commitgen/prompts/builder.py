"""Prompt Builder - Construct localized prompts for drafting and refining."""

from commitgen import COMMIT_TYPE_NAMES, DEFAULT_MAX_DIFF_CHARS
from commitgen.lang import Language

MAX_SUBJECT_LENGTH = 50

# Per-language text blocks for the draft prompt
_DRAFT_TEXT = {
    Language.EN: {
        'intro': "Analyze git changes and generate commit message in conventional commits format.",
        'diff_label': "Diff (first {max_chars} characters):",
        'rules_title': "STRICT RULES:",
        'rules': [
            "Format: <type>(<scope>): <subject>",
            "Type: {types}",
            "Subject in PAST TENSE (what WAS DONE), max {max_len} characters, no period",
            "Use verbs like: added, fixed, updated, removed, refactored",
            'WRONG: "add feature", "fix bug", "update styles"',
            'CORRECT: "added feature", "fixed bug", "updated styles"',
        ],
        'examples': [
            "feat(auth): added Google OAuth provider",
            "fix(api): fixed validation error in user endpoint",
            "refactor(store): optimized cart state management",
            "docs(readme): updated installation instructions",
        ],
        'closing': "Return ONLY the commit message (one line), no explanations.",
    },
    Language.UA: {
        'intro': "Проаналізуй git зміни та згенеруй commit message у форматі conventional commits.",
        'diff_label': "Diff (перші {max_chars} символів):",
        'rules_title': "СУВОРІ ПРАВИЛА:",
        'rules': [
            "Формат: <type>(<scope>): <subject>",
            "Type: {types}",
            "Subject ТІЛЬКИ у МИНУЛОМУ ЧАСІ (що ЗРОБЛЕНО), макс {max_len} символів, без крапки",
            "Використовуй дієслова: додано, виправлено, оновлено, видалено, рефакторено",
            'НЕПРАВИЛЬНО: "додати функцію", "виправити баг", "оновити стилі"',
            'ПРАВИЛЬНО: "додано функцію", "виправлено баг", "оновлено стилі"',
        ],
        'examples': [
            "feat(auth): додано Google OAuth провайдер",
            "fix(api): виправлено помилку валідації в user endpoint",
            "refactor(store): оптимізовано управління станом корзини",
            "docs(readme): оновлено інструкції встановлення",
        ],
        'closing': "Поверни ТІЛЬКИ commit message (один рядок), без пояснень.",
    },
}

_EXAMPLES_TITLE = {
    Language.EN: "Examples:",
    Language.UA: "Приклади:",
}

_REFINE_INSTRUCTION = {
    Language.EN: "Fix commit message according to this feedback. Keep conventional commits format.",
    Language.UA: "Виправ commit message згідно з цим feedback. Збережи формат conventional commits.",
}


class PromptBuilder:
    """Builds the single user turn sent to either backend."""

    def build_draft(self, status: str, diff: str, lang: Language, max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
        text = _DRAFT_TEXT[lang]
        sections = [
            text['intro'],
            f"Status:\n{status.rstrip()}",
            f"{text['diff_label'].format(max_chars=max_diff_chars)}\n{diff}",
            self._build_rules_section(text),
            self._build_examples_section(text, lang),
            text['closing'],
        ]
        return '\n\n'.join(sections)

    def build_refine(self, original: str, feedback: str, lang: Language) -> str:
        sections = [
            _REFINE_INSTRUCTION[lang],
            f"Original message: {original}",
            f"Feedback: {feedback}",
            "Return ONLY the updated commit message, no explanations.",
        ]
        return '\n\n'.join(sections)

    def _build_rules_section(self, text: dict) -> str:
        types = '/'.join(COMMIT_TYPE_NAMES)
        rules = [rule.format(types=types, max_len=MAX_SUBJECT_LENGTH) for rule in text['rules']]
        return '\n'.join([text['rules_title']] + [f"- {rule}" for rule in rules])

    def _build_examples_section(self, text: dict, lang: Language) -> str:
        return '\n'.join([_EXAMPLES_TITLE[lang]] + text['examples'])
