"""Feedback-driven editing of a drafted commit message."""

from typing import Optional

from commitgen.lang import Language, message as msg
from commitgen.llm import CommitMessageGenerator, LLMError
from commitgen.output import Spinner, print_error, print_warning, warning


def _ask(prompt: str) -> Optional[str]:
    try:
        return input(prompt)
    except (KeyboardInterrupt, EOFError):
        print()
        return None


def refine_message(message: str, lang: Language, generator: CommitMessageGenerator) -> str:
    """Ask what to change and return the revised message.

    Blank feedback, a failed backend call or a blank manual entry all keep
    the current message.
    """
    print(f"\n{warning(msg(lang, 'current', message=message))}")
    feedback = (_ask(msg(lang, 'feedback')) or '').strip()
    if not feedback:
        return message

    if not generator.has_backend:
        print_warning(msg(lang, 'manual'))
        manual = (_ask(msg(lang, 'new_message')) or '').strip()
        return manual or message

    try:
        with Spinner(msg(lang, 'refining')):
            return generator.refine(message, feedback, lang)
    except LLMError as e:
        print_error(msg(lang, 'refine_failed', error=e))
        return message
