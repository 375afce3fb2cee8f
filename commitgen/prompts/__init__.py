"""Prompt Construction Package"""

from commitgen.prompts.builder import PromptBuilder, MAX_SUBJECT_LENGTH

__all__ = ["PromptBuilder", "MAX_SUBJECT_LENGTH"]
