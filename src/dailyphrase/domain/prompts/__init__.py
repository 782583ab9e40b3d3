"""Prompt templates for phrase generation"""

from dailyphrase.domain.prompts.phrase_prompts import PhrasePromptBuilder

__all__ = ["PhrasePromptBuilder"]
