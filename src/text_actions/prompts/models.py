# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""Prompt template types."""

from dataclasses import dataclass
from enum import Enum

# Placeholder tokens recognized inside template text
TOKEN_TEXT = "{{user_text}}"
TOKEN_FORMAT = "{{user_format}}"
TOKEN_INPUT_LANGUAGE = "{{input_language}}"
TOKEN_OUTPUT_LANGUAGE = "{{output_language}}"

# Values substituted for TOKEN_FORMAT
OUTPUT_FORMAT_PLAIN_TEXT = "PlainText"
OUTPUT_FORMAT_MARKDOWN = "Markdown"


class Category(Enum):
    """Prompt categories. Values double as group names shown to users."""
    PROOFREADING = "Proofreading"
    REWRITING = "Rewriting"
    FORMATTING = "Formatting"
    SUMMARIZATION = "Summarization"
    TRANSFORMING = "Transforming"
    TRANSLATION = "Translation"
    PROMPT_ENGINEERING = "Prompt Engineering"

    @property
    def is_translation(self) -> bool:
        return self is Category.TRANSLATION


class PromptKind(Enum):
    SYSTEM = "System Prompt"
    USER = "User Prompt"


@dataclass(frozen=True)
class PromptTemplate:
    """One catalog entry: a system prompt for a category, or a user action."""
    id: str
    name: str
    kind: PromptKind
    category: Category
    text: str
