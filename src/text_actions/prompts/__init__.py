"""
Prompt catalog, registry and template substitution for Text Actions.

To add a new action:
1. Add a PromptTemplate entry to CATALOG in catalog.py
2. Use {{user_text}} where the text goes, {{user_format}} for the output format,
   and {{input_language}} / {{output_language}} in translation templates

Usage:
    from text_actions.prompts import build_registry, build_user_prompt

    registry = build_registry()
    template = registry.get_user_prompt("proofread")
    system = registry.get_system_prompt(template.category)
"""

from .builder import build_user_prompt, output_format, substitute
from .catalog import CATALOG, build_registry
from .models import (
    OUTPUT_FORMAT_MARKDOWN,
    OUTPUT_FORMAT_PLAIN_TEXT,
    TOKEN_FORMAT,
    TOKEN_INPUT_LANGUAGE,
    TOKEN_OUTPUT_LANGUAGE,
    TOKEN_TEXT,
    Category,
    PromptKind,
    PromptTemplate,
)
from .registry import PromptRegistry

__all__ = [
    "CATALOG",
    "Category",
    "OUTPUT_FORMAT_MARKDOWN",
    "OUTPUT_FORMAT_PLAIN_TEXT",
    "PromptKind",
    "PromptRegistry",
    "PromptTemplate",
    "TOKEN_FORMAT",
    "TOKEN_INPUT_LANGUAGE",
    "TOKEN_OUTPUT_LANGUAGE",
    "TOKEN_TEXT",
    "build_registry",
    "build_user_prompt",
    "output_format",
    "substitute",
]
