# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Template substitution.

Tokens are literal strings; replacement is plain str.replace, so values
are never re-scanned and regex metacharacters have no meaning.
"""

from ..actions import ActionRequest
from ..errors import BlankTemplateError, ValidationError
from ..utils import is_blank
from .models import (
    OUTPUT_FORMAT_MARKDOWN,
    OUTPUT_FORMAT_PLAIN_TEXT,
    TOKEN_FORMAT,
    TOKEN_INPUT_LANGUAGE,
    TOKEN_OUTPUT_LANGUAGE,
    TOKEN_TEXT,
    PromptTemplate,
)


def substitute(token: str, value: str, template: str) -> str:
    """
    Replace every occurrence of token in template with value.

    Args:
        token: Exact placeholder to look for (case and whitespace sensitive)
        value: Replacement text
        template: Template text

    Returns:
        The template with all occurrences replaced, or unchanged if the
        token does not appear.

    Raises:
        BlankTemplateError: If template is empty or whitespace only
        ValidationError: If token is empty or whitespace only
    """
    if is_blank(template):
        raise BlankTemplateError()
    if is_blank(token):
        raise ValidationError("template token is blank")
    if token not in template:
        return template
    return template.replace(token, value)


def output_format(use_markdown: bool) -> str:
    return OUTPUT_FORMAT_MARKDOWN if use_markdown else OUTPUT_FORMAT_PLAIN_TEXT


def build_user_prompt(template: PromptTemplate, request: ActionRequest, use_markdown: bool) -> str:
    """Fill a user template for a request.

    The format token is supplied only when the template has it, language
    tokens only for translation templates. The user's text goes in last so
    tokens typed by the user are left as they are.
    """
    text = template.text

    if TOKEN_FORMAT in text:
        text = substitute(TOKEN_FORMAT, output_format(use_markdown), text)

    if template.category.is_translation:
        text = substitute(TOKEN_INPUT_LANGUAGE, request.input_language, text)
        text = substitute(TOKEN_OUTPUT_LANGUAGE, request.output_language, text)

    return substitute(TOKEN_TEXT, request.input_text, text)
