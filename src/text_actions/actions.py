# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Action requests and the per-category validation gate.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import NilRequestError, ValidationError
from .utils import is_blank


@dataclass
class ActionRequest:
    """A single transformation request: which action, on what text."""
    id: str
    input_text: str
    input_language: str = ""
    output_language: str = ""
    output_text: str = ""  # Scratch space for callers, unused by the pipeline

    @classmethod
    def from_dict(cls, data: dict) -> "ActionRequest":
        """Build from the camelCase wire form used by UI clients."""
        return cls(
            id=data.get("id", ""),
            input_text=data.get("inputText", ""),
            input_language=data.get("inputLanguageId", ""),
            output_language=data.get("outputLanguageId", ""),
            output_text=data.get("outputText", ""),
        )


def validate_action_request(request: Optional[ActionRequest], is_translation: bool) -> None:
    """
    Check that a request carries what its category needs.

    Rules are applied in order and the first failure wins. Language fields
    are only required for translation; other categories ignore them.

    Raises:
        NilRequestError: If request is None
        ValidationError: On the first blank required field
    """
    if request is None:
        raise NilRequestError()
    if is_blank(request.id):
        raise ValidationError("invalid action id")
    if is_blank(request.input_text):
        raise ValidationError("invalid action input")
    if is_translation:
        if is_blank(request.input_language):
            raise ValidationError("invalid input language")
        if is_blank(request.output_language):
            raise ValidationError("invalid output language")
