# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Error taxonomy for Text Actions.

Every pipeline failure is one of these types. The orchestrator fills in
``step`` so the caller can tell which stage failed.
"""

from typing import Optional

from .utils import truncate

# Upstream bodies can be whole HTML error pages
ERROR_BODY_TRUNCATE = 300


class ActionError(Exception):
    """Base class for all Text Actions errors."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def __str__(self) -> str:
        if self.step:
            return f"{self.step}: {self.message}"
        return self.message


class NotFoundError(ActionError, LookupError):
    """Unknown prompt id, category or provider."""


class ValidationError(ActionError, ValueError):
    """Blank or malformed request or settings field."""


class NilRequestError(ValidationError):
    """No request was supplied at all."""

    def __init__(self, message: str = "action request is missing", step: Optional[str] = None):
        super().__init__(message, step)


class BlankTemplateError(ValidationError):
    """Template text is empty or whitespace only."""

    def __init__(self, message: str = "template is blank", step: Optional[str] = None):
        super().__init__(message, step)


class MisconfiguredProviderError(ActionError):
    """Active provider lacks a base URL, completion endpoint, model or token."""


class UpstreamError(ActionError):
    """Transport failure or non-2xx answer from the LLM server."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        step: Optional[str] = None,
    ):
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        if body:
            message = f"{message}: {truncate(body.strip(), ERROR_BODY_TRUNCATE)}"
        super().__init__(message, step)
        self.status_code = status_code
        self.body = body


class EmptyResponseError(ActionError):
    """Completion came back without any choices."""

    def __init__(self, message: str = "no choices returned", step: Optional[str] = None):
        super().__init__(message, step)


class SettingsError(ActionError):
    """Settings could not be loaded or saved."""


__all__ = [
    "ActionError",
    "NotFoundError",
    "ValidationError",
    "NilRequestError",
    "BlankTemplateError",
    "MisconfiguredProviderError",
    "UpstreamError",
    "EmptyResponseError",
    "SettingsError",
]
