# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Read-only prompt registry.

Built once from a list of templates and then handed to whoever needs it.
Construction enforces the catalog shape; lookups never mutate anything.
"""

from typing import Dict, Iterable, List, Union

from ..errors import NotFoundError
from ..utils import is_blank
from .models import Category, PromptKind, PromptTemplate


class PromptRegistry:
    """Immutable index of prompt templates by id and by category."""

    def __init__(self, templates: Iterable[PromptTemplate]):
        system: Dict[Category, PromptTemplate] = {}
        users: Dict[str, PromptTemplate] = {}
        by_category: Dict[Category, List[PromptTemplate]] = {}
        seen_ids = set()

        for template in templates:
            if template.id in seen_ids:
                raise ValueError(f"Duplicate prompt id: {template.id}")
            seen_ids.add(template.id)

            if template.kind is PromptKind.SYSTEM:
                if template.category in system:
                    raise ValueError(f"Category {template.category.value} has more than one system prompt")
                system[template.category] = template
            else:
                users[template.id] = template
                by_category.setdefault(template.category, []).append(template)

        for category in by_category:
            if category not in system:
                raise ValueError(f"Category {category.value} has no system prompt")

        self._system = system
        self._users = users
        self._by_category = {c: tuple(ts) for c, ts in by_category.items()}

    def __len__(self) -> int:
        return len(self._users)

    def __contains__(self, prompt_id: object) -> bool:
        return prompt_id in self._users

    def categories(self) -> List[Category]:
        """Categories that carry user actions, in catalog order."""
        return list(self._by_category.keys())

    def get_system_prompt(self, category: Union[Category, str]) -> PromptTemplate:
        resolved = self._resolve_category(category)
        try:
            return self._system[resolved]
        except KeyError:
            raise NotFoundError(f"unknown category: {resolved.value}") from None

    def get_user_prompt(self, prompt_id: str) -> PromptTemplate:
        if is_blank(prompt_id) or prompt_id not in self._users:
            raise NotFoundError(f"unknown prompt id: {prompt_id!r}")
        return self._users[prompt_id]

    def get_user_prompts(self, category: Union[Category, str]) -> List[PromptTemplate]:
        resolved = self._resolve_category(category)
        if resolved not in self._by_category:
            raise NotFoundError(f"unknown category: {resolved.value}")
        return list(self._by_category[resolved])

    # ─────────────────────────────────────────────────────────────────
    # Private methods
    # ─────────────────────────────────────────────────────────────────

    @staticmethod
    def _resolve_category(category: Union[Category, str]) -> Category:
        if isinstance(category, Category):
            return category
        try:
            return Category(category)
        except ValueError:
            raise NotFoundError(f"unknown category: {category!r}") from None
