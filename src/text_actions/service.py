# SPDX-License-Identifier: MIT
# Copyright (c) 2025-2026 Soroush Yousefpour
"""
Action service: the surface UI clients and the CLI talk to.

Action groups and language lists are computed on first use and kept for
the life of the process. Two threads racing on first use both compute the
same value; whichever lands last wins.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .actions import ActionRequest
from .completion import CompletionOrchestrator
from .errors import ActionError
from .prompts import PromptRegistry
from .settings import SettingsService
from .utils import Logger, NullLogger


@dataclass(frozen=True)
class Action:
    """One selectable action: catalog id and display text."""
    id: str
    text: str


@dataclass(frozen=True)
class ActionGroup:
    """Actions of one category, in catalog order."""
    name: str
    actions: List[Action] = field(default_factory=list)


class ActionService:
    """Lists actions and processes action requests."""

    def __init__(
        self,
        registry: PromptRegistry,
        orchestrator: CompletionOrchestrator,
        settings: SettingsService,
        logger: Optional[Logger] = None,
    ):
        self._registry = registry
        self._orchestrator = orchestrator
        self._settings = settings
        self._logger = logger or NullLogger()
        self._groups: Optional[List[ActionGroup]] = None
        self._input_languages: Optional[List[str]] = None
        self._output_languages: Optional[List[str]] = None

    def get_action_groups(self) -> List[ActionGroup]:
        if self._groups is not None:
            return self._groups

        groups = []
        for category in self._registry.categories():
            actions = [Action(id=p.id, text=p.name) for p in self._registry.get_user_prompts(category)]
            groups.append(ActionGroup(name=category.value, actions=actions))

        self._logger.debug(
            f"[GetActionGroups] {len(groups)} groups, {sum(len(g.actions) for g in groups)} actions"
        )
        self._groups = groups
        return groups

    def get_action_groups_dict(self) -> dict:
        """Action groups in the camelCase wire form used by UI clients."""
        return {
            "actionGroups": [
                {
                    "groupName": group.name,
                    "groupActions": [{"id": a.id, "text": a.text} for a in group.actions],
                }
                for group in self.get_action_groups()
            ]
        }

    def get_input_languages(self) -> List[str]:
        if self._input_languages is None:
            self._input_languages = list(self._settings.get_current_settings().language_config.languages)
        return self._input_languages

    def get_output_languages(self) -> List[str]:
        if self._output_languages is None:
            self._output_languages = list(self._settings.get_current_settings().language_config.languages)
        return self._output_languages

    def process_action(self, request: Optional[ActionRequest]) -> str:
        """Run a request through the pipeline. Errors are logged and re-raised."""
        try:
            return self._orchestrator.process_action(request)
        except ActionError as e:
            action_id = request.id if request is not None else "<none>"
            self._logger.error(f"[ProcessAction] action '{action_id}' failed: {e}")
            raise
