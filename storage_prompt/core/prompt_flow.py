"""Prompt flow — three-choice prompt for newly detected storage."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from storage_prompt.core.actions import (
    ActionTargets,
    Choice,
    Prompt,
    PromptAction,
    PromptSurface,
)
from storage_prompt.core.errors import InvalidEvent, MissingDiskId, UnknownVolume
from storage_prompt.core.models import PromptRequest
from storage_prompt.providers.base import StorageProvider

logger = logging.getLogger(__name__)


class FlowState(Enum):
    AWAITING_SELECTION = "awaiting_selection"
    DISPATCHED = "dispatched"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not FlowState.AWAITING_SELECTION


@dataclass(frozen=True)
class PromptStrings:
    title: str = "New storage detected"
    browse: str = "Browse"
    adopt: str = "Set up as device storage"
    eject: str = "Eject"
    icon: str = "floppy_disk"


def build_request(
    provider: StorageProvider,
    volume_id: Optional[str] = None,
    disk_id: Optional[str] = None,
) -> PromptRequest:
    """Build a request from ids alone, resolving the description via the provider.

    Raises:
        InvalidEvent: If neither id is given or the disk is unknown.
        UnknownVolume: If ``volume_id`` is given but not known.
    """
    if not volume_id and not disk_id:
        raise InvalidEvent("Prompt launched without specifying new storage")

    if volume_id:
        volume = provider.find_volume_by_id(volume_id)
        if volume is None:
            raise UnknownVolume(f"Unknown volume: {volume_id!r}")
        disk_id = disk_id or volume.disk_id
        description = provider.get_best_volume_description(volume) or volume_id
    else:
        disk = provider.find_disk_by_id(disk_id)
        if disk is None:
            raise InvalidEvent(f"Unknown disk: {disk_id!r}")
        description = disk.description or disk.label or disk.id

    return PromptRequest(
        volume_id=volume_id or None,
        disk_id=disk_id or None,
        description=description,
    )


class PromptFlow:
    """Await-selection → dispatch/cancel state machine.

    Terminal states are sinks: once dispatched or cancelled, further
    selections are ignored and ``on_finish`` is never called again.
    """

    def __init__(
        self,
        request: PromptRequest,
        targets: ActionTargets,
        provider: Optional[StorageProvider] = None,
        on_finish: Optional[Callable[[FlowState], None]] = None,
        strings: Optional[PromptStrings] = None,
    ):
        self.request: Optional[PromptRequest] = request
        self.targets = targets
        self.provider = provider
        self.on_finish = on_finish
        self.strings = strings or PromptStrings()
        self.state = FlowState.AWAITING_SELECTION
        self.dispatched_action: Optional[PromptAction] = None
        self._prompt = self._build_prompt(request)

    @property
    def prompt(self) -> Prompt:
        return self._prompt

    def _build_prompt(self, request: PromptRequest) -> Prompt:
        s = self.strings
        return Prompt(
            title=s.title,
            description=request.description,
            icon=s.icon,
            choices=(
                Choice(PromptAction.BROWSE, s.browse),
                Choice(PromptAction.ADOPT, s.adopt),
                Choice(PromptAction.EJECT, s.eject),
            ),
        )

    def run(self, surface: PromptSurface) -> FlowState:
        """Present the prompt and block until the surface reports a choice."""
        if self.state.is_terminal:
            return self.state
        action = surface.choose(self._prompt)
        if action is None:
            return self.cancel()
        return self.select(action)

    def select(self, action: PromptAction) -> FlowState:
        if self.state.is_terminal:
            logger.debug(
                "Ignoring %s: prompt already %s", action.value, self.state.value
            )
            return self.state

        request = self.request
        if request is None:
            return self._finish(FlowState.CANCELLED)

        if request.volume_id and self.provider is not None:
            if self.provider.find_volume_by_id(request.volume_id) is None:
                logger.info(
                    "Volume %s went away before selection", request.volume_id
                )
                return self._finish(FlowState.CANCELLED)

        if action is PromptAction.BROWSE:
            self.targets.open_storage_browser()
        elif action is PromptAction.ADOPT:
            try:
                self._adopt(request)
            except MissingDiskId as e:
                logger.warning("Cannot adopt: %s", e)
                return self._finish(FlowState.CANCELLED)
        elif action is PromptAction.EJECT:
            # Nothing mounted yet: eject is just a cancel.
            if not request.volume_id:
                return self._finish(FlowState.CANCELLED)
            self.targets.start_unmount(request.volume_id, request.description)

        self.dispatched_action = action
        return self._finish(FlowState.DISPATCHED)

    def cancel(self) -> FlowState:
        """Abandon the prompt without dispatching anything."""
        if self.state.is_terminal:
            return self.state
        return self._finish(FlowState.CANCELLED)

    def _adopt(self, request: PromptRequest) -> None:
        if not request.disk_id:
            raise MissingDiskId(
                f"request for volume {request.volume_id!r} has no disk id"
            )
        self.targets.start_format_as_private(request.disk_id)

    def _finish(self, state: FlowState) -> FlowState:
        self.state = state
        self.request = None
        if self.on_finish is not None:
            self.on_finish(state)
        return state
