"""Event receiver — turns raw storage broadcasts into classified prompt requests."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from storage_prompt.core.classifier import StorageEventClassifier, StorageEvent
from storage_prompt.core.errors import InvalidEvent
from storage_prompt.core.models import (
    DiskScanned,
    PromptRequest,
    VolumeState,
    VolumeStateChanged,
)

logger = logging.getLogger(__name__)

ACTION_DISK_SCANNED = "disk_scanned"
ACTION_VOLUME_STATE_CHANGED = "volume_state_changed"

EventParser = Callable[[dict[str, Any]], StorageEvent]


def parse_disk_scanned(payload: dict[str, Any]) -> DiskScanned:
    count = payload.get("volume_count")
    if count is not None:
        try:
            count = int(count)
        except (TypeError, ValueError):
            raise InvalidEvent(f"volume_count is not an integer: {count!r}")
    return DiskScanned(disk_id=payload.get("disk_id"), volume_count=count)


def parse_volume_state_changed(payload: dict[str, Any]) -> VolumeStateChanged:
    raw_state = payload.get("state")
    try:
        state = VolumeState(raw_state)
    except ValueError:
        raise InvalidEvent(f"unknown volume state: {raw_state!r}")
    return VolumeStateChanged(volume_id=payload.get("volume_id"), new_state=state)


class StorageEventReceiver:
    """Routes named storage events to the classifier and launches prompts."""

    def __init__(
        self,
        classifier: StorageEventClassifier,
        launch: Callable[[PromptRequest], None],
    ):
        self.classifier = classifier
        self.launch = launch
        self._parsers: dict[str, EventParser] = {
            ACTION_DISK_SCANNED: parse_disk_scanned,
            ACTION_VOLUME_STATE_CHANGED: parse_volume_state_changed,
        }

    def register(self, action: str, parser: EventParser) -> None:
        self._parsers[action] = parser

    def actions(self) -> list[str]:
        return list(self._parsers.keys())

    def on_receive(
        self, action: str, payload: Optional[dict[str, Any]] = None
    ) -> Optional[PromptRequest]:
        parser = self._parsers.get(action)
        if parser is None:
            logger.debug("Ignoring unhandled action %r", action)
            return None

        try:
            event = parser(payload or {})
        except InvalidEvent as e:
            logger.error("%s with invalid payload: %s", action, e)
            return None

        request = self.classifier.handle(event)
        if request is not None:
            self.launch(request)
        return request
