"""Storage event classifier — decides whether new media warrants a prompt."""

from __future__ import annotations

import logging
from typing import Optional, Union

from storage_prompt.core.errors import InvalidEvent
from storage_prompt.core.models import (
    DiskScanned,
    PromptRequest,
    Volume,
    VolumeStateChanged,
    VolumeType,
)
from storage_prompt.providers.base import StorageProvider

logger = logging.getLogger(__name__)

StorageEvent = Union[DiskScanned, VolumeStateChanged]


class StorageEventClassifier:
    """Pure decision logic over disk-scanned and volume-state-changed events.

    Only reads from the provider; never writes volume records.
    """

    def __init__(self, provider: StorageProvider):
        self.provider = provider

    def handle(self, event: StorageEvent) -> Optional[PromptRequest]:
        """Classify any event, logging and dropping malformed ones."""
        try:
            if isinstance(event, DiskScanned):
                return self.on_disk_scanned(event)
            if isinstance(event, VolumeStateChanged):
                return self.on_volume_state_changed(event)
        except InvalidEvent as e:
            logger.error("Dropping invalid storage event %r: %s", event, e)
            return None
        logger.debug("Ignoring unsupported event %r", event)
        return None

    def on_disk_scanned(self, event: DiskScanned) -> Optional[PromptRequest]:
        """Prompt to erase a disk that has media but no usable volumes.

        Raises:
            InvalidEvent: If the event carries no disk id.
        """
        disk_id = event.disk_id
        if not disk_id:
            raise InvalidEvent("disk scanned event with no disk id")

        disk = self.provider.find_disk_by_id(disk_id)
        if disk is None:
            logger.debug("Disk ID %s is not known, ignoring scan", disk_id)
            return None
        if disk.size <= 0:
            logger.debug("Disk ID %s has no media", disk_id)
            return None

        volume_count = event.volume_count
        if volume_count is None:
            volume_count = disk.volume_count
        # Literal != 0: negative sentinels from upstream also suppress.
        if volume_count != 0:
            logger.debug(
                "Disk ID %s has usable volumes, waiting for mount", disk_id
            )
            return None

        logger.info("Disk ID %s has no usable volumes, prompting", disk_id)
        return PromptRequest(
            disk_id=disk_id,
            description=disk.description or disk.label or disk_id,
        )

    def on_volume_state_changed(
        self, event: VolumeStateChanged
    ) -> Optional[PromptRequest]:
        """Prompt for a freshly mounted, never-seen public volume on an adoptable disk.

        Raises:
            InvalidEvent: If a mount event carries no volume id.
        """
        if not event.new_state.is_mounted:
            return None
        if not event.volume_id:
            raise InvalidEvent("volume mounted event with no volume id")

        volume = self._resolve_volume(event.volume_id)
        if volume is None:
            logger.debug("Volume %s is not in the volume list", event.volume_id)
            return None

        logger.debug("Scanning volume: %s", volume)
        if volume.type is not VolumeType.PUBLIC or not volume.fs_uuid:
            return None

        record = self.provider.find_record_by_uuid(volume.fs_uuid)
        if record is not None and (record.inited or record.snoozed):
            logger.debug(
                "Volume %s (%s) already handled by the user",
                volume.id, volume.fs_uuid,
            )
            return None

        disk = (
            self.provider.find_disk_by_id(volume.disk_id)
            if volume.disk_id else None
        )
        if disk is None or not disk.adoptable:
            return None

        description = (
            self.provider.get_best_volume_description(volume)
            or disk.description
            or volume.id
        )
        logger.info("New adoptable volume %s on disk %s", volume.id, disk.id)
        return PromptRequest(
            volume_id=volume.id, disk_id=disk.id, description=description
        )

    def _resolve_volume(self, volume_id: str) -> Optional[Volume]:
        for volume in self.provider.list_volumes():
            if volume.id == volume_id:
                return volume
        return None
