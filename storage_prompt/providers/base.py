"""StorageProvider — read-only view of the platform storage service."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from storage_prompt.core.models import Disk, Volume, VolumeRecord


class StorageProvider(ABC):
    @abstractmethod
    def find_disk_by_id(self, disk_id: str) -> Optional[Disk]: ...

    @abstractmethod
    def find_volume_by_id(self, volume_id: str) -> Optional[Volume]: ...

    @abstractmethod
    def list_volumes(self) -> list[Volume]: ...

    @abstractmethod
    def find_record_by_uuid(self, fs_uuid: str) -> Optional[VolumeRecord]: ...

    @abstractmethod
    def get_best_volume_description(self, volume: Volume) -> Optional[str]: ...
